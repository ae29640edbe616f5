from typing import Iterable

import numpy as np
import pandas as pd

from .math_tools import MathTools
from .volume_calculator import read_field


def _finite(value) -> float:
    """Return ``value`` as a float, zeroing NaN/inf but keeping negatives."""
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    return num if np.isfinite(num) else 0.0


class TrendTools:
    """Rolling averages and least-squares trendlines for chart series."""

    TREND_THRESHOLD: float = 0.05

    @staticmethod
    def calculate_rolling_average(series: Iterable, window: int) -> list[dict]:
        """Return the trailing mean of ``series`` over ``window`` points.

        ``series`` must already be in ascending date order. The first
        ``window - 1`` points average whatever is available.
        """
        data = list(series or [])
        if not data or window is None or window <= 0:
            return []
        values = pd.Series([_finite(read_field(p, "value")) for p in data], dtype=float)
        averages = values.rolling(window=int(window), min_periods=1).mean()
        return [
            {"date": read_field(p, "date"), "value": round(float(avg), 2)}
            for p, avg in zip(data, averages)
        ]

    @classmethod
    def calculate_linear_regression(
        cls, points: Iterable, threshold: float | None = None
    ) -> dict | None:
        """Fit ``y = slope * x + intercept`` by ordinary least squares.

        Returns ``None`` for fewer than two points or a constant ``x``.
        A fitted change across the x range below ``threshold`` times the
        observed y spread counts as ``stable``.
        """
        data = list(points or [])
        if len(data) < 2:
            return None
        x = np.array([_finite(read_field(p, "x")) for p in data], dtype=float)
        y = np.array([_finite(read_field(p, "y")) for p in data], dtype=float)
        x_mean = np.mean(x)
        y_mean = np.mean(y)
        den = np.sum((x - x_mean) ** 2)
        if den == 0:
            return None
        slope = float(np.sum((x - x_mean) * (y - y_mean)) / den)
        intercept = float(y_mean - slope * x_mean)

        fitted = slope * x + intercept
        ss_res = float(np.sum((y - fitted) ** 2))
        ss_tot = float(np.sum((y - y_mean) ** 2))
        r_squared = 1.0 if ss_tot == 0 else 1 - ss_res / ss_tot

        limit = cls.TREND_THRESHOLD if threshold is None else threshold
        y_range = float(np.ptp(y))
        x_range = float(np.ptp(x))
        relative_change = abs(slope * x_range) / y_range if y_range > 0 else 0.0
        if relative_change < limit:
            trend = "stable"
        elif slope > 0:
            trend = "increasing"
        else:
            trend = "decreasing"

        return {
            "slope": slope,
            "intercept": intercept,
            "predictions": [
                {"x": float(xi), "y": float(yi)} for xi, yi in zip(x, fitted)
            ],
            "r_squared": MathTools.clamp(r_squared, 0.0, 1.0),
            "trend": trend,
            "rate_per_unit": slope,
        }

    @staticmethod
    def scale_rate(rate_per_unit: float, steps_per_period: float) -> float:
        """Convert a per-step slope into a per-period rate."""
        return _finite(rate_per_unit) * _finite(steps_per_period)

    @staticmethod
    def format_trend_rate(slope: float, unit: str, time_unit: str = "day") -> str:
        """Return ``slope`` as e.g. ``"+0.25 kg/day"``."""
        slope = _finite(slope)
        sign = "+" if slope >= 0 else ""
        value = "~0" if abs(slope) < 0.01 else f"{slope:.2f}"
        return f"{sign}{value} {unit}/{time_unit}"


calculate_rolling_average = TrendTools.calculate_rolling_average
calculate_linear_regression = TrendTools.calculate_linear_regression
