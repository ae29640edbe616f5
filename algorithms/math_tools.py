import math
from typing import Iterable

import numpy as np


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    EPLEY_DIVISOR: float = 30.0
    EPSILON: float = 0.0001

    @staticmethod
    def safe_number(value, default: float = 0.0) -> float:
        """Return ``value`` as a finite, non-negative float or ``default``."""
        if value is None or isinstance(value, bool):
            return default
        try:
            num = float(value)
        except (TypeError, ValueError):
            return default
        if not math.isfinite(num) or num < 0:
            return default
        return num

    @staticmethod
    def safe_int(value, default: int = 0) -> int:
        """Return ``value`` truncated to a non-negative int or ``default``."""
        num = MathTools.safe_number(value, float(default))
        return int(num)

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Epley formula."""
        weight = cls.safe_number(weight)
        reps = cls.safe_int(reps)
        if reps <= 0 or weight <= 0:
            return 0.0
        if reps == 1:
            return weight
        return weight * (1 + reps / cls.EPLEY_DIVISOR)

    @classmethod
    def weight_at_reps(cls, one_rep_max: float, reps: int, constant: float | None = None) -> float:
        """Return the weight liftable for ``reps`` given ``one_rep_max``.

        ``constant`` replaces the Epley divisor for personalised curves.
        """
        one_rep_max = cls.safe_number(one_rep_max)
        reps = cls.safe_int(reps)
        if reps <= 0 or one_rep_max <= 0:
            return 0.0
        if reps == 1:
            return one_rep_max
        k = constant if constant and constant > 0 else cls.EPLEY_DIVISOR
        return one_rep_max / (1 + reps / k)

    @staticmethod
    def volume(sets: list[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += MathTools.safe_int(reps) * MathTools.safe_number(weight)
        return vol

    @staticmethod
    def mean(values: Iterable[float]) -> float:
        """Return the arithmetic mean of ``values`` or 0 when empty."""
        data = list(values)
        if not data:
            return 0.0
        return float(np.mean(np.array(data, dtype=float)))
