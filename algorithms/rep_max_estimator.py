import logging
import math
import time
from typing import Iterable, Sequence

from .math_tools import MathTools
from .volume_calculator import read_field

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


class RepMaxEstimator:
    """Estimate the weight liftable at each rep count from logged history.

    The curve follows ``weight = 1RM / (1 + reps / k)``. ``k`` is 30 for the
    plain Epley formula; here it is fitted to the lifter's best sets so the
    curve tracks their actual strength-endurance profile.
    """

    DEFAULT_TARGET_REPS: tuple[int, ...] = tuple(range(1, 13))
    DEFAULT_CONSTANT: float = MathTools.EPLEY_DIVISOR
    CONSTANT_MIN: float = 15.0
    CONSTANT_MAX: float = 60.0
    # (max age in days, weight); anything older gets STALE_WEIGHT
    RECENCY_STEPS: tuple[tuple[int, float], ...] = ((90, 1.0), (180, 0.7), (365, 0.5))
    STALE_WEIGHT: float = 0.3

    @classmethod
    def recency_weight(cls, timestamp_ms: float, now_ms: float) -> float:
        age_days = (MathTools.safe_number(now_ms) - MathTools.safe_number(timestamp_ms)) / DAY_MS
        for max_age, weight in cls.RECENCY_STEPS:
            if age_days <= max_age:
                return weight
        return cls.STALE_WEIGHT

    @classmethod
    def _set_constant(cls, one_rep_max: float, weight: float, reps: int) -> float | None:
        """Return the clamped fatigue constant implied by one set."""
        if reps <= 1 or weight <= 0:
            return None
        denominator = one_rep_max / weight - 1
        if denominator <= 0 or not math.isfinite(denominator):
            return None
        constant = reps / denominator
        if not math.isfinite(constant) or constant < 0:
            return None
        return MathTools.clamp(constant, cls.CONSTANT_MIN, cls.CONSTANT_MAX)

    @classmethod
    def fatigue_constant(
        cls,
        one_rep_max: float,
        best_set_weight: float,
        best_set_reps: int,
        top_sets: Sequence | None = None,
        now_ms: float | None = None,
    ) -> float:
        """Return the recency-weighted fatigue constant ``k``."""
        if now_ms is None:
            now_ms = time.time() * 1000
        if top_sets:
            weighted_total = 0.0
            weight_sum = 0.0
            for top in top_sets:
                constant = cls._set_constant(
                    one_rep_max,
                    MathTools.safe_number(read_field(top, "weight")),
                    MathTools.safe_int(read_field(top, "reps")),
                )
                if constant is None:
                    continue
                recency = cls.recency_weight(read_field(top, "timestamp", default=0), now_ms)
                weighted_total += constant * recency
                weight_sum += recency
            if weight_sum > 0:
                return weighted_total / weight_sum
            logger.debug("no usable top sets, falling back to k=%s", cls.DEFAULT_CONSTANT)
            return cls.DEFAULT_CONSTANT
        constant = cls._set_constant(one_rep_max, best_set_weight, best_set_reps)
        return cls.DEFAULT_CONSTANT if constant is None else constant

    @classmethod
    def calculate_rep_max_estimates(
        cls,
        rep_max_input,
        target_reps: Iterable[int] | None = None,
        manual_overrides: dict[int, float] | None = None,
        now_ms: float | None = None,
        decimals: int | None = None,
    ) -> list[dict]:
        """Return ``[{"reps": r, "weight": w}, ...]`` sorted by reps.

        ``rep_max_input`` carries ``one_rep_max``, ``best_set_weight``,
        ``best_set_reps`` and optional ``top_sets``. Invalid input yields an
        empty list. Weights never increase with the rep count.
        """
        one_rep_max = MathTools.safe_number(
            read_field(rep_max_input, "one_rep_max", "oneRepMax", default=0)
        )
        best_weight = MathTools.safe_number(
            read_field(rep_max_input, "best_set_weight", "bestSetWeight", default=0)
        )
        best_reps = MathTools.safe_int(
            read_field(rep_max_input, "best_set_reps", "bestSetReps", default=0)
        )
        if one_rep_max <= 0 or best_weight <= 0 or best_reps <= 0:
            return []
        top_sets = read_field(rep_max_input, "top_sets", "topSets", default=None)
        constant = cls.fatigue_constant(one_rep_max, best_weight, best_reps, top_sets, now_ms)

        overrides = manual_overrides or {}
        targets = sorted({MathTools.safe_int(r) for r in (target_reps or cls.DEFAULT_TARGET_REPS)} - {0})
        estimates: list[dict] = []
        previous = math.inf
        for reps in targets:
            if reps in overrides:
                weight = MathTools.safe_number(overrides[reps])
            else:
                weight = MathTools.weight_at_reps(one_rep_max, reps, constant)
            weight = min(weight, one_rep_max, previous)
            if decimals is not None:
                weight = round(weight, decimals)
            estimates.append({"reps": reps, "weight": weight})
            previous = weight
        return estimates

    @staticmethod
    def failure_overlay(points: Iterable) -> list[dict]:
        """Return failure sets as ground-truth chart points.

        These are annotations only and never influence the estimated curve.
        """
        overlay: list[dict] = []
        for point in points or []:
            reps = MathTools.safe_int(read_field(point, "reps", default=0))
            weight = MathTools.safe_number(read_field(point, "weight", default=0))
            if reps <= 0:
                continue
            overlay.append(
                {
                    "reps": reps,
                    "weight": weight,
                    "is_actual_data": True,
                    "timestamp": read_field(point, "timestamp"),
                }
            )
        return overlay


calculate_rep_max_estimates = RepMaxEstimator.calculate_rep_max_estimates
