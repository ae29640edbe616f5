from typing import Iterable

from .exercise_types import SetType
from .math_tools import MathTools
from .volume_calculator import VolumeCalculator, read_field


class AutoProgression:
    """Rep-range double progression for template sets.

    ``config`` is a mapping or object with ``enabled``, ``min_reps`` and
    ``max_reps`` (camelCase keys accepted). Warmup sets never progress.
    """

    @staticmethod
    def valid_rep_range(config) -> tuple[int, int] | None:
        if not read_field(config, "enabled", default=False):
            return None
        min_reps = MathTools.safe_number(read_field(config, "min_reps", "minReps"), -1)
        max_reps = MathTools.safe_number(read_field(config, "max_reps", "maxReps"), -1)
        if min_reps < 1 or max_reps < min_reps:
            return None
        return int(min_reps), int(max_reps)

    @staticmethod
    def _is_working(logged_set) -> bool:
        return VolumeCalculator.set_type(logged_set) is not SetType.WARMUP

    @staticmethod
    def _with_reps(logged_set, reps: int):
        if isinstance(logged_set, dict):
            return {**logged_set, "reps": reps}
        return logged_set.model_copy(update={"reps": reps})

    @classmethod
    def suggest_weight_increase(cls, sets: Iterable, config) -> bool:
        """Return ``True`` once the working sets have outgrown the range."""
        rep_range = cls.valid_rep_range(config)
        if rep_range is None:
            return False
        reps = [VolumeCalculator.set_reps(s) for s in sets or [] if cls._is_working(s)]
        if not reps:
            return False
        max_reps = rep_range[1]
        return any(r > max_reps for r in reps) or all(r >= max_reps for r in reps)

    @classmethod
    def apply_on_start(cls, sets: Iterable, config) -> dict:
        """Return progressed copies of ``sets`` for a new session.

        Working sets below the range are raised to its minimum; sets above
        the maximum are left alone. Then the last of the lowest in-range
        sets gains one rep.
        """
        result = [dict(s) if isinstance(s, dict) else s.model_copy() for s in sets or []]
        rep_range = cls.valid_rep_range(config)
        if rep_range is None or not result:
            return {"sets": result, "did_change": False, "suggest_increase_weight": False}
        min_reps, max_reps = rep_range

        did_change = False
        for idx, logged_set in enumerate(result):
            if cls._is_working(logged_set) and VolumeCalculator.set_reps(logged_set) < min_reps:
                result[idx] = cls._with_reps(logged_set, min_reps)
                did_change = True

        eligible = [
            idx
            for idx, logged_set in enumerate(result)
            if cls._is_working(logged_set)
            and min_reps <= VolumeCalculator.set_reps(logged_set) < max_reps
        ]
        if eligible:
            lowest = min(VolumeCalculator.set_reps(result[i]) for i in eligible)
            target = max(i for i in eligible if VolumeCalculator.set_reps(result[i]) == lowest)
            result[target] = cls._with_reps(result[target], lowest + 1)
            did_change = True

        return {
            "sets": result,
            "did_change": did_change,
            "suggest_increase_weight": cls.suggest_weight_increase(result, config),
        }
