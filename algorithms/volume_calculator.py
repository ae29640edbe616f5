from typing import Iterable

from .exercise_types import ExerciseType, SetType, parse_set_type, resolve_exercise_type
from .math_tools import MathTools


def read_field(obj, *names, default=None):
    """Read the first present attribute or mapping key in ``names``."""
    for name in names:
        if isinstance(obj, dict):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return default


class VolumeCalculator:
    """Compute training volume for logged sets of any exercise type.

    Sets may be :class:`models.LoggedSet` instances or plain mappings using
    either snake_case or the camelCase keys of the app's backups.
    """

    @staticmethod
    def set_reps(logged_set) -> int:
        return MathTools.safe_int(read_field(logged_set, "reps", default=0))

    @staticmethod
    def set_weight(logged_set) -> float:
        return MathTools.safe_number(read_field(logged_set, "weight", default=0.0))

    @staticmethod
    def set_type(logged_set) -> SetType:
        return parse_set_type(read_field(logged_set, "set_type", "setType"))

    @staticmethod
    def is_qualifying(logged_set) -> bool:
        """Return ``True`` unless the set is incomplete or a warmup."""
        if read_field(logged_set, "completed", default=True) is False:
            return False
        return VolumeCalculator.set_type(logged_set) is not SetType.WARMUP

    @classmethod
    def qualifying_sets(cls, sets: Iterable) -> list:
        return [s for s in sets or [] if cls.is_qualifying(s)]

    @staticmethod
    def effective_weight(logged_set, exercise_type, body_weight_kg: float) -> float:
        """Return the load used in volume and 1RM math for ``logged_set``."""
        weight = VolumeCalculator.set_weight(logged_set)
        body_weight = MathTools.safe_number(body_weight_kg)
        ex_type = resolve_exercise_type(exercise_type)
        if ex_type is ExerciseType.BODYWEIGHT:
            return body_weight
        if ex_type is ExerciseType.WEIGHTED_BODYWEIGHT:
            return body_weight + weight
        if ex_type is ExerciseType.ASSISTED_BODYWEIGHT:
            return max(0.0, body_weight - weight)
        return weight

    @classmethod
    def calculate_set_volume(cls, logged_set, exercise_type, body_weight_kg: float) -> float:
        """Return ``effective weight * reps`` for a qualifying set, else 0."""
        if not cls.is_qualifying(logged_set):
            return 0.0
        return cls.effective_weight(logged_set, exercise_type, body_weight_kg) * cls.set_reps(
            logged_set
        )

    @classmethod
    def calculate_exercise_volume(
        cls, sets: Iterable, exercise_type, body_weight_kg: float
    ) -> float:
        total = 0.0
        for logged_set in cls.qualifying_sets(sets):
            total += cls.calculate_set_volume(logged_set, exercise_type, body_weight_kg)
        return total

    @classmethod
    def calculate_template_volume(
        cls, sets: Iterable, exercise_type, body_weight_kg: float
    ) -> float:
        """Volume preview for template sets, which are never marked completed."""
        total = 0.0
        for logged_set in sets or []:
            if cls.set_type(logged_set) is SetType.WARMUP:
                continue
            total += cls.effective_weight(logged_set, exercise_type, body_weight_kg) * cls.set_reps(
                logged_set
            )
        return total

    @classmethod
    def calculate_workout_volume(
        cls, workout, body_weight_kg: float, fallback_type=None
    ) -> float:
        total = 0.0
        for exercise in read_field(workout, "exercises", default=[]) or []:
            ex_type = resolve_exercise_type(read_field(exercise, "type"), fallback_type)
            total += cls.calculate_exercise_volume(
                read_field(exercise, "sets", default=[]), ex_type, body_weight_kg
            )
        return total


calculate_set_volume = VolumeCalculator.calculate_set_volume
calculate_exercise_volume = VolumeCalculator.calculate_exercise_volume
