from enum import Enum


class ExerciseType(str, Enum):
    """Mechanical type of an exercise; selects the effective-weight formula."""

    WEIGHTED = "weighted"
    BODYWEIGHT = "bodyweight"
    ASSISTED_BODYWEIGHT = "assisted-bodyweight"
    WEIGHTED_BODYWEIGHT = "weighted-bodyweight"
    DOUBLED = "doubled"


class SetType(str, Enum):
    WORKING = "working"
    WARMUP = "warmup"
    FAILURE = "failure"


def parse_exercise_type(value) -> ExerciseType | None:
    """Return ``value`` as an :class:`ExerciseType` or ``None`` if unknown."""
    if isinstance(value, ExerciseType):
        return value
    if isinstance(value, str):
        try:
            return ExerciseType(value.strip().lower())
        except ValueError:
            return None
    return None


def resolve_exercise_type(*candidates) -> ExerciseType:
    """Return the first valid exercise type among ``candidates``.

    Callers pass candidates in precedence order, e.g. the logged exercise
    type, then the catalog type. Falls back to ``weighted``.
    """
    for candidate in candidates:
        parsed = parse_exercise_type(candidate)
        if parsed is not None:
            return parsed
    return ExerciseType.WEIGHTED


def parse_set_type(value) -> SetType:
    if isinstance(value, SetType):
        return value
    if isinstance(value, str):
        try:
            return SetType(value.strip().lower())
        except ValueError:
            pass
    return SetType.WORKING


def is_weighted(exercise_type) -> bool:
    """Return ``True`` when a one-rep max is meaningful for the type."""
    return resolve_exercise_type(exercise_type) in (
        ExerciseType.WEIGHTED,
        ExerciseType.DOUBLED,
    )
