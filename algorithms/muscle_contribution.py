from typing import Iterable

from .math_tools import MathTools
from .volume_calculator import read_field


class MuscleContribution:
    """Distribute exercise volume and set counts across muscle groups.

    Contributions are percentages per muscle that should add up to 100.
    """

    PRIMARY_SHARE: float = 70.0
    SECONDARY_SHARE: float = 30.0
    TOLERANCE: float = 0.01

    @classmethod
    def default_contributions(cls, primary_muscle: str, secondary_muscles=None) -> dict[str, float]:
        """Return 100% primary, or 70% primary with 30% split over secondaries."""
        secondaries = [m for m in secondary_muscles or [] if m]
        if not secondaries:
            return {primary_muscle: 100.0}
        share = cls.SECONDARY_SHARE / len(secondaries)
        contributions = {primary_muscle: cls.PRIMARY_SHARE}
        for muscle in secondaries:
            contributions[muscle] = share
        return contributions

    @classmethod
    def validate_contributions(cls, contributions: dict, muscles: Iterable[str] | None = None) -> bool:
        """Return ``True`` when the (selected) contributions sum to 100."""
        contributions = contributions or {}
        if muscles is not None:
            total = sum(MathTools.safe_number(contributions.get(m)) for m in muscles)
        else:
            total = sum(MathTools.safe_number(v) for v in contributions.values())
        return abs(total - 100) < cls.TOLERANCE

    @staticmethod
    def weighted_volume(volume: float, contributions: dict) -> dict[str, float]:
        volume = MathTools.safe_number(volume)
        return {
            muscle: volume * MathTools.safe_number(pct) / 100
            for muscle, pct in (contributions or {}).items()
        }

    @staticmethod
    def weighted_sets(set_count: float, contributions: dict, primary_muscle: str) -> dict[str, float]:
        """The primary muscle gets every set; secondaries get a fraction."""
        set_count = MathTools.safe_number(set_count)
        return {
            muscle: set_count if muscle == primary_muscle else set_count * MathTools.safe_number(pct) / 100
            for muscle, pct in (contributions or {}).items()
        }

    @classmethod
    def exercise_contributions(cls, exercise) -> dict[str, float] | None:
        """Return the exercise's saved contributions or the defaults.

        ``None`` when the exercise carries no primary muscle.
        """
        primary = read_field(exercise, "primary_muscle", "primaryMuscle")
        if not primary:
            return None
        saved = read_field(exercise, "muscle_contributions", "muscleContributions")
        if saved:
            return dict(saved)
        secondaries = read_field(exercise, "secondary_muscles", "secondaryMuscles", default=[])
        return cls.default_contributions(primary, secondaries)

    @classmethod
    def aggregate_muscle_data(cls, exercise_data: Iterable) -> dict[str, dict[str, float]]:
        """Sum weighted volume and sets per muscle.

        Each item carries ``contributions``, ``primary_muscle``, ``volume``
        and ``sets``.
        """
        volume_per_muscle: dict[str, float] = {}
        sets_per_muscle: dict[str, float] = {}
        for item in exercise_data or []:
            contributions = read_field(item, "contributions", default={}) or {}
            primary = read_field(item, "primary_muscle", "primaryMuscle")
            volumes = cls.weighted_volume(read_field(item, "volume", default=0), contributions)
            sets = cls.weighted_sets(read_field(item, "sets", default=0), contributions, primary)
            for muscle, vol in volumes.items():
                volume_per_muscle[muscle] = volume_per_muscle.get(muscle, 0.0) + vol
            for muscle, count in sets.items():
                sets_per_muscle[muscle] = sets_per_muscle.get(muscle, 0.0) + count
        return {"volume_per_muscle": volume_per_muscle, "sets_per_muscle": sets_per_muscle}
