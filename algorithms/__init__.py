from .math_tools import MathTools
from .exercise_types import ExerciseType, SetType, resolve_exercise_type, is_weighted
from .weight_converter import WeightConverter
from .volume_calculator import (
    VolumeCalculator,
    calculate_set_volume,
    calculate_exercise_volume,
)
from .rep_max_estimator import RepMaxEstimator, calculate_rep_max_estimates
from .trend_tools import (
    TrendTools,
    calculate_rolling_average,
    calculate_linear_regression,
)
from .week_tools import WeekTools
from .muscle_contribution import MuscleContribution
from .auto_progression import AutoProgression

__all__ = [
    "MathTools",
    "ExerciseType",
    "SetType",
    "resolve_exercise_type",
    "is_weighted",
    "WeightConverter",
    "VolumeCalculator",
    "calculate_set_volume",
    "calculate_exercise_volume",
    "RepMaxEstimator",
    "calculate_rep_max_estimates",
    "TrendTools",
    "calculate_rolling_average",
    "calculate_linear_regression",
    "WeekTools",
    "MuscleContribution",
    "AutoProgression",
]
