"""Logged workout data as handed to the analytics layer."""

import datetime
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from algorithms import MathTools, VolumeCalculator
from algorithms.exercise_types import (
    ExerciseType,
    SetType,
    parse_exercise_type,
    parse_set_type,
)

logger = logging.getLogger(__name__)


def _records(value, kind: str) -> list:
    """Keep the mapping/model entries of a nested list, dropping the rest."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        logger.debug("ignoring %s given as %s", kind, type(value).__name__)
        return []
    kept = [item for item in value if isinstance(item, (dict, BaseModel))]
    if len(kept) != len(value):
        logger.debug("dropped %d malformed %s", len(value) - len(kept), kind)
    return kept


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LoggedSet(_Record):
    set_number: int = Field(default=1, alias="setNumber")
    reps: int = 0
    weight: float = 0.0
    unit: str = "kg"
    completed: bool = True
    set_type: SetType = Field(default=SetType.WORKING, alias="setType")
    timestamp: float = 0.0

    @field_validator("reps", "set_number", mode="before")
    @classmethod
    def _coerce_int(cls, value):
        return MathTools.safe_int(value)

    @field_validator("weight", "timestamp", mode="before")
    @classmethod
    def _coerce_float(cls, value):
        return MathTools.safe_number(value)

    @field_validator("set_type", mode="before")
    @classmethod
    def _coerce_set_type(cls, value):
        return parse_set_type(value)

    @field_validator("completed", mode="before")
    @classmethod
    def _coerce_completed(cls, value):
        # only an explicit False marks a set as not done
        return value is not False

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, value):
        return "lbs" if str(value or "kg").lower() in ("lb", "lbs") else "kg"

    @property
    def is_qualifying(self) -> bool:
        return VolumeCalculator.is_qualifying(self)


class CompletedExercise(_Record):
    id: str = ""
    exercise_id: Optional[str] = Field(default=None, alias="exerciseId")
    name: str = ""
    sets: list[LoggedSet] = Field(default_factory=list)
    type: Optional[ExerciseType] = None
    group_id: Optional[str] = Field(default=None, alias="groupId")
    group_position: Optional[int] = Field(default=None, alias="groupPosition")
    primary_muscle: Optional[str] = Field(default=None, alias="primaryMuscle")
    secondary_muscles: List[str] = Field(default_factory=list, alias="secondaryMuscles")
    muscle_contributions: Optional[Dict[str, float]] = Field(
        default=None, alias="muscleContributions"
    )

    @field_validator("sets", mode="before")
    @classmethod
    def _coerce_sets(cls, value):
        return _records(value, "sets")

    @field_validator("primary_muscle", mode="before")
    @classmethod
    def _coerce_primary(cls, value):
        return str(value) if value else None

    @field_validator("secondary_muscles", mode="before")
    @classmethod
    def _coerce_secondaries(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return [str(m) for m in value if m]

    @field_validator("muscle_contributions", mode="before")
    @classmethod
    def _coerce_contributions(cls, value):
        if not isinstance(value, dict) or not value:
            return None
        return {str(k): MathTools.safe_number(v) for k, v in value.items()}

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        return parse_exercise_type(value)

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return "" if value is None else str(value)

    @field_validator("exercise_id", "group_id", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value):
        return None if value is None else str(value)

    def matches(self, exercise: str) -> bool:
        return bool(exercise) and (self.name == exercise or self.exercise_id == exercise)


class CompletedWorkout(_Record):
    id: str = ""
    name: str = ""
    start_time: float = Field(default=0.0, alias="startTime")
    end_time: float = Field(default=0.0, alias="endTime")
    exercises: list[CompletedExercise] = Field(default_factory=list)

    @field_validator("exercises", mode="before")
    @classmethod
    def _coerce_exercises(cls, value):
        return _records(value, "exercises")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _coerce_time(cls, value):
        return MathTools.safe_number(value)

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return "" if value is None else str(value)

    @property
    def session_timestamp(self) -> float:
        return self.end_time or self.start_time

    @property
    def session_date(self) -> datetime.date:
        """UTC calendar date of the session."""
        return datetime.datetime.fromtimestamp(
            self.session_timestamp / 1000, tz=datetime.timezone.utc
        ).date()

    @property
    def duration_ms(self) -> float:
        if self.end_time <= self.start_time:
            return 0.0
        return self.end_time - self.start_time


class TopSet(_Record):
    weight: float = 0.0
    reps: int = 0
    timestamp: float = 0.0

    @field_validator("weight", "timestamp", mode="before")
    @classmethod
    def _coerce_float(cls, value):
        return MathTools.safe_number(value)

    @field_validator("reps", mode="before")
    @classmethod
    def _coerce_int(cls, value):
        return MathTools.safe_int(value)


class RepMaxInput(_Record):
    one_rep_max: float = Field(default=0.0, alias="oneRepMax")
    best_set_weight: float = Field(default=0.0, alias="bestSetWeight")
    best_set_reps: int = Field(default=0, alias="bestSetReps")
    top_sets: list[TopSet] = Field(default_factory=list, alias="topSets")

    @field_validator("one_rep_max", "best_set_weight", mode="before")
    @classmethod
    def _coerce_float(cls, value):
        return MathTools.safe_number(value)

    @field_validator("best_set_reps", mode="before")
    @classmethod
    def _coerce_int(cls, value):
        return MathTools.safe_int(value)
