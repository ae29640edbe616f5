from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator


class SettingsSchema(BaseModel):
    weight_unit: Literal["kg", "lbs"] = "kg"
    body_weight: float = Field(default=70.0, ge=0)
    week_start_day: int = Field(default=1, ge=0, le=6)
    session_rolling_window: int = Field(default=7, ge=1)
    weekly_rolling_window: int = Field(default=4, ge=1)
    trend_threshold: float = Field(default=0.05, ge=0)
    rep_max_targets: list[int] = Field(default_factory=lambda: list(range(1, 13)))
    top_sets_limit: int = Field(default=5, ge=1)

    @field_validator("rep_max_targets")
    @classmethod
    def _targets_positive(cls, value: list[int]) -> list[int]:
        if not value or any(r < 1 for r in value):
            raise ValueError("rep_max_targets must be positive rep counts")
        return sorted(set(value))


def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
