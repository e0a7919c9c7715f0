"""
Workout history schemas.

A :class:`WorkoutEntry` is one performed exercise instance: which
exercise, when, and the ordered list of ``(weight, reps)`` sets.  The
history provider joins each entry with its
:class:`~app.schemas.exercise.ExerciseProfile` when one exists.
"""

from __future__ import annotations

import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.exercise import ExerciseProfile


class LiftSet(BaseModel):
    """A single set within a logged exercise."""

    model_config = ConfigDict(frozen=True)

    weight: float = Field(0.0, ge=0.0, description="Load lifted (0 for bodyweight)")
    reps: int = Field(0, ge=0, description="Repetitions performed")


class WorkoutEntry(BaseModel):
    """One logged exercise with its sets and optional metadata."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str = Field(..., min_length=1)
    logged_at: datetime.datetime
    sets: tuple[LiftSet, ...] = Field(default_factory=tuple)
    profile: ExerciseProfile | None = Field(
        default=None,
        description="Joined exercise metadata (None when the exercise has none)",
    )

    @field_validator("exercise_id", mode="before")
    @classmethod
    def coerce_exercise_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def validate_profile_matches(self) -> Self:
        """The joined profile must describe the logged exercise."""
        if self.profile is not None and self.profile.exercise_id != self.exercise_id:
            raise ValueError(
                f"Profile '{self.profile.exercise_id}' does not match "
                f"logged exercise '{self.exercise_id}'."
            )
        return self

    @property
    def set_count(self) -> int:
        return len(self.sets)
