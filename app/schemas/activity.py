"""
Activity analysis snapshot.

:class:`ActivityAnalysis` is the consolidated view of a user's recent
training produced by :mod:`app.intelligence.activity` and consumed by
the recommendation ranker.  It is an immutable value object: every
field is computed once, at ``analysis_date``, and never updated.

Workload scores are normalised 0.0-1.0 where:
    0.0 = muscle not trained in the window
    1.0 = fully saturated recent load
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HOURS_PER_DAY = 24.0


class ActivityAnalysis(BaseModel):
    """Per-muscle workload and movement usage for one analysis window."""

    model_config = ConfigDict(frozen=True)

    muscle_workload: dict[str, float] = Field(
        default_factory=dict,
        description="Muscle name -> workload score in [0, 1]",
    )
    movement_archetypes: dict[str, int] = Field(
        default_factory=dict,
        description="Archetype label -> occurrences in the window",
    )
    recent_exercises: frozenset[str] = Field(
        default_factory=frozenset,
        description="Exercise identifiers performed in the window",
    )
    muscle_last_worked: dict[str, datetime.datetime] = Field(
        default_factory=dict,
        description="Muscle name -> last time it was a primary mover",
    )
    analysis_date: datetime.datetime
    exercise_last_performed: dict[str, datetime.datetime] = Field(
        default_factory=dict,
        description="Exercise identifier -> most recent log in the window",
    )
    exercise_difficulty: dict[str, int] = Field(
        default_factory=dict,
        description="Exercise identifier -> difficulty of recent exercises with metadata",
    )
    window_days: int = Field(31, ge=1)

    @field_validator("muscle_workload")
    @classmethod
    def validate_workload_bounds(cls, value: dict[str, float]) -> dict[str, float]:
        for muscle, score in value.items():
            if not 0.0 <= score <= 1.0:
                raise ValueError(f"Workload for '{muscle}' out of [0, 1]: {score}")
        return value

    @field_validator("movement_archetypes")
    @classmethod
    def validate_archetype_counts(cls, value: dict[str, int]) -> dict[str, int]:
        for archetype, count in value.items():
            if count < 0:
                raise ValueError(f"Negative count for archetype '{archetype}': {count}")
        return value

    @field_validator("recent_exercises", mode="before")
    @classmethod
    def coerce_exercise_ids(cls, value):
        return frozenset(str(v) for v in value)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_muscle_workload_score(self, muscle: str) -> float:
        return self.muscle_workload.get(muscle, 0.0)

    def get_archetype_frequency(self, archetype: str) -> int:
        return self.movement_archetypes.get(archetype, 0)

    def was_exercise_recently_performed(self, exercise_id: str | int) -> bool:
        return str(exercise_id) in self.recent_exercises

    @property
    def total_archetype_usage(self) -> int:
        return sum(self.movement_archetypes.values())

    # ------------------------------------------------------------------
    # Elapsed-time helpers
    # ------------------------------------------------------------------

    def _hours_since(self, moment: datetime.datetime) -> float:
        hours = (self.analysis_date - moment).total_seconds() / 3600.0
        return max(hours, 0.0)

    def get_hours_since_last_workout(self, muscle: str) -> float | None:
        """Hours since *muscle* was last a primary mover, or ``None``."""
        last = self.muscle_last_worked.get(muscle)
        if last is None:
            return None
        return self._hours_since(last)

    def get_days_since_last_workout(self, muscle: str) -> float | None:
        """Days since *muscle* was last worked.

        Uses the recorded timestamp when available.  Otherwise the value
        is estimated from the workload score, high workload meaning
        recent work::

            days ≈ (1 - workload) × window_days

        Returns ``None`` when the muscle has neither a timestamp nor any
        workload.
        """
        hours = self.get_hours_since_last_workout(muscle)
        if hours is not None:
            return hours / _HOURS_PER_DAY

        workload = self.get_muscle_workload_score(muscle)
        if workload <= 0.0:
            return None
        return float((1.0 - workload) * self.window_days)

    def get_days_since_exercise_performed(self, exercise_id: str | int) -> float | None:
        last = self.exercise_last_performed.get(str(exercise_id))
        if last is None:
            return None
        return self._hours_since(last) / _HOURS_PER_DAY

    @classmethod
    def empty(cls, analysis_date: datetime.datetime, window_days: int = 31) -> ActivityAnalysis:
        """Return an analysis with no recorded activity."""
        return cls(analysis_date=analysis_date, window_days=window_days)
