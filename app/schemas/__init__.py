"""Pydantic schemas for engine inputs and outputs."""

from app.schemas.exercise import (
    ContractionType,
    ExerciseProfile,
    MuscleInvolvement,
    MuscleRole,
)
from app.schemas.workout import LiftSet, WorkoutEntry
from app.schemas.activity import ActivityAnalysis
from app.schemas.recommendation import Recommendation, ScoreBreakdown

__all__ = [
    "ContractionType",
    "ExerciseProfile",
    "MuscleInvolvement",
    "MuscleRole",
    "LiftSet",
    "WorkoutEntry",
    "ActivityAnalysis",
    "Recommendation",
    "ScoreBreakdown",
]
