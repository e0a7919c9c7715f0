"""
Exercise recommendation schemas.

The ranker returns :class:`Recommendation` items sorted by score.  The
score is additive and :class:`ScoreBreakdown` exposes every weighted
contribution so the ranking can be audited:

    score = base + underwork + archetype_diversity + difficulty - recency_penalty
"""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.exercise import ExerciseProfile


class ScoreBreakdown(BaseModel):
    """Weighted contributions that sum to a recommendation score."""

    model_config = ConfigDict(frozen=True)

    base: float
    underwork: float = Field(..., ge=0.0, description="Weighted underworked-muscle bonus")
    archetype_diversity: float = Field(..., ge=0.0, description="Weighted movement-variety bonus")
    difficulty: float = Field(..., ge=0.0, description="Weighted difficulty-fit bonus")
    recency_penalty: float = Field(..., ge=0.0, description="Subtracted when recently performed")
    recently_performed: bool

    @property
    def total(self) -> float:
        return (
            self.base
            + self.underwork
            + self.archetype_diversity
            + self.difficulty
            - self.recency_penalty
        )


class Recommendation(BaseModel):
    """A scored, explained exercise recommendation."""

    model_config = ConfigDict(frozen=True)

    profile: ExerciseProfile
    score: float
    reasoning: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Human-readable reasons, most important first",
    )
    breakdown: ScoreBreakdown

    @property
    def exercise_id(self) -> str:
        return self.profile.exercise_id
