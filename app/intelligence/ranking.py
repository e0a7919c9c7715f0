"""
Recommendation ranking — activity snapshot + catalog to ranked exercises.

The ranker answers *which known exercise should I do next?*  It does
not prescribe sets or weights.

Pipeline
--------
1. **Eligibility** — candidates without muscle or movement metadata
   cannot be reasoned about and are dropped.  When the caller passes
   ``performed_exercise_ids`` only exercises the user already knows are
   kept.
2. **Recovery filter** (hard exclusion) — a candidate is dropped when
   any of its primary movers was last worked fewer than
   ``recovery_hours`` ago.  Muscles with no recorded last-worked time
   never exclude.
3. **Scoring** — additive, every term independent::

       score = base
             + underwork_weight  × mean(1 - workload of primary movers)
             + archetype_weight  × 1 / (1 + decay × archetype_count)
             + difficulty_weight × difficulty_fit
             - recency_penalty   (if performed in the window)

   ``difficulty_weight`` is kept below the underwork and archetype
   weights so the static difficulty term never outweighs them.
4. **Ordering** — score descending; Python's sort is stable so ties keep
   catalog order.  Truncate to ``desired_count``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Self, Sequence

from pydantic import BaseModel, Field, model_validator

from app.exercises.muscles import UNDERWORK_THRESHOLD, humanize_muscle
from app.schemas.activity import ActivityAnalysis
from app.schemas.exercise import ExerciseProfile, MuscleRole
from app.schemas.recommendation import Recommendation, ScoreBreakdown

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

# Weights used when a candidate has no primary movers and the underwork
# bonus falls back to all of its muscles.
_FALLBACK_ROLE_WEIGHTS: dict[MuscleRole, float] = {
    MuscleRole.PRIMARY_MOVER: 1.0,
    MuscleRole.SYNERGIST: 0.7,
    MuscleRole.STABILIZER: 0.4,
}

# Archetypes used fewer times than this are reported as "adds variety".
_VARIETY_REASON_LIMIT = 3

DEFAULT_RECOMMENDATION_COUNT = 5


class RankerConfig(BaseModel):
    """Configuration for scoring and ranking recommendations."""

    base_score: float = Field(1.0, ge=0.0)
    underwork_weight: float = Field(3.0, gt=0.0)
    archetype_weight: float = Field(2.0, gt=0.0)
    archetype_decay: float = Field(
        0.5, gt=0.0,
        description="How fast the diversity bonus drops per recorded use",
    )
    difficulty_weight: float = Field(1.0, ge=0.0)
    recency_penalty: float = Field(2.0, gt=0.0)

    underwork_threshold: float = Field(UNDERWORK_THRESHOLD, ge=0.0, le=1.0)

    max_difficulty: int = Field(5, ge=1, le=5)
    default_target_difficulty: float = Field(3.0, ge=1.0)
    difficulty_progression: float = Field(
        0.5, ge=0.0,
        description="Target sits this far above the recent average difficulty",
    )
    difficulty_step_penalty: float = Field(0.2, ge=0.0, le=1.0)

    default_count: int = Field(DEFAULT_RECOMMENDATION_COUNT, ge=0)

    @model_validator(mode="after")
    def validate_difficulty_weight(self) -> Self:
        """The static difficulty term must not dominate the main factors."""
        if self.difficulty_weight >= min(self.underwork_weight, self.archetype_weight):
            raise ValueError(
                "difficulty_weight must be lower than both underwork_weight "
                "and archetype_weight."
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> RankerConfig:
        return cls(default_count=settings.DEFAULT_RECOMMENDATION_COUNT)


DEFAULT_RANKER_CONFIG = RankerConfig()


# ======================================================================
# Eligibility and recovery
# ======================================================================


def _eligible_candidates(
    candidates: Iterable[ExerciseProfile],
    performed_exercise_ids: Optional[Iterable[str | int]],
) -> list[ExerciseProfile]:
    known = None
    if performed_exercise_ids is not None:
        known = {str(e) for e in performed_exercise_ids}

    eligible = []
    for profile in candidates:
        if not profile.has_metadata:
            continue
        if known is not None and profile.exercise_id not in known:
            continue
        eligible.append(profile)
    return eligible


def muscles_in_recovery(
    profile: ExerciseProfile,
    analysis: ActivityAnalysis,
) -> list[tuple[str, float]]:
    """Return ``(muscle, hours_since_worked)`` for primary movers still recovering."""
    recovering = []
    for muscle in profile.primary_mover_muscles():
        hours = analysis.get_hours_since_last_workout(muscle)
        if hours is not None and hours < profile.recovery_hours:
            recovering.append((muscle, hours))
    return recovering


def filter_by_recovery(
    candidates: Sequence[ExerciseProfile],
    analysis: ActivityAnalysis,
) -> list[ExerciseProfile]:
    """Drop candidates with any primary mover inside its recovery window."""
    available = []
    filtered_out = []

    for profile in candidates:
        recovering = muscles_in_recovery(profile, analysis)
        if recovering:
            filtered_out.append((profile.exercise_id, profile.recovery_hours, recovering))
            continue
        available.append(profile)

    if filtered_out:
        logger.debug(
            "Recovery filter at %s removed %d of %d candidates: %s",
            analysis.analysis_date.isoformat(),
            len(filtered_out), len(candidates),
            filtered_out[:5],
        )
    return available


# ======================================================================
# Score components
# ======================================================================


def _underwork_score(profile: ExerciseProfile, analysis: ActivityAnalysis) -> float:
    """0-1, higher when the muscles this exercise targets are fresh."""
    primaries = profile.primary_mover_muscles()
    if primaries:
        slack = [1.0 - analysis.get_muscle_workload_score(m) for m in primaries]
        return sum(slack) / len(slack)

    if not profile.muscles:
        return 0.0

    weighted = 0.0
    total_weight = 0.0
    for muscle in profile.muscles:
        w = _FALLBACK_ROLE_WEIGHTS[muscle.role]
        weighted += w * (1.0 - analysis.get_muscle_workload_score(muscle.name))
        total_weight += w
    return weighted / total_weight


def _archetype_diversity_score(
    profile: ExerciseProfile,
    analysis: ActivityAnalysis,
    cfg: RankerConfig,
) -> float:
    """0-1, 1.0 for an unused archetype, decreasing with every use."""
    count = 0
    if profile.movement_archetype:
        count = analysis.get_archetype_frequency(profile.movement_archetype)
    return 1.0 / (1.0 + cfg.archetype_decay * count)


def _target_difficulty(analysis: ActivityAnalysis, cfg: RankerConfig) -> float:
    """Slightly above the average difficulty of recent exercises."""
    difficulties = list(analysis.exercise_difficulty.values())
    if not difficulties:
        return cfg.default_target_difficulty
    average = sum(difficulties) / len(difficulties)
    return min(float(cfg.max_difficulty), average + cfg.difficulty_progression)


def _difficulty_score(profile: ExerciseProfile, target: float, cfg: RankerConfig) -> float:
    difference = abs(profile.difficulty_level - target)
    return max(0.0, 1.0 - difference * cfg.difficulty_step_penalty)


def score_breakdown(
    profile: ExerciseProfile,
    analysis: ActivityAnalysis,
    target_difficulty: float,
    cfg: RankerConfig,
) -> ScoreBreakdown:
    """Compute every weighted contribution for one candidate."""
    recent = analysis.was_exercise_recently_performed(profile.exercise_id)
    return ScoreBreakdown(
        base=cfg.base_score,
        underwork=_underwork_score(profile, analysis) * cfg.underwork_weight,
        archetype_diversity=_archetype_diversity_score(profile, analysis, cfg) * cfg.archetype_weight,
        difficulty=_difficulty_score(profile, target_difficulty, cfg) * cfg.difficulty_weight,
        recency_penalty=cfg.recency_penalty if recent else 0.0,
        recently_performed=recent,
    )


# ======================================================================
# Reasoning
# ======================================================================


def _times(count: int) -> str:
    return "1 time" if count == 1 else f"{count} times"


def _generate_reasoning(
    profile: ExerciseProfile,
    analysis: ActivityAnalysis,
    breakdown: ScoreBreakdown,
    cfg: RankerConfig,
) -> list[str]:
    """Human-readable reasons, ordered by scoring factor."""
    reasons: list[str] = []

    # Muscle workload
    primaries = profile.primary_mover_muscles()
    workloads = [(m, analysis.get_muscle_workload_score(m)) for m in primaries]
    underworked = [(m, w) for m, w in workloads if w < cfg.underwork_threshold]
    if underworked:
        parts = ", ".join(f"{humanize_muscle(m)} ({w:.0%} workload)" for m, w in underworked)
        reasons.append(f"Targets underworked muscles: {parts}")
    elif workloads:
        parts = ", ".join(f"{humanize_muscle(m)} ({w:.0%} workload)" for m, w in workloads)
        reasons.append(f"Primary movers already loaded: {parts}")

    # Movement archetype
    archetype = profile.movement_archetype
    if archetype:
        frequency = analysis.get_archetype_frequency(archetype)
        window = f"in the last {analysis.window_days} days"
        if frequency == 0:
            reasons.append(f"Introduces new movement pattern: {archetype} (not used {window})")
        elif frequency < _VARIETY_REASON_LIMIT:
            reasons.append(f"Adds variety to {archetype} movements (used {_times(frequency)} {window})")
        else:
            reasons.append(f"Movement pattern {archetype} already used {_times(frequency)} {window}")

    if breakdown.recently_performed:
        reasons.append("Recently performed: ranked lower to avoid an immediate repeat")

    reasons.append(f"Difficulty level: {profile.difficulty_level}/{cfg.max_difficulty}")

    focus = profile.focus_muscle
    if focus:
        reasons.append(f"Primary focus: {humanize_muscle(focus)}")

    largest = profile.largest_muscle
    if largest and largest != focus:
        reasons.append(f"Also loads the {humanize_muscle(largest)}, the largest muscle involved")

    return reasons


# ======================================================================
# Main entry point
# ======================================================================


def recommend(
    analysis: ActivityAnalysis,
    candidates: Iterable[ExerciseProfile],
    desired_count: Optional[int] = None,
    config: Optional[RankerConfig] = None,
    performed_exercise_ids: Optional[Iterable[str | int]] = None,
) -> list[Recommendation]:
    """Rank candidate exercises for the user described by *analysis*.

    Args:
        analysis: Snapshot from :func:`app.intelligence.activity.analyze`.
        candidates: Exercise profiles the user may see, in catalog order.
        desired_count: Maximum number of results (``config.default_count``
            when ``None``).  ``0`` yields an empty list.
        config: Optional config override.
        performed_exercise_ids: Exercises the user has a history for.
            When given, other candidates are not recommended.

    Returns:
        Up to *desired_count* :class:`Recommendation` items, best first.

    Raises:
        ValueError: If *desired_count* is negative.
    """
    cfg = config or DEFAULT_RANKER_CONFIG
    count = cfg.default_count if desired_count is None else desired_count
    if count < 0:
        raise ValueError(f"desired_count must be >= 0, got {count}")
    if count == 0:
        return []

    eligible = _eligible_candidates(candidates, performed_exercise_ids)
    if not eligible:
        return []

    available = filter_by_recovery(eligible, analysis)
    target = _target_difficulty(analysis, cfg)

    scored: list[Recommendation] = []
    for profile in available:
        breakdown = score_breakdown(profile, analysis, target, cfg)
        scored.append(Recommendation(
            profile=profile,
            score=breakdown.total,
            reasoning=_generate_reasoning(profile, analysis, breakdown, cfg),
            breakdown=breakdown,
        ))

    scored.sort(key=lambda r: r.score, reverse=True)

    logger.info(
        "Ranked %d of %d eligible candidates (target difficulty %.1f), returning %d",
        len(scored), len(eligible), target, min(count, len(scored)),
    )
    return scored[:count]


class RecommendationRanker:
    """Holds a :class:`RankerConfig` and ranks catalogs with it."""

    def __init__(self, config: Optional[RankerConfig] = None) -> None:
        self.config = config or DEFAULT_RANKER_CONFIG

    def recommend(
        self,
        analysis: ActivityAnalysis,
        candidates: Iterable[ExerciseProfile],
        desired_count: Optional[int] = None,
        performed_exercise_ids: Optional[Iterable[str | int]] = None,
    ) -> list[Recommendation]:
        return recommend(
            analysis, candidates, desired_count,
            config=self.config,
            performed_exercise_ids=performed_exercise_ids,
        )
