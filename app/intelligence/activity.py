"""
Activity analysis — recent training history to per-muscle workload.

This module turns a window of logged exercises into an
:class:`~app.schemas.activity.ActivityAnalysis` snapshot.  Unlike a
recovery model (hours to days), the workload score tracks how much
stress each muscle has accumulated over the **last month**.

Model
-----
Every logged exercise deposits load on each muscle it involves::

    contribution = recency × intensity × role_weight

and contributions are summed per muscle, then clamped to [0, 1].

* **recency** decays linearly from 1.0 ("now") to a floor at the
  window cutoff::

      recency = max(floor, 1 - days_ago / window_days)

* **intensity** grows with set count and load and saturates.  Each set
  contributes an effort between 0.5 (bodyweight) and 1.0 (very heavy)::

      effort(w)  = 0.5 + 0.5 × w / (w + reference_weight)
      intensity  = min(1, Σ effort / saturation_sets)

* **role_weight** is strictly ordered:
  primary_mover > synergist > stabilizer.

Design choices
--------------
1. **Hard cutoff** — entries older than ``window_days`` are ignored
   entirely; they are not decayed to the floor.
2. **Single "now"** — the reference time is passed in once and reused
   for every entry, so decay is consistent within one call.
3. **Metadata optional** — exercises without muscle data still count
   toward recency and, when labelled, toward archetype usage.
"""

from __future__ import annotations

import datetime
import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable, Optional, Self

from pydantic import BaseModel, Field, model_validator

from app.schemas.activity import ActivityAnalysis
from app.schemas.exercise import MuscleRole
from app.schemas.workout import LiftSet, WorkoutEntry

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_ROLE_WEIGHTS: dict[MuscleRole, float] = {
    MuscleRole.PRIMARY_MOVER: 1.0,
    MuscleRole.SYNERGIST: 0.7,
    MuscleRole.STABILIZER: 0.4,
}

_ROLE_ORDER = (MuscleRole.PRIMARY_MOVER, MuscleRole.SYNERGIST, MuscleRole.STABILIZER)


class AnalyzerConfig(BaseModel):
    """Configuration for the activity analysis."""

    window_days: int = Field(31, ge=1, le=365)
    recency_floor: float = Field(0.1, ge=0.0, le=1.0)
    saturation_sets: float = Field(
        5.0, gt=0.0,
        description="Summed set effort at which intensity reaches 1.0",
    )
    reference_weight: float = Field(
        60.0, gt=0.0,
        description="Load at which a set counts for 75% effort",
    )
    role_weights: dict[MuscleRole, float] = Field(
        default_factory=lambda: dict(_DEFAULT_ROLE_WEIGHTS),
    )

    @model_validator(mode="after")
    def validate_role_weights(self) -> Self:
        """Every role needs a positive weight, strictly decreasing by role."""
        missing = [r.value for r in _ROLE_ORDER if r not in self.role_weights]
        if missing:
            raise ValueError(f"Missing role weights: {missing}")

        weights = [self.role_weights[r] for r in _ROLE_ORDER]
        if weights[-1] <= 0.0:
            raise ValueError("Role weights must be positive.")
        if not all(a > b for a, b in zip(weights, weights[1:])):
            raise ValueError(
                "Cannot mix timezone-aware and naive datetimes: "
                f"entry {entry.exercise_id!r} logged_at={entry.logged_at.isoformat()}, "
                f"now={now.isoformat()}"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> AnalyzerConfig:
        return cls(window_days=settings.ANALYSIS_WINDOW_DAYS)


DEFAULT_ANALYZER_CONFIG = AnalyzerConfig()


# ======================================================================
# Factors
# ======================================================================


def _days_ago(logged_at: datetime.datetime, now: datetime.datetime) -> float:
    """Fractional days elapsed; future entries count as performed now."""
    seconds = (now - logged_at).total_seconds()
    return max(seconds, 0.0) / 86400.0


def _recency_factor(days_ago: float, cfg: AnalyzerConfig) -> float:
    return max(cfg.recency_floor, 1.0 - days_ago / cfg.window_days)


def _set_effort(lift_set: LiftSet, reference_weight: float) -> float:
    weight = lift_set.weight
    return 0.5 + 0.5 * weight / (weight + reference_weight)


def _intensity_factor(sets: Iterable[LiftSet], cfg: AnalyzerConfig) -> float:
    effort = sum(_set_effort(s, cfg.reference_weight) for s in sets)
    return min(1.0, effort / cfg.saturation_sets)


# ======================================================================
# Passes
# ======================================================================


def _is_aware(moment: datetime.datetime) -> bool:
    return moment.tzinfo is not None and moment.utcoffset() is not None


def _check_timezones(entries: list[WorkoutEntry], now: datetime.datetime) -> None:
    """All timestamps must be either timezone-aware or naive, like *now*."""
    aware = _is_aware(now)
    for entry in entries:
        if _is_aware(entry.logged_at) != aware:
            raise ValueError(
                "Cannot mix timezone-aware and naive datetimes: "
                f"entry {entry.exercise_id!r} logged_at={entry.logged_at.isoformat()}, "
                f"now={now.isoformat()}"
            )


def _within_window(
    entries: Iterable[WorkoutEntry],
    now: datetime.datetime,
    cfg: AnalyzerConfig,
) -> list[WorkoutEntry]:
    cutoff = now - datetime.timedelta(days=cfg.window_days)
    kept = []
    dropped = 0
    for entry in entries:
        if entry.logged_at < cutoff:
            dropped += 1
            continue
        kept.append(entry)

    logger.debug(
        "Activity window %s..%s: kept %d entries, dropped %d",
        cutoff.isoformat(), now.isoformat(), len(kept), dropped,
    )
    return kept


def calculate_muscle_workload(
    entries: Iterable[WorkoutEntry],
    now: datetime.datetime,
    cfg: AnalyzerConfig,
) -> dict[str, float]:
    """Accumulate ``recency × intensity × role_weight`` per muscle.

    *entries* must already be restricted to the analysis window.
    Scores are clamped to [0, 1].
    """
    totals: dict[str, float] = defaultdict(float)

    for entry in entries:
        if entry.profile is None or not entry.profile.muscles or not entry.sets:
            continue

        recency = _recency_factor(_days_ago(entry.logged_at, now), cfg)
        intensity = _intensity_factor(entry.sets, cfg)

        for muscle in entry.profile.muscles:
            totals[muscle.name] += recency * intensity * cfg.role_weights[muscle.role]

    return {name: min(max(score, 0.0), 1.0) for name, score in totals.items()}


def identify_movement_patterns(entries: Iterable[WorkoutEntry]) -> dict[str, int]:
    """Count entries per non-empty movement archetype."""
    frequency: dict[str, int] = defaultdict(int)
    for entry in entries:
        if entry.profile is None or not entry.profile.movement_archetype:
            continue
        frequency[entry.profile.movement_archetype] += 1
    return dict(frequency)


def find_recent_exercises(entries: Iterable[WorkoutEntry]) -> frozenset[str]:
    return frozenset(entry.exercise_id for entry in entries)


def _latest(
    target: dict[str, datetime.datetime],
    key: str,
    moment: datetime.datetime,
) -> None:
    current = target.get(key)
    if current is None or moment > current:
        target[key] = moment


def get_muscle_last_worked(entries: Iterable[WorkoutEntry]) -> dict[str, datetime.datetime]:
    """Most recent timestamp at which each muscle was a primary mover.

    Entries logged without any sets did not load a muscle and are skipped.
    """
    last_worked: dict[str, datetime.datetime] = {}
    for entry in entries:
        if entry.profile is None or not entry.sets:
            continue
        for muscle in entry.profile.primary_mover_muscles():
            _latest(last_worked, muscle, entry.logged_at)
    return last_worked


def _exercise_history(
    entries: Iterable[WorkoutEntry],
) -> tuple[dict[str, datetime.datetime], dict[str, int]]:
    last_performed: dict[str, datetime.datetime] = {}
    difficulty: dict[str, int] = {}
    for entry in entries:
        _latest(last_performed, entry.exercise_id, entry.logged_at)
        if entry.profile is not None and entry.profile.has_metadata:
            difficulty[entry.exercise_id] = entry.profile.difficulty_level
    return last_performed, difficulty


# ======================================================================
# Main entry point
# ======================================================================


def analyze(
    entries: Iterable[WorkoutEntry],
    now: datetime.datetime,
    config: Optional[AnalyzerConfig] = None,
) -> ActivityAnalysis:
    """Analyse a user's recent workout history.

    Args:
        entries: Logged exercises for one user, joined with their
            exercise profiles.  Any lookback; the window is applied here.
        now: Reference datetime used for decay and recovery checks.
        config: Optional config override.

    Returns:
        :class:`ActivityAnalysis` for the window ending at *now*.

    Raises:
        ValueError: If timezone-aware and naive datetimes are mixed
            between *now* and the entries.
    """
    cfg = config or DEFAULT_ANALYZER_CONFIG
    entries = list(entries)
    _check_timezones(entries, now)
    window = _within_window(entries, now, cfg)

    last_performed, difficulty = _exercise_history(window)

    analysis = ActivityAnalysis(
        muscle_workload=calculate_muscle_workload(window, now, cfg),
        movement_archetypes=identify_movement_patterns(window),
        recent_exercises=find_recent_exercises(window),
        muscle_last_worked=get_muscle_last_worked(window),
        analysis_date=now,
        exercise_last_performed=last_performed,
        exercise_difficulty=difficulty,
        window_days=cfg.window_days,
    )

    logger.debug(
        "Analysed %d entries: %d muscles loaded, archetypes=%s",
        len(window), len(analysis.muscle_workload), analysis.movement_archetypes,
    )
    return analysis


class ActivityAnalyzer:
    """Holds an :class:`AnalyzerConfig` and analyses histories with it."""

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        self.config = config or DEFAULT_ANALYZER_CONFIG

    def analyze(
        self,
        entries: Iterable[WorkoutEntry],
        now: datetime.datetime,
    ) -> ActivityAnalysis:
        return analyze(entries, now, self.config)
