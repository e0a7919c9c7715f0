"""Post-ranking filters applied to a recommendation list."""

from __future__ import annotations

from typing import Iterable, Optional

from app.schemas.activity import ActivityAnalysis
from app.schemas.recommendation import Recommendation

MOVEMENT_ARCHETYPES: tuple[str, ...] = ("push", "pull", "squat", "hinge", "carry", "core")
DIFFICULTY_LEVELS: tuple[int, ...] = (1, 2, 3, 4, 5)


def filter_recommendations(
    recommendations: Iterable[Recommendation],
    movement_archetype: Optional[str] = None,
    difficulty_level: Optional[int] = None,
    logged_only: bool = False,
    analysis: Optional[ActivityAnalysis] = None,
    category: Optional[str] = None,
) -> list[Recommendation]:
    """Keep recommendations matching every given filter, in order.

    *category* is matched case-insensitively against
    ``ExerciseProfile.category`` (``'strength'``, ``'plyometric'`` ...).

    Raises:
        ValueError: On an unknown archetype or difficulty level, or when
            *logged_only* is requested without an *analysis*.
    """
    if movement_archetype is not None:
        movement_archetype = movement_archetype.strip().lower()
        if movement_archetype not in MOVEMENT_ARCHETYPES:
            raise ValueError(
                f"Unknown movement_archetype: '{movement_archetype}'.  "
                f"Available: {list(MOVEMENT_ARCHETYPES)}"
            )
    if difficulty_level is not None and difficulty_level not in DIFFICULTY_LEVELS:
        raise ValueError(
            f"difficulty_level must be one of {list(DIFFICULTY_LEVELS)}, got {difficulty_level}"
        )
    if logged_only and analysis is None:
        raise ValueError("logged_only requires an activity analysis.")
    if category is not None:
        category = category.strip().lower()

    kept = []
    for rec in recommendations:
        profile = rec.profile
        if movement_archetype and profile.movement_archetype != movement_archetype:
            continue
        if difficulty_level is not None and profile.difficulty_level != difficulty_level:
            continue
        if category and profile.category != category:
            continue
        if logged_only and not analysis.was_exercise_recently_performed(profile.exercise_id):
            continue
        kept.append(rec)
    return kept
