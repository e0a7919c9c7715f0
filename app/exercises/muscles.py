"""
Trackable muscles and underwork detection.

Muscle slugs follow anatomical names (``pectoralis_major``,
``biceps_femoris`` ...) so that exercise metadata from different sources
lines up on the same keys.
"""

from __future__ import annotations

from typing import Iterable

from app.schemas.activity import ActivityAnalysis

UPPER_BODY_MUSCLES: tuple[str, ...] = (
    "pectoralis_major", "pectoralis_minor",
    "latissimus_dorsi", "rhomboids", "middle_trapezius", "lower_trapezius", "upper_trapezius",
    "anterior_deltoid", "medial_deltoid", "posterior_deltoid",
    "biceps_brachii", "triceps_brachii", "brachialis", "brachioradialis",
)

LOWER_BODY_MUSCLES: tuple[str, ...] = (
    "rectus_femoris", "vastus_lateralis", "vastus_medialis", "vastus_intermedius",
    "biceps_femoris", "semitendinosus", "semimembranosus",
    "gluteus_maximus", "gluteus_medius", "gluteus_minimus",
    "gastrocnemius", "soleus",
)

CORE_MUSCLES: tuple[str, ...] = (
    "rectus_abdominis", "external_obliques", "internal_obliques", "transverse_abdominis",
    "erector_spinae", "multifidus",
)

TRACKED_MUSCLES: tuple[str, ...] = UPPER_BODY_MUSCLES + LOWER_BODY_MUSCLES + CORE_MUSCLES

# Muscles below this workload are considered underworked.
UNDERWORK_THRESHOLD = 0.3


def humanize_muscle(name: str) -> str:
    """``'pectoralis_major'`` -> ``'pectoralis major'``."""
    return name.replace("_", " ")


def find_underworked_muscles(
    analysis: ActivityAnalysis,
    threshold: float = UNDERWORK_THRESHOLD,
    muscles: Iterable[str] = TRACKED_MUSCLES,
) -> list[str]:
    """Return the muscles from *muscles* whose workload is below *threshold*."""
    return [
        muscle for muscle in muscles
        if analysis.get_muscle_workload_score(muscle) < threshold
    ]
