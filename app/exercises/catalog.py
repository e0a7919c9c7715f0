"""
Built-in exercise catalog.

Each entry is an :class:`~app.schemas.exercise.ExerciseProfile` with the
muscle involvement, movement archetype, difficulty and recovery time of a
well-known exercise.  Callers that keep their own catalog can pass their
own profiles to the ranker; this one is a ready-made default and the
reference data for the simulation script.

To add a new exercise, call :func:`register_exercise` or simply append to
``EXERCISE_CATALOG`` at import time.
"""

from __future__ import annotations

from app.schemas.exercise import (
    ContractionType,
    ExerciseProfile,
    MuscleInvolvement,
    MuscleRole,
)

# ======================================================================
# Catalog storage
# ======================================================================

EXERCISE_CATALOG: dict[str, ExerciseProfile] = {}


def register_exercise(profile: ExerciseProfile) -> None:
    """Register an exercise profile in the global catalog."""
    EXERCISE_CATALOG[profile.exercise_id] = profile


def get_exercise(exercise_id: str) -> ExerciseProfile | None:
    """Look up an exercise by its ID.  Returns ``None`` if not found."""
    return EXERCISE_CATALOG.get(exercise_id)


def all_exercises() -> list[ExerciseProfile]:
    """Return every registered profile in registration order."""
    return list(EXERCISE_CATALOG.values())


# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
P = MuscleRole.PRIMARY_MOVER
S = MuscleRole.SYNERGIST
B = MuscleRole.STABILIZER
TON = ContractionType.ISOTONIC
MET = ContractionType.ISOMETRIC


def _muscles(*rows: tuple[str, MuscleRole, ContractionType]) -> tuple[MuscleInvolvement, ...]:
    return tuple(
        MuscleInvolvement(name=name, role=role, contraction_type=ctype)
        for name, role, ctype in rows
    )


# ======================================================================
# Built-in exercises
# ======================================================================

_EXERCISES: list[ExerciseProfile] = [
    # ── Squat ─────────────────────────────────────────────────────
    ExerciseProfile(
        exercise_id="back_squat", title="Back Squat",
        movement_archetype="squat", category="strength",
        difficulty_level=4, recovery_hours=72,
        primary_mover="rectus_femoris", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("rectus_femoris", P, TON), ("vastus_lateralis", P, TON),
            ("gluteus_maximus", P, TON), ("biceps_femoris", S, TON),
            ("gastrocnemius", S, TON), ("erector_spinae", B, MET),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="front_squat", title="Front Squat",
        movement_archetype="squat", category="strength",
        difficulty_level=5, recovery_hours=72,
        primary_mover="rectus_femoris", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("rectus_femoris", P, TON), ("vastus_lateralis", P, TON),
            ("gluteus_maximus", P, TON), ("biceps_femoris", S, TON),
            ("gastrocnemius", S, TON), ("erector_spinae", B, MET),
            ("rectus_abdominis", B, MET), ("upper_trapezius", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="walking_lunge", title="Walking Lunge (2-DB)",
        movement_archetype="squat", category="strength",
        difficulty_level=3, recovery_hours=48,
        primary_mover="rectus_femoris", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("rectus_femoris", P, TON), ("gluteus_maximus", P, TON),
            ("biceps_femoris", S, TON), ("gastrocnemius", S, TON),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="back_rack_lunge", title="Back Rack Lunge (Step Back)",
        movement_archetype="squat", category="strength",
        difficulty_level=4, recovery_hours=48,
        primary_mover="rectus_femoris", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("rectus_femoris", P, TON), ("gluteus_maximus", P, TON),
            ("biceps_femoris", S, TON), ("gastrocnemius", S, TON),
            ("rectus_abdominis", B, MET), ("erector_spinae", B, MET),
        ),
    ),
    # ── Hinge ─────────────────────────────────────────────────────
    ExerciseProfile(
        exercise_id="deadlift", title="Deadlift",
        movement_archetype="hinge", category="strength",
        difficulty_level=5, recovery_hours=72,
        primary_mover="gluteus_maximus", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("gluteus_maximus", P, TON), ("biceps_femoris", P, TON),
            ("semitendinosus", P, TON), ("erector_spinae", P, TON),
            ("rectus_femoris", S, TON), ("latissimus_dorsi", S, MET),
            ("rhomboids", S, MET), ("middle_trapezius", S, MET),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="romanian_deadlift", title="Romanian Deadlift",
        movement_archetype="hinge", category="strength",
        difficulty_level=3, recovery_hours=48,
        primary_mover="biceps_femoris", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("biceps_femoris", P, TON), ("semitendinosus", P, TON),
            ("gluteus_maximus", P, TON), ("erector_spinae", S, MET),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="hip_thrust", title="Hip Thrust (Barbell)",
        movement_archetype="hinge", category="strength",
        difficulty_level=2, recovery_hours=48,
        primary_mover="gluteus_maximus", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("gluteus_maximus", P, TON), ("biceps_femoris", S, TON),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="kettlebell_swing", title="Kettlebell Swing",
        movement_archetype="hinge", category="strength",
        difficulty_level=3, recovery_hours=48,
        primary_mover="gluteus_maximus", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("gluteus_maximus", P, TON), ("biceps_femoris", P, TON),
            ("erector_spinae", S, TON), ("rectus_abdominis", B, MET),
            ("anterior_deltoid", B, MET),
        ),
    ),
    # ── Push ──────────────────────────────────────────────────────
    ExerciseProfile(
        exercise_id="bench_press", title="Bench Press",
        movement_archetype="push", category="strength",
        difficulty_level=3, recovery_hours=48,
        primary_mover="pectoralis_major", largest_muscle="pectoralis_major",
        muscles=_muscles(
            ("pectoralis_major", P, TON), ("anterior_deltoid", S, TON),
            ("triceps_brachii", S, TON), ("rectus_abdominis", B, MET),
            ("erector_spinae", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="db_bench_press", title="DB Bench Press",
        movement_archetype="push", category="strength",
        difficulty_level=4, recovery_hours=48,
        primary_mover="pectoralis_major", largest_muscle="pectoralis_major",
        muscles=_muscles(
            ("pectoralis_major", P, TON), ("anterior_deltoid", S, TON),
            ("triceps_brachii", S, TON), ("rectus_abdominis", B, MET),
            ("erector_spinae", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="strict_press", title="Strict Press",
        movement_archetype="push", category="strength",
        difficulty_level=4, recovery_hours=48,
        primary_mover="anterior_deltoid", largest_muscle="anterior_deltoid",
        muscles=_muscles(
            ("anterior_deltoid", P, TON), ("medial_deltoid", S, TON),
            ("triceps_brachii", S, TON), ("upper_trapezius", S, TON),
            ("rectus_abdominis", B, MET), ("erector_spinae", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="push_press", title="Push Press",
        movement_archetype="push", category="strength",
        difficulty_level=4, recovery_hours=48,
        primary_mover="anterior_deltoid", largest_muscle="anterior_deltoid",
        muscles=_muscles(
            ("anterior_deltoid", P, TON), ("medial_deltoid", S, TON),
            ("triceps_brachii", S, TON), ("upper_trapezius", S, TON),
            ("rectus_femoris", S, TON), ("gluteus_maximus", S, TON),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="push_up", title="Push-Up",
        movement_archetype="push", category="strength",
        difficulty_level=2, recovery_hours=24,
        primary_mover="pectoralis_major", largest_muscle="pectoralis_major",
        muscles=_muscles(
            ("pectoralis_major", P, TON), ("anterior_deltoid", S, TON),
            ("triceps_brachii", S, TON), ("rectus_abdominis", B, MET),
        ),
    ),
    # ── Pull ──────────────────────────────────────────────────────
    ExerciseProfile(
        exercise_id="pull_up", title="Pull-Ups",
        movement_archetype="pull", category="strength",
        difficulty_level=4, recovery_hours=48,
        primary_mover="latissimus_dorsi", largest_muscle="latissimus_dorsi",
        muscles=_muscles(
            ("latissimus_dorsi", P, TON), ("rhomboids", S, TON),
            ("middle_trapezius", S, TON), ("biceps_brachii", S, TON),
            ("posterior_deltoid", S, TON), ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="chin_up", title="Chin-Ups",
        movement_archetype="pull", category="strength",
        difficulty_level=4, recovery_hours=48,
        primary_mover="latissimus_dorsi", largest_muscle="latissimus_dorsi",
        muscles=_muscles(
            ("latissimus_dorsi", P, TON), ("biceps_brachii", P, TON),
            ("rhomboids", S, TON), ("middle_trapezius", S, TON),
            ("posterior_deltoid", S, TON), ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="pendlay_row", title="Pendlay Row",
        movement_archetype="pull", category="strength",
        difficulty_level=3, recovery_hours=48,
        primary_mover="latissimus_dorsi", largest_muscle="latissimus_dorsi",
        muscles=_muscles(
            ("latissimus_dorsi", P, TON), ("rhomboids", P, TON),
            ("middle_trapezius", P, TON), ("posterior_deltoid", S, TON),
            ("biceps_brachii", S, TON), ("erector_spinae", B, MET),
            ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="ring_row", title="Ring Row",
        movement_archetype="pull", category="strength",
        difficulty_level=2, recovery_hours=48,
        primary_mover="latissimus_dorsi", largest_muscle="latissimus_dorsi",
        muscles=_muscles(
            ("latissimus_dorsi", P, TON), ("rhomboids", P, TON),
            ("middle_trapezius", P, TON), ("posterior_deltoid", S, TON),
            ("biceps_brachii", S, TON), ("rectus_abdominis", B, MET),
        ),
    ),
    ExerciseProfile(
        exercise_id="power_clean", title="Power Clean",
        movement_archetype="pull", category="plyometric",
        difficulty_level=5, recovery_hours=72,
        primary_mover="gluteus_maximus", largest_muscle="gluteus_maximus",
        muscles=_muscles(
            ("gluteus_maximus", P, TON), ("biceps_femoris", P, TON),
            ("rectus_femoris", P, TON), ("erector_spinae", P, TON),
            ("upper_trapezius", S, TON), ("anterior_deltoid", S, TON),
            ("gastrocnemius", S, TON), ("rectus_abdominis", B, MET),
        ),
    ),
    # ── Core ──────────────────────────────────────────────────────
    ExerciseProfile(
        exercise_id="l_sit", title="L-Sit (Tucked, Parallelites)",
        movement_archetype="core", category="strength",
        difficulty_level=4, recovery_hours=24,
        primary_mover="rectus_abdominis", largest_muscle="rectus_abdominis",
        muscles=_muscles(
            ("rectus_abdominis", P, MET), ("external_obliques", P, MET),
            ("anterior_deltoid", S, MET), ("triceps_brachii", S, MET),
            ("latissimus_dorsi", B, MET),
        ),
    ),
]

for _ex in _EXERCISES:
    register_exercise(_ex)
