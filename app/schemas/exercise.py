"""
Exercise intelligence schemas.

Each exercise is described by the muscles it involves and a coarse
movement pattern.  A muscle involvement is a typed triple::

    (name, role, contraction_type)

* **role** — ``primary_mover`` (drives the movement), ``synergist``
  (assists the primary mover) or ``stabilizer`` (holds a joint still).
* **contraction_type** — ``isotonic`` (the muscle changes length) or
  ``isometric`` (static hold).

The ``movement_archetype`` (push / pull / squat / hinge / carry / core)
is used to encourage balance between movement patterns, and
``recovery_hours`` is the minimum rest before the same primary movers
should be loaded again.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ======================================================================
# Enums
# ======================================================================

class MuscleRole(str, Enum):
    """How a muscle participates in an exercise."""
    PRIMARY_MOVER = "primary_mover"
    SYNERGIST = "synergist"
    STABILIZER = "stabilizer"


class ContractionType(str, Enum):
    """Whether the muscle shortens/lengthens or holds position."""
    ISOTONIC = "isotonic"
    ISOMETRIC = "isometric"


# ======================================================================
# Muscle involvement
# ======================================================================

class MuscleInvolvement(BaseModel):
    """A single muscle taking part in an exercise."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Muscle slug, e.g. 'pectoralis_major'")
    role: MuscleRole
    contraction_type: ContractionType = ContractionType.ISOTONIC

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Muscle name must not be blank.")
        return value


# ======================================================================
# Exercise profile
# ======================================================================

class ExerciseProfile(BaseModel):
    """Muscle and movement metadata for one exercise."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str = Field(..., min_length=1, description="Exercise identifier, e.g. 'bench_press'")
    title: str = Field(default="", description="Human-readable name")
    movement_archetype: str = Field(
        default="",
        description="Movement pattern label, e.g. 'push', 'pull', 'squat'",
    )
    category: str = Field(default="", description="Exercise category, e.g. 'strength', 'plyometric'")
    difficulty_level: int = Field(default=3, ge=1, le=5, description="Difficulty on a 1-5 scale")
    recovery_hours: int = Field(
        default=48, ge=0,
        description="Hours before the same primary movers should be worked again",
    )
    muscles: tuple[MuscleInvolvement, ...] = Field(default_factory=tuple)
    primary_mover: str | None = Field(
        default=None,
        description="Headline primary mover shown to the user",
    )
    largest_muscle: str | None = Field(
        default=None,
        description="Biggest muscle the exercise loads, shown when it differs from the focus",
    )

    @field_validator("exercise_id", mode="before")
    @classmethod
    def coerce_exercise_id(cls, value):
        # Integer primary keys are accepted and normalised to strings.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("movement_archetype", "category")
    @classmethod
    def normalise_label(cls, value: str) -> str:
        return value.strip().lower()

    # ------------------------------------------------------------------
    # Muscle lookups
    # ------------------------------------------------------------------

    def _muscles_with_role(self, role: MuscleRole) -> list[str]:
        return [m.name for m in self.muscles if m.role == role]

    def primary_mover_muscles(self) -> list[str]:
        return self._muscles_with_role(MuscleRole.PRIMARY_MOVER)

    def synergist_muscles(self) -> list[str]:
        return self._muscles_with_role(MuscleRole.SYNERGIST)

    def stabilizer_muscles(self) -> list[str]:
        return self._muscles_with_role(MuscleRole.STABILIZER)

    def isotonic_muscles(self) -> list[str]:
        return [m.name for m in self.muscles if m.contraction_type == ContractionType.ISOTONIC]

    def isometric_muscles(self) -> list[str]:
        return [m.name for m in self.muscles if m.contraction_type == ContractionType.ISOMETRIC]

    @property
    def display_name(self) -> str:
        return self.title or self.exercise_id

    @property
    def focus_muscle(self) -> str | None:
        """Headline primary mover, falling back to the first primary mover."""
        if self.primary_mover:
            return self.primary_mover
        primaries = self.primary_mover_muscles()
        return primaries[0] if primaries else None

    @property
    def has_metadata(self) -> bool:
        """``True`` when the profile carries muscle or movement data."""
        return bool(self.muscles) or bool(self.movement_archetype)
