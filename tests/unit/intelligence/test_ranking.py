"""
Unit tests for recommendation ranking.

Tests eligibility, the recovery filter, each scoring factor, ordering,
truncation and the generated reasoning.
"""

import datetime

import pytest

from app.intelligence.activity import analyze
from app.intelligence.ranking import (
    DEFAULT_RANKER_CONFIG,
    RankerConfig,
    RecommendationRanker,
    _target_difficulty,
    filter_by_recovery,
    muscles_in_recovery,
    recommend,
)
from app.schemas.activity import ActivityAnalysis
from app.schemas.exercise import ExerciseProfile, MuscleInvolvement, MuscleRole
from app.schemas.workout import LiftSet, WorkoutEntry

NOW = datetime.datetime(2026, 3, 1, 12, 0)

P = MuscleRole.PRIMARY_MOVER
S = MuscleRole.SYNERGIST


# ======================================================================
# Helpers
# ======================================================================


def _analysis(
    workload: dict[str, float] | None = None,
    archetypes: dict[str, int] | None = None,
    recent: tuple[str, ...] = (),
    last_worked: dict[str, datetime.datetime] | None = None,
    difficulty: dict[str, int] | None = None,
) -> ActivityAnalysis:
    return ActivityAnalysis(
        muscle_workload=workload or {},
        movement_archetypes=archetypes or {},
        recent_exercises=recent,
        muscle_last_worked=last_worked or {},
        analysis_date=NOW,
        exercise_difficulty=difficulty or {},
    )


def _candidate(
    exercise_id: str,
    primary: str | list[str] = "pectoralis_major",
    archetype: str = "push",
    difficulty: int = 3,
    recovery_hours: int = 48,
    synergists: tuple[str, ...] = (),
) -> ExerciseProfile:
    primaries = [primary] if isinstance(primary, str) else primary
    muscles = [MuscleInvolvement(name=m, role=P) for m in primaries]
    muscles += [MuscleInvolvement(name=m, role=S) for m in synergists]
    return ExerciseProfile(
        exercise_id=exercise_id,
        title=exercise_id.replace("_", " ").title(),
        movement_archetype=archetype,
        difficulty_level=difficulty,
        recovery_hours=recovery_hours,
        muscles=muscles,
    )


def _scores(recommendations) -> dict[str, float]:
    return {r.exercise_id: r.score for r in recommendations}


# ======================================================================
# Recovery filter
# ======================================================================


class TestRecoveryFilter:

    def test_worked_one_hour_ago_is_excluded(self):
        analysis = _analysis(last_worked={"pectoralis_major": NOW - datetime.timedelta(hours=1)})
        result = recommend(analysis, [_candidate("bench_press", recovery_hours=48)], 5)
        assert result == []

    def test_worked_49_hours_ago_is_eligible(self):
        analysis = _analysis(last_worked={"pectoralis_major": NOW - datetime.timedelta(hours=49)})
        result = recommend(analysis, [_candidate("bench_press", recovery_hours=48)], 5)
        assert [r.exercise_id for r in result] == ["bench_press"]

    def test_never_worked_muscle_never_excludes(self):
        analysis = _analysis(last_worked={"latissimus_dorsi": NOW})
        result = recommend(analysis, [_candidate("bench_press", recovery_hours=500)], 5)
        assert len(result) == 1

    def test_any_recovering_primary_excludes(self):
        candidate = _candidate("chin_up", primary=["latissimus_dorsi", "biceps_brachii"], archetype="pull")
        analysis = _analysis(last_worked={
            "latissimus_dorsi": NOW - datetime.timedelta(days=10),
            "biceps_brachii": NOW - datetime.timedelta(hours=12),
        })
        assert muscles_in_recovery(candidate, analysis) == [("biceps_brachii", 12.0)]
        assert filter_by_recovery([candidate], analysis) == []

    def test_recent_synergist_does_not_exclude(self):
        candidate = _candidate("bench_press", synergists=("triceps_brachii",))
        analysis = _analysis(last_worked={"triceps_brachii": NOW - datetime.timedelta(hours=1)})
        assert filter_by_recovery([candidate], analysis) == [candidate]

    def test_entry_without_sets_does_not_start_recovery(self):
        profile = _candidate("bench_press", recovery_hours=48)
        logged = WorkoutEntry(
            exercise_id="bench_press",
            logged_at=NOW - datetime.timedelta(hours=1),
            sets=[],
            profile=profile,
        )
        result = recommend(analyze([logged], NOW), [profile], 1)
        assert [r.exercise_id for r in result] == ["bench_press"]

    def test_zero_recovery_hours_never_excludes(self):
        analysis = _analysis(last_worked={"pectoralis_major": NOW})
        assert len(recommend(analysis, [_candidate("push_up", recovery_hours=0)], 5)) == 1


# ======================================================================
# Scoring factors
# ======================================================================


class TestScoring:

    def test_underworked_muscle_scores_higher(self):
        analysis = _analysis(workload={"latissimus_dorsi": 0.1, "pectoralis_major": 0.8})
        fresh = _candidate("row", primary="latissimus_dorsi")
        loaded = _candidate("bench_press", primary="pectoralis_major")
        scores = _scores(recommend(analysis, [loaded, fresh], 2))
        assert scores["row"] > scores["bench_press"]

    def test_unused_archetype_scores_higher(self):
        analysis = _analysis(archetypes={"push": 10})
        push = _candidate("bench_press", primary="pectoralis_major", archetype="push")
        pull = _candidate("row", primary="latissimus_dorsi", archetype="pull")
        scores = _scores(recommend(analysis, [push, pull], 2))
        assert scores["row"] > scores["bench_press"]

    def test_recently_performed_scores_lower(self):
        analysis = _analysis(recent=("bench_press",))
        repeat = _candidate("bench_press")
        other = _candidate("db_bench_press")
        result = recommend(analysis, [repeat, other], 2)
        scores = _scores(result)
        assert scores["bench_press"] < scores["db_bench_press"]
        assert result[0].exercise_id == "db_bench_press"

    def test_difficulty_fit_prefers_target(self):
        analysis = _analysis(difficulty={"a": 3, "b": 4})
        # Target is 3.5 + 0.5 = 4.0
        assert _target_difficulty(analysis, DEFAULT_RANKER_CONFIG) == pytest.approx(4.0)
        on_target = _candidate("front_squat", primary="rectus_femoris", difficulty=4)
        easy = _candidate("goblet_squat", primary="rectus_femoris", difficulty=1)
        scores = _scores(recommend(analysis, [easy, on_target], 2))
        assert scores["front_squat"] > scores["goblet_squat"]

    def test_target_difficulty_is_capped(self):
        analysis = _analysis(difficulty={"a": 5, "b": 5})
        assert _target_difficulty(analysis, DEFAULT_RANKER_CONFIG) == pytest.approx(5.0)

    def test_target_difficulty_without_history(self):
        assert _target_difficulty(_analysis(), DEFAULT_RANKER_CONFIG) == pytest.approx(3.0)

    def test_breakdown_sums_to_score(self):
        analysis = _analysis(workload={"pectoralis_major": 0.5}, archetypes={"push": 2}, recent=("bench_press",))
        rec = recommend(analysis, [_candidate("bench_press")], 1)[0]
        assert rec.breakdown.total == pytest.approx(rec.score)
        assert rec.breakdown.recently_performed is True
        assert rec.breakdown.recency_penalty == pytest.approx(DEFAULT_RANKER_CONFIG.recency_penalty)
        assert rec.breakdown.underwork == pytest.approx(0.5 * DEFAULT_RANKER_CONFIG.underwork_weight)
        assert rec.breakdown.archetype_diversity == pytest.approx(
            DEFAULT_RANKER_CONFIG.archetype_weight / 2.0
        )

    def test_synergist_only_candidate_uses_all_muscles(self):
        profile = ExerciseProfile(
            exercise_id="plank",
            movement_archetype="core",
            muscles=[MuscleInvolvement(name="rectus_abdominis", role=MuscleRole.STABILIZER)],
        )
        fresh = recommend(_analysis(), [profile], 1)[0]
        tired = recommend(_analysis(workload={"rectus_abdominis": 0.9}), [profile], 1)[0]
        assert fresh.score > tired.score

    def test_archetype_only_candidate_is_ranked(self):
        profile = ExerciseProfile(exercise_id="farmers_carry", movement_archetype="carry")
        result = recommend(_analysis(), [profile], 1)
        assert result[0].breakdown.underwork == 0.0


# ======================================================================
# Eligibility, ordering and truncation
# ======================================================================


class TestRecommend:

    def test_empty_catalog(self):
        assert recommend(_analysis(), [], 5) == []

    def test_zero_count(self):
        assert recommend(_analysis(), [_candidate("bench_press")], 0) == []

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError, match="desired_count"):
            recommend(_analysis(), [_candidate("bench_press")], -1)

    def test_candidates_without_metadata_are_excluded(self):
        bare = ExerciseProfile(exercise_id="mystery")
        assert recommend(_analysis(), [bare], 5) == []

    def test_performed_filter(self):
        candidates = [_candidate("bench_press"), _candidate("row", primary="latissimus_dorsi")]
        result = recommend(_analysis(), candidates, 5, performed_exercise_ids={"row"})
        assert [r.exercise_id for r in result] == ["row"]

    def test_performed_filter_empty_history(self):
        assert recommend(_analysis(), [_candidate("bench_press")], 5, performed_exercise_ids=[]) == []

    def test_truncates_to_desired_count(self):
        candidates = [_candidate(f"ex_{i}", primary=f"muscle_{i}") for i in range(6)]
        assert len(recommend(_analysis(), candidates, 3)) == 3

    def test_default_count(self):
        candidates = [_candidate(f"ex_{i}", primary=f"muscle_{i}") for i in range(8)]
        assert len(recommend(_analysis(), candidates)) == DEFAULT_RANKER_CONFIG.default_count

    def test_sorted_descending(self):
        analysis = _analysis(workload={"a": 0.9, "b": 0.5, "c": 0.1})
        candidates = [_candidate(name, primary=name) for name in ("a", "b", "c")]
        result = recommend(analysis, candidates, 3)
        assert [r.exercise_id for r in result] == ["c", "b", "a"]

    def test_ties_keep_catalog_order(self):
        candidates = [_candidate(f"ex_{i}") for i in range(4)]
        result = recommend(_analysis(), candidates, 4)
        assert [r.exercise_id for r in result] == ["ex_0", "ex_1", "ex_2", "ex_3"]
        assert len({r.score for r in result}) == 1

    def test_deterministic(self):
        analysis = _analysis(workload={"a": 0.4}, archetypes={"push": 3}, recent=("x",))
        candidates = [
            _candidate("x", primary="a"),
            _candidate("y", primary="b", archetype="pull"),
            _candidate("z", primary="c", archetype="hinge", difficulty=5),
        ]
        first = recommend(analysis, candidates, 3)
        second = recommend(analysis, candidates, 3)
        assert [(r.exercise_id, r.score) for r in first] == [(r.exercise_id, r.score) for r in second]

    def test_ranker_uses_its_config(self):
        ranker = RecommendationRanker(RankerConfig(default_count=2))
        candidates = [_candidate(f"ex_{i}", primary=f"m_{i}") for i in range(4)]
        assert len(ranker.recommend(_analysis(), candidates)) == 2


class TestEndToEnd:

    def test_unused_pull_ranks_above_repeated_push(self):
        push = _candidate("bench_press", primary="pectoralis_major", archetype="push", recovery_hours=24)
        pull = _candidate("row", primary="latissimus_dorsi", archetype="pull", recovery_hours=24)
        history = [
            WorkoutEntry(
                exercise_id="bench_press",
                logged_at=NOW - datetime.timedelta(days=d),
                sets=[LiftSet(weight=60, reps=8)] * 3,
                profile=push,
            )
            for d in (4, 8)
        ]
        analysis = analyze(history, NOW)
        assert analysis.movement_archetypes == {"push": 2}

        result = recommend(analysis, [push, pull], desired_count=2)
        assert [r.exercise_id for r in result] == ["row", "bench_press"]


# ======================================================================
# Reasoning
# ======================================================================


class TestReasoning:

    def test_underworked_reason(self):
        analysis = _analysis(workload={"pectoralis_major": 0.1})
        rec = recommend(analysis, [_candidate("bench_press")], 1)[0]
        assert "Targets underworked muscles: pectoralis major (10% workload)" in rec.reasoning

    def test_loaded_reason(self):
        analysis = _analysis(workload={"pectoralis_major": 0.8})
        rec = recommend(analysis, [_candidate("bench_press")], 1)[0]
        assert "Primary movers already loaded: pectoralis major (80% workload)" in rec.reasoning

    def test_archetype_reasons(self):
        analysis = _analysis(archetypes={"push": 2, "squat": 7})
        result = recommend(analysis, [
            _candidate("bench_press", archetype="push"),
            _candidate("row", primary="latissimus_dorsi", archetype="pull"),
            _candidate("squat", primary="rectus_femoris", archetype="squat"),
        ], 3)
        reasons = {r.exercise_id: " | ".join(r.reasoning) for r in result}
        assert "Adds variety to push movements (used 2 times in the last 31 days)" in reasons["bench_press"]
        assert "Introduces new movement pattern: pull" in reasons["row"]
        assert "Movement pattern squat already used 7 times" in reasons["squat"]

    def test_difficulty_and_focus(self):
        rec = recommend(_analysis(), [_candidate("bench_press", difficulty=3)], 1)[0]
        assert "Difficulty level: 3/5" in rec.reasoning
        assert rec.reasoning[-1] == "Primary focus: pectoralis major"

    def test_largest_muscle_reason(self):
        candidate = _candidate(
            "romanian_deadlift", primary="biceps_femoris", archetype="hinge",
        ).model_copy(update={"largest_muscle": "gluteus_maximus"})
        rec = recommend(_analysis(), [candidate], 1)[0]
        assert rec.reasoning[-1] == "Also loads the gluteus maximus, the largest muscle involved"

    def test_largest_muscle_same_as_focus_not_repeated(self):
        candidate = _candidate("bench_press").model_copy(
            update={"largest_muscle": "pectoralis_major"},
        )
        rec = recommend(_analysis(), [candidate], 1)[0]
        assert not any(r.startswith("Also loads") for r in rec.reasoning)

    def test_recent_reason(self):
        rec = recommend(_analysis(recent=("bench_press",)), [_candidate("bench_press")], 1)[0]
        assert any(r.startswith("Recently performed") for r in rec.reasoning)


class TestRankerConfig:

    def test_dominant_difficulty_weight_rejected(self):
        with pytest.raises(ValueError, match="difficulty_weight"):
            RankerConfig(difficulty_weight=2.5)
