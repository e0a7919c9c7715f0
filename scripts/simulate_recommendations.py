"""What would the engine recommend TODAY?

Replays a few weeks of logged sets against the built-in exercise
catalog, then prints the activity analysis and the ranked
recommendations with their reasoning.

Usage:
    python scripts/simulate_recommendations.py
"""

import datetime
import sys
from collections import defaultdict
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.config import settings
from app.core.logging import configure_logging
from app.exercises.catalog import all_exercises, get_exercise
from app.exercises.muscles import find_underworked_muscles, humanize_muscle
from app.intelligence.activity import ActivityAnalyzer, AnalyzerConfig
from app.intelligence.ranking import RankerConfig, RecommendationRanker
from app.schemas.workout import LiftSet, WorkoutEntry

NOW = datetime.datetime(2026, 2, 8, 18, 0)

# (date, catalog exercise id, weight, reps), one row per set.
RAW_DATA = [
    ("2026-01-02", "deadlift", 80, 5),
    ("2026-01-02", "deadlift", 90, 3),
    ("2026-01-02", "pendlay_row", 50, 8),
    ("2026-01-02", "pendlay_row", 50, 8),
    ("2026-01-12", "back_squat", 60, 6),
    ("2026-01-12", "back_squat", 70, 5),
    ("2026-01-12", "bench_press", 50, 8),
    ("2026-01-12", "bench_press", 55, 6),
    ("2026-01-12", "pull_up", 0, 6),
    ("2026-01-26", "deadlift", 90, 3),
    ("2026-01-26", "deadlift", 95, 2),
    ("2026-01-26", "kettlebell_swing", 24, 15),
    ("2026-01-26", "kettlebell_swing", 24, 15),
    ("2026-02-04", "back_squat", 70, 5),
    ("2026-02-04", "back_squat", 75, 4),
    ("2026-02-04", "back_squat", 75, 4),
    ("2026-02-04", "strict_press", 35, 6),
    ("2026-02-04", "strict_press", 35, 6),
    ("2026-02-07", "bench_press", 55, 6),
    ("2026-02-07", "bench_press", 57.5, 5),
    ("2026-02-07", "bench_press", 60, 3),
    ("2026-02-07", "push_up", 0, 15),
    ("2026-02-07", "push_up", 0, 12),
]


def build_entries(raw_data):
    """Group set rows into one WorkoutEntry per (date, exercise)."""
    grouped = defaultdict(list)
    for date, exercise_id, weight, reps in raw_data:
        grouped[(date, exercise_id)].append(LiftSet(weight=weight, reps=reps))

    entries = []
    for (date, exercise_id), sets in grouped.items():
        logged_at = datetime.datetime.combine(
            datetime.date.fromisoformat(date), datetime.time(18, 0),
        )
        entries.append(WorkoutEntry(
            exercise_id=exercise_id,
            logged_at=logged_at,
            sets=sets,
            profile=get_exercise(exercise_id),
        ))
    return entries


def main():
    configure_logging(settings.effective_log_level)

    entries = build_entries(RAW_DATA)
    analyzer = ActivityAnalyzer(AnalyzerConfig.from_settings(settings))
    ranker = RecommendationRanker(RankerConfig.from_settings(settings))

    analysis = analyzer.analyze(entries, NOW)
    performed = {e.exercise_id for e in entries}
    recommendations = ranker.recommend(
        analysis, all_exercises(), performed_exercise_ids=performed,
    )

    print()
    print("=" * 65)
    print(f"  Exercise recommendations — {NOW.strftime('%A %d %B %Y %H:%M')}")
    print("=" * 65)
    print()

    print("  Muscle workload:")
    print(f"  {'Muscle':<22} {'Workload':>9} {'Last worked':>14}")
    print("  " + "-" * 63)
    for muscle, score in sorted(analysis.muscle_workload.items(), key=lambda kv: -kv[1]):
        days = analysis.get_days_since_last_workout(muscle)
        last = f"{days:.1f}d ago" if days is not None else "--"
        print(f"  {humanize_muscle(muscle):<22} {score:>9.2f} {last:>14}")
    print()

    print("  Movement patterns:")
    for archetype, count in sorted(analysis.movement_archetypes.items()):
        print(f"    {archetype:<10} {count}")
    print()

    underworked = find_underworked_muscles(analysis)
    print(f"  Underworked muscles: {len(underworked)}")
    print()

    print("  " + "-" * 63)
    print("  RECOMMENDATIONS:")
    print("  " + "-" * 63)
    if not recommendations:
        print("  Nothing to recommend, every known exercise is still recovering.")
    for rank, rec in enumerate(recommendations, start=1):
        print(f"  {rank}. {rec.profile.display_name:<30} score {rec.score:.2f}")
        for reason in rec.reasoning:
            print(f"       - {reason}")
    print()


if __name__ == "__main__":
    main()
