"""Tests for workout distributions."""
from datetime import date

from tapago.services.analytics import WorkoutSnapshot, by_month, by_type, by_weekday
from tapago.services.analytics.labels import FALLBACK_COLOR, FALLBACK_ICON, MONTH_NAMES, WEEKDAY_NAMES
from tests.conftest import make_workouts


def test_by_type_is_sparse_and_resolves_names(workout_types):
    workouts = [
        WorkoutSnapshot(id="1", date=date(2024, 1, 1), type_id="t-a"),
        WorkoutSnapshot(id="2", date=date(2024, 1, 2), custom_type="Corrida"),
        WorkoutSnapshot(id="3", date=date(2024, 1, 3), type_id="t-a"),
        WorkoutSnapshot(id="4", date=date(2024, 1, 4), type_id="removed"),
    ]
    buckets = {b.name: b for b in by_type(workouts, workout_types)}
    
    assert set(buckets) == {"Treino A", "Corrida", "Outro"}
    assert buckets["Treino A"].count == 2
    assert buckets["Treino A"].icon == "🅰️"
    assert buckets["Corrida"].icon == FALLBACK_ICON
    assert buckets["Outro"].color == FALLBACK_COLOR


def test_custom_label_matching_a_type_name_uses_its_style(workout_types):
    workouts = [WorkoutSnapshot(id="1", date=date(2024, 1, 1), custom_type="Treino B")]
    (bucket,) = by_type(workouts, workout_types)
    assert bucket.icon == "🅱️"


def test_by_weekday_puts_sunday_last():
    # 2024-01-07 is a Sunday, 2024-01-08 a Monday
    buckets = by_weekday(make_workouts(date(2024, 1, 7), date(2024, 1, 8), date(2024, 1, 14)))
    assert [b.name for b in buckets] == WEEKDAY_NAMES
    assert buckets[0].count == 1
    assert buckets[-1].count == 2


def test_by_weekday_sums_to_input_size():
    workouts = make_workouts(*(date(2024, 3, day) for day in range(1, 32, 2)))
    assert sum(b.count for b in by_weekday(workouts)) == len(workouts)
    assert len(by_weekday([])) == 7


def test_by_month_is_scoped_to_reference_year():
    workouts = make_workouts(date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 20), date(2024, 7, 4))
    buckets = by_month(workouts, date(2024, 6, 1))
    
    assert [b.name for b in buckets] == MONTH_NAMES
    assert buckets[0].count == 2
    assert buckets[6].count == 1
    assert sum(b.count for b in buckets) == 3
