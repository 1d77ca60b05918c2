"""Tests for the per-user stores and the fitlog service."""
import uuid
from datetime import date, datetime

import pytest
from sqlalchemy import func, select

from tapago.core.exceptions import DuplicateDateError, InvalidDataError, NotFoundError, ProtectedResourceError
from tapago.models import Workout, WorkoutType
from tapago.services.analytics import Period
from tapago.services.fitlog import FitLogService
from tapago.services.seed import DEFAULT_WORKOUT_TYPES, seed_default_types
from tapago.services.store import WeightStore, WorkoutStore, WorkoutTypeStore, normalize_exercise_order
from tests.conftest import OTHER_USER, TEST_USER


async def _count_workouts(db_session, day: date) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(Workout).where(Workout.user_id == TEST_USER.user_id, Workout.date == day)
    )
    return result.scalar_one()


async def _count_types(db_session) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(WorkoutType).where(WorkoutType.user_id == TEST_USER.user_id)
    )
    return result.scalar_one()


# ---------------------------------------------------------------------------
# Exercise ordering
# ---------------------------------------------------------------------------

def test_normalize_exercise_order_is_contiguous():
    exercises = [{"name": "Supino", "order": 5}, {"name": "Remada", "order": 2}, {"name": "Agachamento"}]
    normalized = normalize_exercise_order(exercises)
    
    # Agachamento has no order and ranks at its list position (2), after Remada
    assert [e["order"] for e in normalized] == [0, 1, 2]
    assert [e["name"] for e in normalized] == ["Remada", "Agachamento", "Supino"]
    assert "order" not in exercises[2]


def test_normalize_exercise_order_without_orders_keeps_list_order():
    exercises = [{"name": "Supino"}, {"name": "Remada"}, {"name": "Agachamento", "order": 0}]
    normalized = normalize_exercise_order(exercises)
    
    assert [e["name"] for e in normalized] == ["Supino", "Agachamento", "Remada"]
    assert [e["order"] for e in normalized] == [0, 1, 2]


# ---------------------------------------------------------------------------
# Workout types
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_defaults_are_seeded_once_per_user(db_session):
    store = WorkoutTypeStore(db_session, TEST_USER)
    types = await store.list()
    
    assert [t.name for t in types] == [name for name, *_ in DEFAULT_WORKOUT_TYPES]
    assert [t.order_index for t in types] == list(range(len(DEFAULT_WORKOUT_TYPES)))
    assert len(await store.list()) == len(DEFAULT_WORKOUT_TYPES)
    
    other = await WorkoutTypeStore(db_session, OTHER_USER).list()
    assert {t.id for t in other}.isdisjoint({t.id for t in types})


@pytest.mark.asyncio
async def test_seeding_twice_keeps_one_set_of_defaults(db_session, session_factory):
    first = await seed_default_types(db_session, TEST_USER.user_id)
    assert len(first) == len(DEFAULT_WORKOUT_TYPES)
    
    async with session_factory() as other_session:
        assert await seed_default_types(other_session, TEST_USER.user_id) == []
    
    assert await _count_types(db_session) == len(DEFAULT_WORKOUT_TYPES)


@pytest.mark.asyncio
async def test_concurrent_first_reads_seed_once(db_session, session_factory):
    # Another request seeds between this store's empty read and its insert
    store = WorkoutTypeStore(db_session, TEST_USER)
    fetch_all = store._fetch_all
    reads = []
    
    async def stale_first_read():
        reads.append(1)
        if len(reads) == 1:
            async with session_factory() as other_session:
                await seed_default_types(other_session, TEST_USER.user_id)
            return []
        return await fetch_all()
    
    store._fetch_all = stale_first_read
    types = await store.list()
    
    assert [t.name for t in types] == [name for name, *_ in DEFAULT_WORKOUT_TYPES]
    assert await _count_types(db_session) == len(DEFAULT_WORKOUT_TYPES)


@pytest.mark.asyncio
async def test_default_types_cannot_be_removed(db_session):
    store = WorkoutTypeStore(db_session, TEST_USER)
    types = await store.list()
    treino_a = next(t for t in types if t.name == "Treino A")
    treino_g = next(t for t in types if t.name == "Treino G")
    
    with pytest.raises(ProtectedResourceError):
        await store.delete(treino_a.id)
    
    await store.delete(treino_g.id)
    assert "Treino G" not in [t.name for t in await store.list()]


@pytest.mark.asyncio
async def test_create_update_and_reorder_types(db_session):
    store = WorkoutTypeStore(db_session, TEST_USER)
    await store.list()
    
    yoga = await store.create(name="  Yoga ", icon="🧘", color="hsl(280 60% 50%)")
    assert yoga.name == "Yoga"
    assert yoga.order_index == len(DEFAULT_WORKOUT_TYPES)
    
    updated = await store.update(
        yoga.id,
        name="Yoga Flow",
        exercises=[{"name": "Saudação ao sol", "sets": 1, "reps": "10"}],
    )
    assert updated.name == "Yoga Flow"
    assert updated.icon == "🧘"
    assert updated.exercises[0]["name"] == "Saudação ao sol"
    
    reordered = await store.reorder([yoga.id])
    assert reordered[0].id == yoga.id
    assert [t.order_index for t in reordered] == list(range(len(reordered)))


@pytest.mark.asyncio
async def test_reorder_rejects_unknown_ids(db_session):
    store = WorkoutTypeStore(db_session, TEST_USER)
    await store.list()
    with pytest.raises(NotFoundError):
        await store.reorder([uuid.uuid4()])


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_save_on_occupied_date_updates_in_place(db_session):
    store = WorkoutStore(db_session, TEST_USER)
    day = date(2024, 4, 2)
    
    first, created = await store.save(day, custom_type="Corrida", notes="5km")
    assert created
    
    second, created = await store.save(day, custom_type="Natação", notes="1km")
    assert not created
    assert second.id == first.id
    assert second.custom_type == "Natação"
    assert await _count_workouts(db_session, day) == 1


@pytest.mark.asyncio
async def test_workouts_are_scoped_per_user(db_session):
    day = date(2024, 4, 2)
    mine, _ = await WorkoutStore(db_session, TEST_USER).save(day, custom_type="Corrida")
    theirs, created = await WorkoutStore(db_session, OTHER_USER).save(day, custom_type="Boxe")
    
    assert created
    assert theirs.id != mine.id
    with pytest.raises(NotFoundError):
        await WorkoutStore(db_session, OTHER_USER).get(mine.id)


@pytest.mark.asyncio
async def test_type_reference_is_validated(db_session):
    store = WorkoutStore(db_session, TEST_USER)
    other_types = await WorkoutTypeStore(db_session, OTHER_USER).list()
    
    with pytest.raises(InvalidDataError):
        await store.save(date(2024, 4, 2))
    with pytest.raises(NotFoundError):
        await store.save(date(2024, 4, 2), type_id=other_types[0].id)


@pytest.mark.asyncio
async def test_moving_onto_occupied_date_fails(db_session):
    store = WorkoutStore(db_session, TEST_USER)
    monday, _ = await store.save(date(2024, 4, 1), custom_type="Corrida")
    await store.save(date(2024, 4, 2), custom_type="Natação")
    
    with pytest.raises(DuplicateDateError):
        await store.update(monday.id, day=date(2024, 4, 2))
    
    assert (await store.get(monday.id)).date == date(2024, 4, 1)
    moved = await store.update(monday.id, day=date(2024, 4, 3))
    assert moved.date == date(2024, 4, 3)


@pytest.mark.asyncio
async def test_selecting_type_replaces_custom_label(db_session):
    types = await WorkoutTypeStore(db_session, TEST_USER).list()
    store = WorkoutStore(db_session, TEST_USER)
    workout, _ = await store.save(date(2024, 4, 1), custom_type="Corrida")
    
    updated = await store.update(workout.id, type_id=types[1].id)
    assert updated.type_id == types[1].id
    assert updated.custom_type is None


@pytest.mark.asyncio
async def test_remove_exercise_reindexes(db_session):
    store = WorkoutStore(db_session, TEST_USER)
    workout, _ = await store.save(
        date(2024, 4, 1),
        custom_type="Peito",
        exercises=[
            {"name": "Supino", "sets": 4, "reps": "10"},
            {"name": "Crucifixo", "sets": 3, "reps": "12"},
            {"name": "Flexão", "sets": 3, "reps": "máximo"},
        ],
    )
    assert [e.exercise_order for e in workout.exercises] == [0, 1, 2]
    
    updated = await store.remove_exercise(workout.id, workout.exercises[1].id)
    assert [e.name for e in updated.exercises] == ["Supino", "Flexão"]
    assert [e.exercise_order for e in updated.exercises] == [0, 1]


@pytest.mark.asyncio
async def test_exercise_changes_touch_workout(db_session):
    long_ago = datetime(2020, 1, 1)
    store = WorkoutStore(db_session, TEST_USER)
    workout, _ = await store.save(
        date(2024, 4, 1),
        custom_type="Peito",
        exercises=[{"name": "Supino", "sets": 4, "reps": "10"}, {"name": "Crucifixo", "sets": 3, "reps": "12"}],
    )
    
    workout.updated_at = long_ago
    await db_session.commit()
    updated = await store.remove_exercise(workout.id, workout.exercises[0].id)
    assert updated.updated_at > long_ago
    
    updated.updated_at = long_ago
    await db_session.commit()
    updated = await store.update(workout.id, exercises=[{"name": "Flexão", "sets": 3, "reps": "máximo"}])
    assert updated.updated_at > long_ago


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_weight_upsert_by_date(db_session):
    store = WeightStore(db_session, TEST_USER)
    first, created = await store.save(72.4, date(2024, 4, 1))
    assert created
    
    second, created = await store.save(71.9, date(2024, 4, 1))
    assert not created
    assert second.id == first.id
    assert [e.weight for e in await store.list()] == [71.9]


# ---------------------------------------------------------------------------
# Fitlog service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_snapshot_follows_confirmed_writes(db_session):
    fitlog = await FitLogService(db_session, TEST_USER).load()
    assert fitlog.workouts == []
    assert len(fitlog.types) == len(DEFAULT_WORKOUT_TYPES)
    
    workout, _ = await fitlog.save_workout(date(2024, 4, 1), custom_type="Corrida")
    await fitlog.save_workout(date(2024, 4, 2), custom_type="Corrida")
    assert len(fitlog.workouts) == 2
    
    stats = fitlog.get_stats(Period.WEEK, date(2024, 4, 3), today=date(2024, 4, 3))
    assert stats.total_workouts == 2
    assert stats.streak == 2
    
    await fitlog.delete_workout(workout.id)
    assert [w.date for w in fitlog.workouts] == [date(2024, 4, 2)]


@pytest.mark.asyncio
async def test_failed_write_leaves_snapshot_untouched(db_session):
    fitlog = await FitLogService(db_session, TEST_USER).load()
    monday, _ = await fitlog.save_workout(date(2024, 4, 1), custom_type="Corrida")
    await fitlog.save_workout(date(2024, 4, 2), custom_type="Natação")
    before = list(fitlog.workouts)
    
    with pytest.raises(DuplicateDateError):
        await fitlog.update_workout(monday.id, day=date(2024, 4, 2))
    assert fitlog.workouts == before
    
    treino_a = next(t for t in fitlog.types if t.name == "Treino A")
    types_before = list(fitlog.types)
    with pytest.raises(ProtectedResourceError):
        await fitlog.remove_workout_type(uuid.UUID(treino_a.id))
    assert fitlog.types == types_before


@pytest.mark.asyncio
async def test_removed_type_keeps_workout_reference(db_session):
    fitlog = await FitLogService(db_session, TEST_USER).load()
    yoga = await fitlog.add_workout_type(name="Yoga", icon="🧘", color="hsl(280 60% 50%)")
    await fitlog.save_workout(date(2024, 4, 1), type_id=yoga.id)
    
    await fitlog.remove_workout_type(yoga.id)
    await fitlog.load()
    
    (workout,) = fitlog.workouts
    assert workout.type_id == str(yoga.id)
    assert fitlog.type_label(workout) == "Treino"
    stats = fitlog.get_stats(Period.MONTH, date(2024, 4, 1), today=date(2024, 4, 1))
    assert stats.most_frequent_type == "Desconhecido"


@pytest.mark.asyncio
async def test_snapshot_queries_by_date_and_period(db_session):
    fitlog = await FitLogService(db_session, TEST_USER).load()
    for day in (date(2024, 3, 30), date(2024, 4, 1), date(2024, 4, 5)):
        await fitlog.save_workout(day, custom_type="Corrida")
    
    assert (await fitlog.get_workout_by_date(date(2024, 4, 1))).custom_type == "Corrida"
    assert await fitlog.get_workout_by_date(date(2024, 4, 2)) is None
    
    in_range = fitlog.get_workouts_by_period(date(2024, 4, 1), date(2024, 4, 30))
    assert sorted(w.date for w in in_range) == [date(2024, 4, 1), date(2024, 4, 5)]
    assert [w.date for w in fitlog.get_workouts_by_period(end=date(2024, 3, 31))] == [date(2024, 3, 30)]
    assert [w.date for w in fitlog.history(start=date(2024, 4, 2))] == [date(2024, 4, 5)]


@pytest.mark.asyncio
async def test_weight_snapshot_follows_writes(db_session):
    fitlog = await FitLogService(db_session, TEST_USER).load()
    first, _ = await fitlog.save_weight(70.0, date(2024, 1, 1))
    await fitlog.save_weight(68.0, date(2024, 1, 10))
    
    assert fitlog.get_weight_change(Period.ALL) == -2
    assert fitlog.get_latest_weight().weight == 68.0
    
    await fitlog.delete_weight(first.id)
    assert [e.weight for e in fitlog.get_weight_entries(Period.ALL)] == [68.0]
    assert fitlog.get_weight_change(Period.ALL) is None
    
    with pytest.raises(NotFoundError):
        await fitlog.delete_weight(first.id)
