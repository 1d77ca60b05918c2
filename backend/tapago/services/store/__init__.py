"""
Stores - user-scoped database operations for each aggregate.
"""
from tapago.services.store.workouts import WorkoutStore, normalize_exercise_order
from tapago.services.store.workout_types import WorkoutTypeStore
from tapago.services.store.weights import WeightStore

__all__ = [
    "WorkoutStore",
    "WorkoutTypeStore",
    "WeightStore",
    "normalize_exercise_order",
]
