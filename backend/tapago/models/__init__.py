from tapago.models.workout import Workout, WorkoutExercise
from tapago.models.workout_type import WorkoutType
from tapago.models.weight import WeightEntry

__all__ = [
    "Workout",
    "WorkoutExercise",
    "WorkoutType",
    "WeightEntry",
]
