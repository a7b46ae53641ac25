"""Data models for run-analytics."""

from .athlete import (
    FEMALE_TRIMP_CONSTANT,
    MALE_TRIMP_CONSTANT,
    PhysioProfile,
    Sex,
)
from .workout import (
    RunningMetrics,
    Sample,
    Workout,
    parse_workout,
    parse_workouts,
)

__all__ = [
    # Athlete
    "FEMALE_TRIMP_CONSTANT",
    "MALE_TRIMP_CONSTANT",
    "PhysioProfile",
    "Sex",
    # Workout
    "RunningMetrics",
    "Sample",
    "Workout",
    "parse_workout",
    "parse_workouts",
]
