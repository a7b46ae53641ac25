"""Shared fixtures for run-analytics tests."""

from datetime import datetime, timedelta
from typing import Optional

import pytest

from run_analytics.config import Settings
from run_analytics.models.athlete import PhysioProfile
from run_analytics.models.workout import Workout


def build_workout(
    start: datetime,
    distance: float,
    duration: float,
    avg_hr: Optional[float] = None,
    workout_id: Optional[str] = None,
    **kwargs,
) -> Workout:
    """Build a workout whose end date is start + duration."""
    fields = dict(
        start_date=start,
        end_date=start + timedelta(seconds=duration),
        distance=distance,
        duration=duration,
        average_heart_rate=avg_hr,
        **kwargs,
    )
    if workout_id is not None:
        fields["id"] = workout_id
    return Workout(**fields)


@pytest.fixture
def make_workout():
    """Factory for workouts."""
    return build_workout


@pytest.fixture
def physio():
    """Male athlete, max HR 190, resting HR 60."""
    return PhysioProfile(max_hr=190, resting_hr=60, trimp_constant=1.92)


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None)
