"""Training load calculations (TRIMP)."""

import logging
import math
from datetime import date, tzinfo
from typing import Dict, Iterable, Optional

from ..models.athlete import PhysioProfile
from ..models.workout import Workout


logger = logging.getLogger(__name__)

# Banister's scaling factor, applied for every coefficient preset
TRIMP_SCALE = 0.64


def calculate_hr_reserve_ratio(avg_hr: float, rest_hr: float, max_hr: float) -> float:
    """
    Fraction of heart rate reserve used, clamped to [0, 1].

    A degenerate profile (max HR not above resting HR) has no reserve to
    measure against and yields 0.
    """
    hr_reserve = max_hr - rest_hr
    if hr_reserve <= 0:
        return 0.0

    ratio = (avg_hr - rest_hr) / hr_reserve
    return max(0.0, min(1.0, ratio))


def calculate_trimp(
    duration_min: float,
    avg_hr: float,
    rest_hr: float,
    max_hr: float,
    trimp_constant: float,
) -> float:
    """
    Training Impulse using Banister's exponential formula.

    TRIMP accounts for both duration and intensity, with an exponential
    weighting that emphasizes high-intensity work.

    Args:
        duration_min: Duration of activity in minutes
        avg_hr: Average heart rate during activity
        rest_hr: Resting heart rate
        max_hr: Maximum heart rate
        trimp_constant: Exponential weighting coefficient (1.92 male,
                        1.67 female in Banister's research)

    Returns:
        TRIMP value (arbitrary units, typical session: 50-150)
    """
    duration_min = max(0.0, duration_min)
    delta_hr = calculate_hr_reserve_ratio(avg_hr, rest_hr, max_hr)

    # TRIMP = duration * delta_hr * 0.64 * e^(k * delta_hr)
    return duration_min * delta_hr * TRIMP_SCALE * math.exp(trimp_constant * delta_hr)


def calculate_workout_trimp(workout: Workout, physio: PhysioProfile) -> float:
    """TRIMP for one workout; workouts without heart rate data score 0."""
    if workout.average_heart_rate is None:
        return 0.0

    return calculate_trimp(
        duration_min=workout.duration / 60.0,
        avg_hr=workout.average_heart_rate,
        rest_hr=physio.resting_hr,
        max_hr=physio.max_hr,
        trimp_constant=physio.trimp_constant,
    )


def workout_day(workout: Workout, tz: Optional[tzinfo] = None) -> date:
    """Calendar day a workout counts towards (the day it ended)."""
    end = workout.end_date
    if tz is not None and end.utcoffset() is not None:
        end = end.astimezone(tz)
    return end.date()


def calculate_daily_trimps(
    workouts: Iterable[Workout],
    physio: PhysioProfile,
    tz: Optional[tzinfo] = None,
) -> Dict[date, float]:
    """
    Sum TRIMP per calendar day.

    Every workout's day appears in the result, including days whose
    workouts carry no heart rate (their total is 0).
    """
    if physio.heart_rate_reserve <= 0:
        logger.warning(
            f"Degenerate heart rate reserve (max {physio.max_hr}, "
            f"resting {physio.resting_hr}); TRIMP will be 0"
        )

    daily: Dict[date, float] = {}
    for workout in workouts:
        day = workout_day(workout, tz)
        daily[day] = daily.get(day, 0.0) + calculate_workout_trimp(workout, physio)
    return daily
