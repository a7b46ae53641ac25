"""Per-kilometer split statistics.

Splits map distance to elapsed time proportionally (as if pace were even
across the run) and average the samples that fall inside each kilometer's
time window. This is a display aggregate, not a GPS distance cut.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ..models.workout import Sample, Workout
from ..utils.formatting import format_pace, format_whole


logger = logging.getLogger(__name__)

SPLIT_DISTANCE_M = 1000.0


@dataclass
class KilometerSplit:
    """Statistics for one kilometer; fields without sample coverage are None."""

    kilometer: int  # 1-based
    pace: Optional[float] = None  # seconds per km
    elevation: Optional[float] = None  # meters
    heart_rate: Optional[float] = None  # bpm

    @property
    def formatted_pace(self) -> str:
        return format_pace(self.pace)

    @property
    def formatted_elevation(self) -> str:
        return format_whole(self.elevation)

    @property
    def formatted_heart_rate(self) -> str:
        return format_whole(self.heart_rate)

    def to_dict(self) -> dict:
        return {
            "kilometer": self.kilometer,
            "pace_sec_per_km": round(self.pace, 1) if self.pace is not None else None,
            "elevation_m": round(self.elevation, 1) if self.elevation is not None else None,
            "heart_rate": round(self.heart_rate) if self.heart_rate is not None else None,
        }


def segment_time_window(
    workout: Workout,
    start_distance_m: float,
    end_distance_m: float,
) -> tuple[datetime, datetime]:
    """Map a distance range onto wall-clock time by linear interpolation."""
    start_offset = workout.duration * (start_distance_m / workout.distance)
    end_offset = workout.duration * (end_distance_m / workout.distance)
    return (
        workout.start_date + timedelta(seconds=start_offset),
        workout.start_date + timedelta(seconds=end_offset),
    )


def average_in_window(
    samples: Optional[Sequence[Sample]],
    window_start: datetime,
    window_end: datetime,
) -> Optional[float]:
    """Mean of sample values inside [window_start, window_end], or None."""
    if not samples:
        return None

    values = [
        s.value for s in samples
        if window_start <= s.timestamp <= window_end
    ]
    if not values:
        return None
    return sum(values) / len(values)


def pace_from_speed(speed_m_per_s: Optional[float]) -> Optional[float]:
    """Convert speed (m/s) to pace (s/km); None for missing or non-positive speed."""
    if speed_m_per_s is None or speed_m_per_s <= 0:
        return None
    return SPLIT_DISTANCE_M / speed_m_per_s


def calculate_kilometer_splits(workout: Workout) -> List[KilometerSplit]:
    """
    Calculate per-kilometer pace, elevation and heart rate.

    One split is produced per completed kilometer. Pace averages speed over
    the window before converting, so it is the pace of the mean speed. Each
    field degrades independently: a run without heart rate still gets pace
    and elevation.

    Args:
        workout: The workout to split

    Returns:
        List of KilometerSplit (empty under 1 km or with zero duration)
    """
    if workout.distance <= 0 or workout.duration <= 0:
        return []

    total_km = math.floor(workout.distance_km)
    splits: List[KilometerSplit] = []

    for km in range(1, total_km + 1):
        window_start, window_end = segment_time_window(
            workout,
            (km - 1) * SPLIT_DISTANCE_M,
            km * SPLIT_DISTANCE_M,
        )
        avg_speed = average_in_window(workout.speed_samples, window_start, window_end)

        splits.append(
            KilometerSplit(
                kilometer=km,
                pace=pace_from_speed(avg_speed),
                elevation=average_in_window(workout.elevation_samples, window_start, window_end),
                heart_rate=average_in_window(workout.heart_rate_samples, window_start, window_end),
            )
        )

    logger.debug(f"Calculated {len(splits)} kilometer splits for workout {workout.id}")
    return splits
