"""
Race time prediction (Riegel's formula).

Predictions extrapolate from one seed workout: the longest qualifying run of
the last eight weeks, with the faster run winning ties on distance. Longer
verified efforts predict endurance events better than short fast ones.

    T2 = T1 * (D2 / D1) ^ 1.06

References:
- Riegel, P.S. (1981). Athletic records and human endurance. American Scientist.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from ..models.workout import Workout
from ..utils.formatting import format_duration


logger = logging.getLogger(__name__)

RIEGEL_EXPONENT = 1.06
SEED_LOOKBACK_DAYS = 56  # 8 weeks
SEED_MIN_DISTANCE_M = 3000.0


class RaceDistance(Enum):
    """Standard race distances with values in meters."""
    FIVE_K = 5000.0
    TEN_K = 10000.0
    HALF_MARATHON = 21097.5
    MARATHON = 42195.0

    @classmethod
    def from_string(cls, s: str) -> Optional["RaceDistance"]:
        """Parse race distance from string."""
        mapping = {
            "5k": cls.FIVE_K,
            "5km": cls.FIVE_K,
            "10k": cls.TEN_K,
            "10km": cls.TEN_K,
            "half": cls.HALF_MARATHON,
            "half_marathon": cls.HALF_MARATHON,
            "21k": cls.HALF_MARATHON,
            "marathon": cls.MARATHON,
            "full": cls.MARATHON,
            "42k": cls.MARATHON,
        }
        return mapping.get(s.lower().replace("-", "_").replace(" ", "_"))

    @property
    def display_name(self) -> str:
        names = {
            RaceDistance.FIVE_K: "5K",
            RaceDistance.TEN_K: "10K",
            RaceDistance.HALF_MARATHON: "Half",
            RaceDistance.MARATHON: "Full",
        }
        return names[self]

    @property
    def distance_km(self) -> float:
        return self.value / 1000


@dataclass
class RacePrediction:
    """A predicted finish time for one standard distance."""

    distance: RaceDistance
    predicted_time: float  # seconds

    @property
    def formatted_time(self) -> str:
        return format_duration(self.predicted_time)

    def to_dict(self) -> dict:
        return {
            "distance": self.distance.display_name,
            "distance_m": self.distance.value,
            "predicted_time_sec": round(self.predicted_time, 1),
            "formatted_time": self.formatted_time,
        }


@dataclass
class PredictionResult:
    """Predictions for every standard distance plus the seed they came from."""

    seed_workout: Workout
    predictions: List[RacePrediction] = field(default_factory=list)

    def get(self, distance: RaceDistance) -> Optional[RacePrediction]:
        for prediction in self.predictions:
            if prediction.distance is distance:
                return prediction
        return None

    def to_dict(self) -> dict:
        return {
            "seed_workout_id": self.seed_workout.id,
            "seed_distance_m": self.seed_workout.distance,
            "seed_duration_sec": self.seed_workout.duration,
            "predictions": [p.to_dict() for p in self.predictions],
        }


def calculate_riegel_time(
    seed_time_sec: float,
    seed_distance_m: float,
    target_distance_m: float,
    exponent: float = RIEGEL_EXPONENT,
) -> float:
    """
    Predict a finish time at another distance with Riegel's formula.

    Args:
        seed_time_sec: Time of the reference effort in seconds
        seed_distance_m: Distance of the reference effort in meters (> 0)
        target_distance_m: Distance to predict in meters
        exponent: Fatigue exponent (1.06 empirically)

    Returns:
        Predicted time in seconds (0 for a non-positive seed distance)
    """
    if seed_distance_m <= 0:
        return 0.0
    return seed_time_sec * (target_distance_m / seed_distance_m) ** exponent


def _is_aware(dt: datetime) -> bool:
    return dt.utcoffset() is not None


def _default_now(workouts: Sequence[Workout]) -> datetime:
    if any(_is_aware(w.end_date) for w in workouts):
        return datetime.now(timezone.utc)
    return datetime.now()


def _comparable(dt: datetime, reference: datetime) -> datetime:
    """Match ``dt`` to the awareness of ``reference``; naive times are local time."""
    if _is_aware(dt) == _is_aware(reference):
        return dt
    if _is_aware(reference):
        return dt.astimezone()
    return dt.astimezone().replace(tzinfo=None)


def find_seed_workout(
    workouts: Iterable[Workout],
    now: Optional[datetime] = None,
    lookback_days: int = SEED_LOOKBACK_DAYS,
    min_distance_m: float = SEED_MIN_DISTANCE_M,
) -> Optional[Workout]:
    """
    Pick the best recent run to extrapolate from.

    Candidates ended within ``lookback_days`` of ``now``, cover at least
    ``min_distance_m`` and have a positive duration. The longest wins;
    equal distances go to the faster average pace. Naive and aware
    timestamps may be mixed; naive ones are read as local time.
    """
    workouts = list(workouts)
    if now is None:
        now = _default_now(workouts)
    cutoff = now - timedelta(days=lookback_days)

    candidates = [
        w for w in workouts
        if _comparable(w.end_date, cutoff) >= cutoff
        and w.distance >= min_distance_m
        and w.duration > 0
    ]
    if not candidates:
        return None

    candidates.sort(key=lambda w: (-w.distance, w.average_pace))
    return candidates[0]


def predict_races(
    workouts: Iterable[Workout],
    now: Optional[datetime] = None,
    lookback_days: int = SEED_LOOKBACK_DAYS,
    min_distance_m: float = SEED_MIN_DISTANCE_M,
    exponent: float = RIEGEL_EXPONENT,
) -> Optional[PredictionResult]:
    """
    Predict 5K, 10K, half and full marathon times from recent training.

    Args:
        workouts: Workout history, in any order
        now: Reference time for the lookback window (defaults to now)
        lookback_days: How far back a seed may have ended
        min_distance_m: Shortest run accepted as a seed
        exponent: Riegel fatigue exponent

    Returns:
        PredictionResult with one prediction per RaceDistance (5K, 10K,
        half, full in that order), or None when no run qualifies
    """
    seed = find_seed_workout(
        workouts,
        now=now,
        lookback_days=lookback_days,
        min_distance_m=min_distance_m,
    )
    if seed is None:
        logger.debug("No qualifying seed workout for race prediction")
        return None

    predictions = [
        RacePrediction(
            distance=race_distance,
            predicted_time=calculate_riegel_time(
                seed.duration, seed.distance, race_distance.value, exponent
            ),
        )
        for race_distance in RaceDistance
    ]

    logger.debug(
        f"Race predictions seeded by workout {seed.id} "
        f"({seed.distance:.0f} m in {seed.duration:.0f} s)"
    )
    return PredictionResult(seed_workout=seed, predictions=predictions)
