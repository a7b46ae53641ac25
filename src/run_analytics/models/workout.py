"""Workout data model.

A Workout is an immutable value. The acquisition layer creates it from a
basic workout record and enriches it as sample series arrive; every
enrichment step returns a new Workout (functional update) and leaves the
original untouched.

All sample series are optional and independent of each other. A device that
does not record power simply leaves ``power_samples`` as None.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ..exceptions import WorkoutValidationError
from ..utils.formatting import format_duration, format_pace


logger = logging.getLogger(__name__)

# Cadence derivation only pairs a stride sample with a speed sample this close in time
CADENCE_SPEED_MATCH_WINDOW_SEC = 10.0

HIGH_INTENSITY_DISTANCE_KM = 10.0
HIGH_INTENSITY_ENERGY_KCAL = 600.0

SERIES_FIELDS = (
    "heart_rate_samples",
    "speed_samples",
    "power_samples",
    "elevation_samples",
    "cadence_samples",
    "vertical_oscillation_samples",
    "ground_contact_time_samples",
    "stride_length_samples",
)


class Sample(BaseModel):
    """A single timestamped measurement (bpm, m/s, W, m, spm, cm, ms...)."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    value: float


SampleLike = Union[Sample, Tuple[datetime, float]]
SampleSeries = Tuple[Sample, ...]


def _as_samples(samples: Iterable[SampleLike]) -> SampleSeries:
    """Normalize samples given as Sample objects or (timestamp, value) pairs."""
    result = []
    for sample in samples:
        if isinstance(sample, Sample):
            result.append(sample)
        else:
            timestamp, value = sample
            result.append(Sample(timestamp=timestamp, value=value))
    return tuple(result)


def _mean(samples: Sequence[Sample]) -> Optional[float]:
    if not samples:
        return None
    return sum(s.value for s in samples) / len(samples)


class RunningMetrics(BaseModel):
    """Workout-level running form averages.

    Every field is optional since availability depends on the recording
    device.
    """

    model_config = ConfigDict(frozen=True)

    vertical_oscillation: Optional[float] = None  # cm
    ground_contact_time: Optional[float] = None  # ms
    cadence: Optional[float] = None  # steps/min
    stride_length: Optional[float] = None  # m
    ground_contact_time_balance: Optional[float] = None  # % left foot

    @property
    def vertical_oscillation_ratio(self) -> Optional[float]:
        """Vertical oscillation as a percentage of stride length."""
        if self.vertical_oscillation is None or self.stride_length is None:
            return None
        if self.stride_length <= 0:
            return None
        return (self.vertical_oscillation / 100.0) / self.stride_length * 100.0

    @property
    def has_any_data(self) -> bool:
        return any(
            v is not None
            for v in (
                self.vertical_oscillation,
                self.ground_contact_time,
                self.cadence,
                self.stride_length,
                self.ground_contact_time_balance,
            )
        )


class Workout(BaseModel):
    """One completed run.

    ``duration`` (seconds) is authoritative for all calculations and
    ``distance`` is in meters. Sample series carry no ordering guarantee.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    start_date: datetime
    end_date: datetime
    distance: float = Field(..., ge=0, description="Total distance in meters")
    duration: float = Field(..., ge=0, description="Total duration in seconds")
    active_energy_burned: Optional[float] = Field(None, ge=0, description="kcal")

    average_heart_rate: Optional[float] = None
    heart_rate_samples: Optional[SampleSeries] = None

    speed_samples: Optional[SampleSeries] = None

    average_power: Optional[float] = None
    power_samples: Optional[SampleSeries] = None

    metrics: Optional[RunningMetrics] = None

    elevation_samples: Optional[SampleSeries] = None
    cadence_samples: Optional[SampleSeries] = None
    vertical_oscillation_samples: Optional[SampleSeries] = None
    ground_contact_time_samples: Optional[SampleSeries] = None
    stride_length_samples: Optional[SampleSeries] = None

    route: Optional[Tuple[Tuple[float, float], ...]] = None  # (latitude, longitude)

    @field_validator(*SERIES_FIELDS, mode="before")
    @classmethod
    def accept_pairs(cls, v: Any) -> Any:
        """Accept samples given as (timestamp, value) pairs."""
        if v is None or isinstance(v, (str, bytes, Mapping)):
            return v
        return [
            {"timestamp": item[0], "value": item[1]}
            if isinstance(item, (tuple, list)) and len(item) == 2
            else item
            for item in v
        ]

    @model_validator(mode="after")
    def check_dates(self) -> "Workout":
        start_aware = self.start_date.utcoffset() is not None
        end_aware = self.end_date.utcoffset() is not None
        if start_aware != end_aware:
            raise ValueError("start_date and end_date must both be timezone-aware or both naive")
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        for name in SERIES_FIELDS:
            for sample in getattr(self, name) or ():
                if (sample.timestamp.utcoffset() is not None) != start_aware:
                    raise ValueError(
                        f"{name} timestamps must match start_date timezone awareness"
                    )
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def average_pace(self) -> float:
        """Average pace in seconds per kilometer (0 when distance is 0)."""
        if self.distance <= 0:
            return 0.0
        return self.duration / (self.distance / 1000.0)

    @property
    def average_speed(self) -> float:
        """Average speed in meters per second (0 when duration is 0)."""
        if self.duration <= 0:
            return 0.0
        return self.distance / self.duration

    @property
    def distance_km(self) -> float:
        return self.distance / 1000.0

    @property
    def is_high_intensity(self) -> bool:
        """Long run (over 10 km) or a big energy burn (over 600 kcal)."""
        if self.distance_km > HIGH_INTENSITY_DISTANCE_KM:
            return True
        energy = self.active_energy_burned
        return energy is not None and energy > HIGH_INTENSITY_ENERGY_KCAL

    @property
    def formatted_pace(self) -> str:
        return format_pace(self.average_pace)

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration)

    # ------------------------------------------------------------------
    # Enrichment (each returns a new Workout)
    # ------------------------------------------------------------------

    def _with_updates(self, update: Mapping[str, Any]) -> "Workout":
        """Copy with ``update`` applied, re-running field and date validation."""
        return type(self).model_validate({**dict(self), **update})

    def with_heart_rate_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        """Attach heart rate samples and set the average heart rate from them."""
        hr = _as_samples(samples)
        return self._with_updates(
            {"heart_rate_samples": hr, "average_heart_rate": _mean(hr)}
        )

    def with_speed_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        return self._with_updates({"speed_samples": _as_samples(samples)})

    def with_power_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        """Attach power samples and set the average power from them."""
        power = _as_samples(samples)
        return self._with_updates(
            {"power_samples": power, "average_power": _mean(power)}
        )

    def with_elevation_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        return self._with_updates({"elevation_samples": _as_samples(samples)})

    def with_cadence_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        return self._with_updates({"cadence_samples": _as_samples(samples)})

    def with_vertical_oscillation_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        return self._with_updates(
            {"vertical_oscillation_samples": _as_samples(samples)}
        )

    def with_ground_contact_time_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        return self._with_updates(
            {"ground_contact_time_samples": _as_samples(samples)}
        )

    def with_stride_length_samples(self, samples: Iterable[SampleLike]) -> "Workout":
        return self._with_updates({"stride_length_samples": _as_samples(samples)})

    def with_route(self, coordinates: Iterable[Tuple[float, float]]) -> "Workout":
        route = tuple((float(lat), float(lon)) for lat, lon in coordinates)
        return self._with_updates({"route": route})

    def with_running_metrics(
        self,
        vertical_oscillation: Optional[Iterable[SampleLike]] = None,
        ground_contact_time: Optional[Iterable[SampleLike]] = None,
        cadence: Optional[Iterable[SampleLike]] = None,
        stride_length: Optional[Iterable[SampleLike]] = None,
    ) -> "Workout":
        """
        Summarize running form series into workout-level averages.

        Metrics are only attached when at least one series yields an
        average; otherwise ``metrics`` is set to None.
        """
        def average(series: Optional[Iterable[SampleLike]]) -> Optional[float]:
            if series is None:
                return None
            return _mean(_as_samples(series))

        metrics = RunningMetrics(
            vertical_oscillation=average(vertical_oscillation),
            ground_contact_time=average(ground_contact_time),
            cadence=average(cadence),
            stride_length=average(stride_length),
        )
        return self._with_updates(
            {"metrics": metrics if metrics.has_any_data else None}
        )

    def with_calculated_cadence(
        self,
        stride_samples: Iterable[SampleLike],
        speed_samples: Iterable[SampleLike],
    ) -> "Workout":
        """
        Derive cadence samples from stride length and speed.

        Cadence (steps/min) = speed (m/s) / stride length (m) * 60. Each
        stride sample is paired with the speed sample at the same timestamp,
        or failing that the closest one within 10 seconds. Stride samples
        without a matching speed or with a non-positive length are dropped.
        """
        speed_by_time = {s.timestamp: s.value for s in _as_samples(speed_samples)}

        cadence: List[Sample] = []
        for stride in _as_samples(stride_samples):
            speed = speed_by_time.get(stride.timestamp)
            if speed is None:
                speed = _closest_value(stride.timestamp, speed_by_time)
            if speed is None or stride.value <= 0:
                continue
            cadence.append(
                Sample(timestamp=stride.timestamp, value=(speed / stride.value) * 60.0)
            )

        return self._with_updates({"cadence_samples": tuple(cadence)})


def _closest_value(target: datetime, values_by_time: Mapping[datetime, float]) -> Optional[float]:
    closest_time = None
    min_diff = float("inf")
    for time in values_by_time:
        diff = abs((time - target).total_seconds())
        if diff < min_diff:
            min_diff = diff
            closest_time = time

    if closest_time is not None and min_diff < CADENCE_SPEED_MATCH_WINDOW_SEC:
        return values_by_time[closest_time]
    return None


def parse_workout(payload: Mapping[str, Any]) -> Workout:
    """
    Decode a workout payload from the acquisition layer.

    Raises:
        WorkoutValidationError: If the payload does not describe a valid workout
    """
    try:
        return Workout.model_validate(payload)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(part) for part in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        field = errors[0]["loc"] if errors and errors[0]["loc"] else None
        raise WorkoutValidationError(
            f"Invalid workout payload ({e.error_count()} error(s))",
            field=field,
            details={"errors": errors},
        ) from e


def parse_workouts(payloads: Iterable[Mapping[str, Any]]) -> List[Workout]:
    """Decode a list of workout payloads, failing on the first invalid one."""
    workouts = [parse_workout(payload) for payload in payloads]
    logger.debug(f"Decoded {len(workouts)} workouts")
    return workouts
