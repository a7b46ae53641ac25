"""Fitness-Fatigue model calculations (ATL, CTL, ACWR)."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..models.athlete import PhysioProfile
from ..models.workout import Workout
from .load import calculate_daily_trimps


logger = logging.getLogger(__name__)

ATL_WINDOW_DAYS = 7
CTL_WINDOW_DAYS = 42
COLD_START_DAYS = 7


class LoadStatus(str, Enum):
    """
    Training status based on ACWR.

    Bands (lower bound inclusive, upper bound exclusive):
    - [0, 0.8): Undertraining (not enough stimulus)
    - [0.8, 1.3): Optimal (sweet spot for adaptation)
    - [1.3, 1.5): Overreaching (elevated injury risk)
    - >= 1.5: Hazardous (high injury risk)
    """

    UNDERTRAINING = "undertraining"
    OPTIMAL = "optimal"
    OVERREACHING = "overreaching"
    HAZARDOUS = "hazardous"

    @classmethod
    def from_acwr(cls, acwr: float) -> "LoadStatus":
        if acwr < 0.8:
            return cls.UNDERTRAINING
        elif acwr < 1.3:
            return cls.OPTIMAL
        elif acwr < 1.5:
            return cls.OVERREACHING
        else:
            return cls.HAZARDOUS

    @property
    def label(self) -> str:
        labels = {
            LoadStatus.UNDERTRAINING: "Undertraining",
            LoadStatus.OPTIMAL: "Optimal load",
            LoadStatus.OVERREACHING: "High load",
            LoadStatus.HAZARDOUS: "Overtraining",
        }
        return labels[self]

    @property
    def color(self) -> str:
        colors = {
            LoadStatus.UNDERTRAINING: "#808080",
            LoadStatus.OPTIMAL: "#00FF00",
            LoadStatus.OVERREACHING: "#FF9500",
            LoadStatus.HAZARDOUS: "#FF3B30",
        }
        return colors[self]


@dataclass
class DailyLoad:
    """One calendar day of the fitness-fatigue model."""

    date: date
    trimp: float  # Summed TRIMP for the day, 0 on rest days
    atl: float  # Acute Training Load (fatigue)
    ctl: float  # Chronic Training Load (fitness)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "trimp": round(self.trimp, 1),
            "atl": round(self.atl, 1),
            "ctl": round(self.ctl, 1),
        }


@dataclass
class TrainingStatus:
    """Current load state plus the daily history behind it."""

    current_atl: float
    current_ctl: float
    acwr: float
    status: LoadStatus
    history: List[DailyLoad] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "current_atl": round(self.current_atl, 1),
            "current_ctl": round(self.current_ctl, 1),
            "acwr": round(self.acwr, 2),
            "status": self.status.value,
            "history": [d.to_dict() for d in self.history],
        }


def ewma_decay(window_days: int) -> float:
    """Smoothing factor 2 / (N + 1) for an N-day window."""
    return 2.0 / (window_days + 1.0)


def calculate_ewma(current_value: float, previous_ewma: float, decay: float) -> float:
    """
    Exponentially Weighted Moving Average step.

    EWMA_n = EWMA_{n-1} * (1 - decay) + value * decay
    """
    return previous_ewma * (1 - decay) + current_value * decay


def calculate_acwr(atl: float, ctl: float) -> float:
    """Acute:Chronic Workload Ratio, 0 when there is no chronic load."""
    if ctl <= 0:
        return 0.0
    return atl / ctl


def calculate_load_history(
    daily_trimps: Dict[date, float],
    atl_window: int = ATL_WINDOW_DAYS,
    ctl_window: int = CTL_WINDOW_DAYS,
    cold_start_days: int = COLD_START_DAYS,
) -> List[DailyLoad]:
    """
    Smooth daily TRIMP into ATL/CTL and fill rest days.

    The first ``cold_start_days`` days that have data use a running average
    for both ATL and CTL, so a new athlete's first weeks are not dragged
    towards zero. Later data days apply the EWMA step. Counting is by days
    with data, so early gaps stretch the cold start over more calendar days.

    Calendar days without data are then inserted with TRIMP 0, each decaying
    the previous day's ATL/CTL by one EWMA step. Data days keep the values
    from the first pass.

    Args:
        daily_trimps: Mapping of day to summed TRIMP, in any order
        atl_window: ATL window in days (default 7)
        ctl_window: CTL window in days (default 42)
        cold_start_days: Number of data days averaged before EWMA starts

    Returns:
        One DailyLoad per calendar day from the first to the last data day
    """
    if not daily_trimps:
        return []

    atl_decay = ewma_decay(atl_window)
    ctl_decay = ewma_decay(ctl_window)

    sorted_days = sorted(daily_trimps)
    cold_start_period = min(cold_start_days, len(sorted_days))

    data_days: List[DailyLoad] = []
    atl = 0.0
    ctl = 0.0
    cold_start_sum = 0.0

    for index, day in enumerate(sorted_days):
        trimp = daily_trimps[day]
        if index < cold_start_period:
            cold_start_sum += trimp
            atl = ctl = cold_start_sum / (index + 1)
        else:
            atl = calculate_ewma(trimp, atl, atl_decay)
            ctl = calculate_ewma(trimp, ctl, ctl_decay)
        data_days.append(DailyLoad(date=day, trimp=trimp, atl=atl, ctl=ctl))

    return _fill_rest_days(data_days, atl_decay, ctl_decay)


def _fill_rest_days(
    data_days: List[DailyLoad],
    atl_decay: float,
    ctl_decay: float,
) -> List[DailyLoad]:
    by_date = {d.date: d for d in data_days}
    first_day = data_days[0].date
    last_day = data_days[-1].date

    history: List[DailyLoad] = []
    atl = 0.0
    ctl = 0.0

    for offset in range((last_day - first_day).days + 1):
        day = first_day + timedelta(days=offset)
        load = by_date.get(day)
        if load is None:
            atl = atl * (1 - atl_decay)
            ctl = ctl * (1 - ctl_decay)
            load = DailyLoad(date=day, trimp=0.0, atl=atl, ctl=ctl)
        else:
            atl = load.atl
            ctl = load.ctl
        history.append(load)

    return history


def compute_load(
    workouts: Iterable[Workout],
    physio: PhysioProfile,
    tz: Optional[tzinfo] = None,
    atl_window: int = ATL_WINDOW_DAYS,
    ctl_window: int = CTL_WINDOW_DAYS,
    cold_start_days: int = COLD_START_DAYS,
) -> TrainingStatus:
    """
    Calculate training load status from a workout history.

    Workouts are bucketed by the calendar day they ended on (in ``tz`` when
    given and the timestamps are timezone-aware). An empty history yields
    zero loads and an undertraining status.

    Args:
        workouts: Workouts to analyze, in any order
        physio: Athlete physiology for TRIMP
        tz: Calendar timezone for day bucketing
        atl_window: ATL window in days
        ctl_window: CTL window in days
        cold_start_days: Data days averaged before EWMA starts

    Returns:
        TrainingStatus with current ATL/CTL/ACWR and the daily history
    """
    daily_trimps = calculate_daily_trimps(workouts, physio, tz)
    history = calculate_load_history(
        daily_trimps,
        atl_window=atl_window,
        ctl_window=ctl_window,
        cold_start_days=cold_start_days,
    )

    current_atl = history[-1].atl if history else 0.0
    current_ctl = history[-1].ctl if history else 0.0
    acwr = calculate_acwr(current_atl, current_ctl)
    status = LoadStatus.from_acwr(acwr)

    logger.debug(
        f"Training load over {len(history)} days: ATL={current_atl:.1f} "
        f"CTL={current_ctl:.1f} ACWR={acwr:.2f} ({status.value})"
    )

    return TrainingStatus(
        current_atl=current_atl,
        current_ctl=current_ctl,
        acwr=acwr,
        status=status,
        history=history,
    )
