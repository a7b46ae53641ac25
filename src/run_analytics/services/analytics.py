"""Analytics service composing the training load, race and split engines.

The engines are pure functions; this service only supplies configured
defaults (physiology, model windows, calendar timezone) so callers such as
dashboard or report code do not have to thread them through every call.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..config import Settings, get_settings
from ..metrics.fitness import TrainingStatus, compute_load
from ..metrics.race import PredictionResult, predict_races
from ..metrics.splits import KilometerSplit, calculate_kilometer_splits
from ..models.athlete import PhysioProfile
from ..models.workout import Workout


logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service for training load status, race predictions and splits."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        physio: Optional[PhysioProfile] = None,
    ):
        """
        Initialize the analytics service.

        Args:
            settings: Settings instance (cached environment settings if not provided)
            physio: Athlete physiology (built from settings if not provided)
        """
        self.settings = settings or get_settings()
        self.physio = physio or PhysioProfile.from_settings(self.settings)
        self._tz = self.settings.resolve_timezone()

    def training_status(self, workouts: Iterable[Workout]) -> TrainingStatus:
        """ATL/CTL/ACWR status and daily history for a workout list."""
        return compute_load(
            workouts,
            self.physio,
            tz=self._tz,
            atl_window=self.settings.atl_window_days,
            ctl_window=self.settings.ctl_window_days,
            cold_start_days=self.settings.cold_start_days,
        )

    def race_predictions(
        self,
        workouts: Iterable[Workout],
        now: Optional[datetime] = None,
    ) -> Optional[PredictionResult]:
        """Race predictions from the best recent run, or None."""
        return predict_races(
            workouts,
            now=now,
            lookback_days=self.settings.race_lookback_days,
            min_distance_m=self.settings.race_min_distance_m,
            exponent=self.settings.riegel_exponent,
        )

    def kilometer_splits(self, workout: Workout) -> List[KilometerSplit]:
        return calculate_kilometer_splits(workout)

    def summary(
        self,
        workouts: Iterable[Workout],
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Serializable dashboard summary: load status and race predictions.

        ``race_predictions`` is None when no recent run qualifies as a seed.
        """
        workouts = list(workouts)
        status = self.training_status(workouts)
        predictions = self.race_predictions(workouts, now=now)

        logger.info(
            f"Summarized {len(workouts)} workouts: status={status.status.value}, "
            f"predictions={'yes' if predictions else 'no'}"
        )

        return {
            "workout_count": len(workouts),
            "training_load": status.to_dict(),
            "race_predictions": predictions.to_dict() if predictions else None,
        }
