"""Running workout analytics: training load, race predictions and splits."""

from run_analytics.config import Settings, get_settings
from run_analytics.exceptions import (
    ConfigurationError,
    ErrorCode,
    RunAnalyticsError,
    WorkoutValidationError,
)
from run_analytics.metrics import (
    DailyLoad,
    KilometerSplit,
    LoadStatus,
    PredictionResult,
    RaceDistance,
    RacePrediction,
    TrainingStatus,
    calculate_kilometer_splits,
    calculate_trimp,
    compute_load,
    predict_races,
)
from run_analytics.models import (
    PhysioProfile,
    RunningMetrics,
    Sample,
    Sex,
    Workout,
    parse_workout,
    parse_workouts,
)
from run_analytics.services import AnalyticsService

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    # Errors
    "ConfigurationError",
    "ErrorCode",
    "RunAnalyticsError",
    "WorkoutValidationError",
    # Models
    "PhysioProfile",
    "RunningMetrics",
    "Sample",
    "Sex",
    "Workout",
    "parse_workout",
    "parse_workouts",
    # Engines
    "DailyLoad",
    "KilometerSplit",
    "LoadStatus",
    "PredictionResult",
    "RaceDistance",
    "RacePrediction",
    "TrainingStatus",
    "calculate_kilometer_splits",
    "calculate_trimp",
    "compute_load",
    "predict_races",
    # Services
    "AnalyticsService",
]
