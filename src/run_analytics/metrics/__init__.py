"""Training metrics calculations."""

from .load import (
    calculate_daily_trimps,
    calculate_hr_reserve_ratio,
    calculate_trimp,
    calculate_workout_trimp,
)
from .fitness import (
    DailyLoad,
    LoadStatus,
    TrainingStatus,
    calculate_acwr,
    calculate_ewma,
    calculate_load_history,
    compute_load,
    ewma_decay,
)
from .race import (
    PredictionResult,
    RaceDistance,
    RacePrediction,
    calculate_riegel_time,
    find_seed_workout,
    predict_races,
)
from .splits import (
    KilometerSplit,
    calculate_kilometer_splits,
)

__all__ = [
    # Load calculations
    "calculate_daily_trimps",
    "calculate_hr_reserve_ratio",
    "calculate_trimp",
    "calculate_workout_trimp",
    # Fitness model
    "DailyLoad",
    "LoadStatus",
    "TrainingStatus",
    "calculate_acwr",
    "calculate_ewma",
    "calculate_load_history",
    "compute_load",
    "ewma_decay",
    # Race prediction
    "PredictionResult",
    "RaceDistance",
    "RacePrediction",
    "calculate_riegel_time",
    "find_seed_workout",
    "predict_races",
    # Splits
    "KilometerSplit",
    "calculate_kilometer_splits",
]
