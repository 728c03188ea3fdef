"""
E-TernakID - AI health prediction.
"""

from eternak.prediction.flow import (
    build_prediction_input,
    predict_livestock_health,
    run_health_prediction,
)
from eternak.prediction.models import (
    HealthRecord,
    PredictedIssue,
    PredictionError,
    PredictLivestockHealthInput,
    PredictLivestockHealthOutput,
)

__all__ = [
    "HealthRecord",
    "PredictedIssue",
    "PredictionError",
    "PredictLivestockHealthInput",
    "PredictLivestockHealthOutput",
    "build_prediction_input",
    "predict_livestock_health",
    "run_health_prediction",
]
