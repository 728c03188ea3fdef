"""
Livestock health prediction.

- build_prediction_input: animal document -> model input
- predict_livestock_health: one structured LLM call, errors propagate
- run_health_prediction: boundary wrapper that turns failures into a
  PredictionError payload for the API and CLI
"""

import logging

from eternak.errors import InsufficientHealthDataError
from eternak.llm.client import call_llm
from eternak.models.livestock import Livestock
from eternak.prediction.models import (
    HealthRecord,
    PredictionError,
    PredictLivestockHealthInput,
    PredictLivestockHealthOutput,
)
from eternak.prediction.prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

PREDICTION_FAILED_MESSAGE = "Failed to get health prediction. Please try again later."
NO_HEALTH_DATA_MESSAGE = "Tidak ada riwayat kesehatan untuk dianalisis."


def build_prediction_input(animal: Livestock) -> PredictLivestockHealthInput:
    """Map an animal's health log to the prediction input."""
    if not animal.health_log:
        raise InsufficientHealthDataError(NO_HEALTH_DATA_MESSAGE)

    return PredictLivestockHealthInput(
        animal_id=animal.id,
        health_records=[
            HealthRecord(
                date=log.date.isoformat(),
                type=log.type,
                detail=log.summary,
                notes=log.notes or "",
            )
            for log in animal.health_log
        ],
    )


async def predict_livestock_health(data: PredictLivestockHealthInput) -> PredictLivestockHealthOutput:
    """Predict likely future health issues from the health history."""
    if not data.health_records:
        raise InsufficientHealthDataError(NO_HEALTH_DATA_MESSAGE)

    result = await call_llm(
        response_model=PredictLivestockHealthOutput,
        system_prompt=SYSTEM_PROMPT,
        user_prompt=build_user_prompt(data),
        node="health_prediction",
    )
    if result is None:
        raise RuntimeError("AI prediction returned no result.")
    return result


async def run_health_prediction(
    data: PredictLivestockHealthInput,
) -> PredictLivestockHealthOutput | PredictionError:
    """Run the prediction, returning a PredictionError instead of raising."""
    try:
        result = await predict_livestock_health(data)
        logger.info(f"Predicted {len(result.predicted_issues)} issues for {data.animal_id}")
        return result
    except InsufficientHealthDataError:
        raise
    except Exception:
        logger.exception(f"Health prediction failed for {data.animal_id}")
        return PredictionError(error=PREDICTION_FAILED_MESSAGE)
