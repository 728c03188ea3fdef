"""
AI health prediction endpoints.
"""

from fastapi import APIRouter, HTTPException

from eternak.prediction import (
    PredictionError,
    PredictLivestockHealthInput,
    build_prediction_input,
    run_health_prediction,
)
from eternak.web.livestock_routes import load_animal

router = APIRouter(tags=["prediction"])


async def _predict(data: PredictLivestockHealthInput) -> dict:
    result = await run_health_prediction(data)
    if isinstance(result, PredictionError):
        raise HTTPException(status_code=502, detail=result.error)
    return result.model_dump(by_alias=True)


@router.post("/livestock/{animal_id}/health-prediction")
async def predict_for_animal(animal_id: str):
    """Predict health issues from the animal's stored health log."""
    animal = await load_animal(animal_id)
    return await _predict(build_prediction_input(animal))


@router.post("/health-prediction")
async def predict_from_records(body: PredictLivestockHealthInput):
    """Predict health issues from records sent by the caller."""
    return await _predict(body)
