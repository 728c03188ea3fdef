"""
Health prediction input and output schemas.

The output model is also the structured-output schema handed to the LLM,
so field descriptions double as instructions.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthRecord(_CamelModel):
    date: str = Field(description="Date of the health record.")
    type: str = Field(description="Type of health event (e.g., Vaccination, Disease, Treatment).")
    detail: str = Field(description="Details of the health event.")
    notes: str | None = Field(default=None, description="Optional notes for the health event.")


class PredictLivestockHealthInput(_CamelModel):
    animal_id: str = Field(description="Unique identifier for the livestock animal.")
    health_records: list[HealthRecord] = Field(description="Historical health records of the livestock.")


class PredictedIssue(_CamelModel):
    issue: str = Field(description="Predicted health issue in Indonesian.")
    likelihood: Literal["Tinggi", "Sedang", "Rendah"] = Field(
        description="Likelihood of the issue occurring (Tinggi, Sedang, Rendah)."
    )
    recommendations: str = Field(description="Recommended preventive measures in Indonesian.")


class PredictLivestockHealthOutput(_CamelModel):
    animal_id: str = Field(description="The livestock animal ID.")
    predicted_issues: list[PredictedIssue] = Field(
        description="List of predicted health issues and recommendations."
    )


class PredictionError(BaseModel):
    """Returned instead of a prediction when the model call fails."""

    error: str
