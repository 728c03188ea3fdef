"""
E-TernakID - Livestock document models.

One document per animal. Health, reproduction and growth events are embedded
arrays inside the document; dam and sire are nested maps under `pedigree`.

Documents are stored with camelCase keys, so every model uses a camelCase
alias generator and accepts snake_case names as well. Dates are calendar
dates and serialise as YYYY-MM-DD.
"""

import datetime as dt
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


HealthLogType = Literal["Vaksinasi", "Penyakit", "Pengobatan", "Lainnya"]

ReproductionLogType = Literal[
    "Inseminasi Buatan (IB)",
    "Kawin Alami",
    "Kebuntingan Dideteksi",
    "Melahirkan",
    "Kelahiran",
    "Abortus",
    "Lainnya",
]

Gender = Literal["Jantan", "Betina"]

ParentType = Literal["dam", "sire"]


def new_entry_id() -> str:
    """Generate an id for an embedded log entry."""
    return uuid4().hex


class DocumentModel(BaseModel):
    """Base model for anything stored inside a livestock document."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self, **kwargs) -> dict:
        """Serialise to the stored JSON shape (camelCase, ISO dates)."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


# =============================================================================
# Embedded Logs
# =============================================================================


class HealthLogInput(DocumentModel):
    """A health event as submitted from the health form."""

    date: dt.date
    type: HealthLogType
    detail: str = ""
    vaccine_or_medicine_name: str | None = None
    diagnosis: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _require_detail_for_type(self):
        if self.type == "Penyakit" and not self.diagnosis:
            raise ValueError("Detail harus diisi sesuai jenis catatan")
        if self.type in ("Vaksinasi", "Pengobatan") and not self.vaccine_or_medicine_name:
            raise ValueError("Detail harus diisi sesuai jenis catatan")
        return self

    @property
    def summary(self) -> str:
        """Best single-line description of the event."""
        return self.detail or self.vaccine_or_medicine_name or self.diagnosis or ""


class HealthLog(HealthLogInput):
    id: str = Field(default_factory=new_entry_id)


class ReproductionLogInput(DocumentModel):
    """A reproduction event (mating, pregnancy check, birth...)."""

    date: dt.date
    type: ReproductionLogType
    detail: str = Field(min_length=1)
    notes: str | None = None


class ReproductionLog(ReproductionLogInput):
    id: str = Field(default_factory=new_entry_id)


class GrowthRecordInput(DocumentModel):
    """A weighing. ADG is derived on read and never stored."""

    date: dt.date = Field(default_factory=dt.date.today)
    weight: float = Field(gt=0)


class GrowthRecord(GrowthRecordInput):
    id: str = Field(default_factory=new_entry_id)


# =============================================================================
# Pedigree and Reproduction Profile
# =============================================================================


class Dam(DocumentModel):
    """Mother of the animal."""

    name: str | None = None
    reg_id: str | None = None
    breed: str | None = None
    offspring: int | None = None
    photo_url: str | None = None

    @field_validator("offspring", mode="before")
    @classmethod
    def _blank_offspring(cls, value):
        # Empty, zero or non-numeric counts mean "unknown"
        if value in (None, "", 0, "0"):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class Sire(DocumentModel):
    """Father of the animal, or the semen batch used for insemination."""

    name: str | None = None
    semen_id: str | None = None
    breed: str | None = None
    characteristics: str | None = None
    photo_url: str | None = None


class DamUpdate(Dam):
    """Partial dam edit; unset fields keep their stored value."""


class SireUpdate(Sire):
    """Partial sire edit; unset fields keep their stored value."""


class Pedigree(DocumentModel):
    dam: Dam = Field(default_factory=Dam)
    sire: Sire = Field(default_factory=Sire)


class Reproduction(DocumentModel):
    """Reproductive profile shown on the reproduction tab."""

    role: str = ""
    semen_quality: str = "N/A"
    semen_test_date: dt.date | None = None
    recent_matings: int = 0
    success_rate: str = "N/A"


class ReproductionUpdate(DocumentModel):
    role: str | None = None
    semen_quality: str | None = None
    semen_test_date: dt.date | None = None
    recent_matings: int | None = None
    success_rate: str | None = None


# =============================================================================
# Livestock Document
# =============================================================================


class Livestock(DocumentModel):
    """One animal and all of its embedded history."""

    id: str
    name: str
    reg_id: str
    photo_url: str | None = None
    breed: str
    gender: Gender
    status: str
    owner: str
    address: str
    birth_date: dt.date | None = None
    health_log: list[HealthLog] = Field(default_factory=list)
    reproduction: Reproduction = Field(default_factory=Reproduction)
    reproduction_log: list[ReproductionLog] = Field(default_factory=list)
    growth_records: list[GrowthRecord] = Field(default_factory=list)
    pedigree: Pedigree = Field(default_factory=Pedigree)


class LivestockCreate(DocumentModel):
    """Identity fields for registering a new animal."""

    name: str = Field(min_length=1)
    reg_id: str | None = None
    photo_url: str | None = None
    breed: str = Field(min_length=1)
    gender: Gender
    status: str = Field(min_length=1)
    owner: str = Field(min_length=1)
    address: str = Field(min_length=1)
    birth_date: dt.date


class LivestockUpdate(DocumentModel):
    """Identity edit. Only the fields that are sent are changed."""

    name: str | None = Field(default=None, min_length=1)
    reg_id: str | None = Field(default=None, min_length=1)
    breed: str | None = Field(default=None, min_length=1)
    gender: Gender | None = None
    status: str | None = Field(default=None, min_length=1)
    owner: str | None = Field(default=None, min_length=1)
    address: str | None = Field(default=None, min_length=1)
    birth_date: dt.date | None = None
    reproduction: ReproductionUpdate | None = None
    pedigree: Pedigree | None = None


class PhotoUpdate(DocumentModel):
    photo_url: str = Field(min_length=1)
