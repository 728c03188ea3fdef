"""
E-TernakID - Default herd.

Deterministic starter records so an empty store shows a usable herd.
Everything is derived from the numeric part of the id (KIT-07 -> 7).
"""

import math
from datetime import date, timedelta

from eternak.models.livestock import (
    Dam,
    GrowthRecord,
    Livestock,
    Pedigree,
    Reproduction,
    Sire,
)

ID_PREFIX = "KIT"
BREEDS = ("Sapi Bali", "Sapi Ongole", "Simental")


def animal_id(number: int) -> str:
    """KIT-01, KIT-02, ... KIT-100."""
    return f"{ID_PREFIX}-{number:02d}"


def default_photo_url(doc_id: str, role: str | None = None) -> str:
    """Placeholder photo for an animal, or for its "dam" or "sire"."""
    if role:
        return f"https://picsum.photos/seed/{role}-{doc_id}/600"
    return f"https://picsum.photos/seed/{doc_id}/400/400"


def id_number(doc_id: str) -> int | None:
    """Numeric suffix of a KIT-NN id, or None for other ids."""
    prefix, _, suffix = doc_id.partition("-")
    if prefix != ID_PREFIX or not suffix.isdigit():
        return None
    return int(suffix)


def generate_default_animal(doc_id: str) -> Livestock:
    n = id_number(doc_id) or 0
    suffix = doc_id.partition("-")[2]

    # Born in January 2023, shifted back 0-4 years
    birth_date = date(2023 - n % 5, 1, 1 + n % 30)
    is_male = n % 2 == 0

    return Livestock(
        id=doc_id,
        name=f"Ternak {suffix}",
        reg_id=doc_id,
        photo_url=default_photo_url(doc_id),
        breed=BREEDS[n % 3],
        gender="Jantan" if is_male else "Betina",
        status="Dijual" if n % 10 == 0 else "Produktif",
        owner="Peternakan Jaya",
        address=f"Kandang {math.ceil(n / 10)}, Desa Makmur",
        birth_date=birth_date,
        reproduction=Reproduction(
            role="Pejantan" if is_male else "Indukan",
            semen_quality="Baik" if is_male else "N/A",
            semen_test_date=date(2024, 5, 1) if is_male else None,
            recent_matings=n % 5,
            success_rate="85%" if is_male else "N/A",
        ),
        growth_records=[
            GrowthRecord(id=f"{doc_id}-g1", date=birth_date, weight=30 + n % 10),
            GrowthRecord(
                id=f"{doc_id}-g2",
                date=birth_date + timedelta(days=180),
                weight=150 + n % 50,
            ),
        ],
        pedigree=Pedigree(
            dam=Dam(
                name=f"Induk-{1000 + n}",
                reg_id=f"IND-{1000 + n}",
                breed="Sapi Bali",
                offspring=2,
            ),
            sire=Sire(
                name=f"Pejantan-{2000 + n}",
                semen_id=f"PJT-{2000 + n}",
                breed="Simental",
                characteristics="Postur tinggi",
            ),
        ),
    )


def default_herd(count: int) -> list[Livestock]:
    return [generate_default_animal(animal_id(n)) for n in range(1, count + 1)]
