"""
E-TernakID - Derived values.

Age and Average Daily Gain (ADG) are computed on read from the stored
document; neither is persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from eternak.models.livestock import GrowthRecord

NOT_AVAILABLE = "N/A"
TWO_PLACES = Decimal("0.01")


@dataclass
class GrowthRow:
    """A growth record with its ADG against the previous weighing."""

    id: str
    date: date
    weight: float
    adg: str = NOT_AVAILABLE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "weight": self.weight,
            "adg": self.adg,
        }


@dataclass
class AdgSummary:
    """Average ADG plus every record in chronological order."""

    average: str = NOT_AVAILABLE
    records: list[GrowthRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "records": [r.to_dict() for r in self.records],
        }


def calculate_age(birth_date: date | None, today: date | None = None) -> str:
    """
    Age as "X Tahun Y Bulan".

    Returns "N/A" without a birth date and "Data Tidak Valid" for a birth
    date in the future.
    """
    if birth_date is None:
        return NOT_AVAILABLE

    today = today or date.today()
    months = (today.year - birth_date.year) * 12 + today.month - birth_date.month
    # A month only counts once its day of the month is reached
    if today.day < birth_date.day:
        months -= 1

    if months < 0:
        return "Data Tidak Valid"

    years, months = divmod(months, 12)

    return f"{years} Tahun {months} Bulan"


def _two_decimals(value: float | Decimal) -> Decimal:
    """Round to two decimals, ties away from zero."""
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_adg(growth_records: list[GrowthRecord] | None) -> AdgSummary:
    """
    Compute ADG (kg/day) between consecutive weighings.

    Records are sorted by date. The first record, and any record weighed on
    the same day as its predecessor, gets "N/A". The average is the mean of
    the per-interval values after rounding to two decimals.
    """
    if not growth_records:
        return AdgSummary()

    rows = [
        GrowthRow(id=r.id, date=r.date, weight=r.weight)
        for r in sorted(growth_records, key=lambda r: r.date)
    ]
    if len(rows) < 2:
        return AdgSummary(records=rows)

    total = Decimal(0)
    count = 0
    for prev, current in zip(rows, rows[1:]):
        days = (current.date - prev.date).days
        if days <= 0:
            continue
        adg = _two_decimals((current.weight - prev.weight) / days)
        current.adg = str(adg)
        total += adg
        count += 1

    average = str(_two_decimals(total / count)) if count else NOT_AVAILABLE
    return AdgSummary(average=average, records=rows)


def latest_weight(growth_records: list[GrowthRecord] | None) -> float | None:
    """Weight of the most recent weighing, or None."""
    if not growth_records:
        return None
    return sorted(growth_records, key=lambda r: r.date)[-1].weight


def format_date(value: date | None) -> str:
    """Format as YYYY-MM-DD, or empty string when unset."""
    if value is None:
        return ""
    return value.isoformat()
