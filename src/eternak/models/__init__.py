"""
E-TernakID - Document models.
"""

from eternak.models.livestock import (
    Dam,
    DamUpdate,
    GrowthRecord,
    GrowthRecordInput,
    HealthLog,
    HealthLogInput,
    Livestock,
    LivestockCreate,
    LivestockUpdate,
    Pedigree,
    PhotoUpdate,
    Reproduction,
    ReproductionLog,
    ReproductionLogInput,
    ReproductionUpdate,
    Sire,
    SireUpdate,
)

__all__ = [
    "Dam",
    "DamUpdate",
    "GrowthRecord",
    "GrowthRecordInput",
    "HealthLog",
    "HealthLogInput",
    "Livestock",
    "LivestockCreate",
    "LivestockUpdate",
    "Pedigree",
    "PhotoUpdate",
    "Reproduction",
    "ReproductionLog",
    "ReproductionLogInput",
    "ReproductionUpdate",
    "Sire",
    "SireUpdate",
]
