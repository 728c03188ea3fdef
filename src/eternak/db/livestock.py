"""
E-TernakID - Livestock data operations.

Every read and write of livestock documents goes through here. Writes go
through the process-wide LivestockSync, so they are optimistic and reach
every listener.

Health logs, reproduction logs and growth records are arrays embedded in the
animal document. Each entry carries its own id:
- add: array-union of the new entry
- update: the array is rewritten with the entry replaced
- delete: array-remove of the stored entry
"""

import logging
from collections.abc import Callable
from typing import Any

from eternak.calculations import latest_weight
from eternak.config import settings
from eternak.db.seed import animal_id as make_animal_id, default_herd, id_number
from eternak.db.store import create_store, deep_merge
from eternak.db.sync import Listener, LivestockSync
from eternak.errors import AnimalNotFoundError, EntryNotFoundError, InvalidRecordError
from eternak.models.livestock import (
    DamUpdate,
    DocumentModel,
    GrowthRecord,
    GrowthRecordInput,
    HealthLog,
    HealthLogInput,
    Livestock,
    LivestockCreate,
    LivestockUpdate,
    ParentType,
    Reproduction,
    ReproductionLog,
    ReproductionLogInput,
    SireUpdate,
)

logger = logging.getLogger(__name__)

HEALTH_LOG = "healthLog"
REPRODUCTION_LOG = "reproductionLog"
GROWTH_RECORDS = "growthRecords"

# Fields that identity edits may not touch
PROTECTED_FIELDS = ("id", "photoUrl", HEALTH_LOG, REPRODUCTION_LOG, GROWTH_RECORDS)

# Singleton sync instance
_sync: LivestockSync | None = None


def get_sync() -> LivestockSync:
    """
    Get the process-wide LivestockSync.

    Uses singleton pattern; the store backend comes from settings.
    """
    global _sync

    if _sync is None:
        _sync = LivestockSync(create_store())

    return _sync


def reset_sync(sync: LivestockSync | None = None) -> None:
    """Replace (or drop) the process-wide sync. Used by tests and the CLI."""
    global _sync
    _sync = sync


def listen_to_animals(callback: Listener) -> Callable[[], None]:
    """Subscribe to herd changes. Returns an unsubscribe function."""
    return get_sync().listen(callback)


# =============================================================================
# Internal helpers
# =============================================================================


def _require_document(sync: LivestockSync, animal_id: str) -> dict[str, Any]:
    doc = sync.get_document(animal_id)
    if doc is None:
        raise AnimalNotFoundError(animal_id)
    return doc


def _dump(value: DocumentModel) -> dict[str, Any]:
    """Partial update payload in stored (camelCase) shape."""
    return value.to_document(exclude_unset=True)


def _merge(animal_id: str, fields: dict[str, Any]) -> Livestock:
    """Deep-merge fields into an existing document."""
    sync = get_sync()
    current = _require_document(sync, animal_id)

    # Validate before anything is written
    merged = Livestock.model_validate(deep_merge(current, fields))

    doc = sync.apply(
        animal_id,
        lambda cached: deep_merge(cached or current, fields),
        lambda: sync.store.merge_document(animal_id, fields),
    )
    return Livestock.model_validate(doc) if doc is not None else merged


def _write_new(sync: LivestockSync, animal: Livestock) -> None:
    doc = animal.to_document()

    def remote_write() -> None:
        sync.store.set_document(animal.id, doc)

    sync.apply(animal.id, lambda _: doc, remote_write)


def _find_entry(doc: dict[str, Any], animal_id: str, field: str, entry_id: str) -> dict[str, Any]:
    for item in doc.get(field) or []:
        if item.get("id") == entry_id:
            return item
    raise EntryNotFoundError(animal_id, field, entry_id)


def _add_entry(animal_id: str, field: str, entry: DocumentModel) -> None:
    sync = get_sync()
    _require_document(sync, animal_id)
    item = entry.to_document()

    def mutate(doc: dict[str, Any] | None) -> dict[str, Any]:
        doc = doc or {}
        doc[field] = [*(doc.get(field) or []), item]
        return doc

    sync.apply(animal_id, mutate, lambda: sync.store.array_union(animal_id, field, [item]))
    logger.info(f"Added {field} entry {item['id']} to {animal_id}")


def _update_entry(animal_id: str, field: str, entry: DocumentModel) -> None:
    sync = get_sync()
    doc = _require_document(sync, animal_id)
    item = entry.to_document()
    _find_entry(doc, animal_id, field, item["id"])

    values = [item if existing.get("id") == item["id"] else existing for existing in doc.get(field) or []]

    def mutate(cached: dict[str, Any] | None) -> dict[str, Any]:
        cached = cached or doc
        cached[field] = values
        return cached

    sync.apply(animal_id, mutate, lambda: sync.store.merge_document(animal_id, {field: values}))
    logger.info(f"Updated {field} entry {item['id']} on {animal_id}")


def _delete_entry(animal_id: str, field: str, entry_id: str) -> None:
    sync = get_sync()
    doc = _require_document(sync, animal_id)
    stored = _find_entry(doc, animal_id, field, entry_id)

    def mutate(cached: dict[str, Any] | None) -> dict[str, Any]:
        cached = cached or doc
        cached[field] = [v for v in cached.get(field) or [] if v.get("id") != entry_id]
        return cached

    sync.apply(animal_id, mutate, lambda: sync.store.array_remove(animal_id, field, [stored]))
    logger.info(f"Deleted {field} entry {entry_id} from {animal_id}")


# =============================================================================
# Herd Operations
# =============================================================================


async def create_default_animals(count: int | None = None) -> list[Livestock]:
    """
    Seed the default herd (KIT-01 .. KIT-NN).

    Animals that already exist are left untouched. Returns the animals
    that were created.
    """
    sync = get_sync()
    count = settings.seed_animal_count if count is None else count
    existing = set(sync.ids())

    created = []
    for animal in default_herd(count):
        if animal.id in existing:
            continue
        _write_new(sync, animal)
        created.append(animal)

    logger.info(f"Seeded {len(created)} default animals")
    return created


async def get_animal_ids() -> list[str]:
    """Ids of every animal, sorted."""
    return get_sync().ids()


async def list_animals(search: str | None = None) -> list[Livestock]:
    """
    All animals, sorted by id.

    `search` matches name or registration id, case-insensitively.
    """
    animals = get_sync().snapshot().animals
    if not search:
        return animals
    term = search.lower()
    return [a for a in animals if term in a.name.lower() or term in a.reg_id.lower()]


async def get_animal(animal_id: str) -> Livestock | None:
    """One animal, or None."""
    return get_sync().get(animal_id)


async def add_animal(data: LivestockCreate) -> Livestock:
    """Register a new animal under the next free KIT-NN id."""
    sync = get_sync()
    ids = sync.ids()
    numbers = [n for n in (id_number(i) for i in ids) if n is not None]
    new_id = make_animal_id(max(numbers, default=0) + 1)

    animal = Livestock(
        id=new_id,
        name=data.name,
        reg_id=data.reg_id or new_id,
        photo_url=data.photo_url,
        breed=data.breed,
        gender=data.gender,
        status=data.status,
        owner=data.owner,
        address=data.address,
        birth_date=data.birth_date,
        reproduction=Reproduction(role="Pejantan" if data.gender == "Jantan" else "Indukan"),
    )
    _write_new(sync, animal)
    logger.info(f"Registered new animal {new_id}")
    return animal


async def update_animal(animal_id: str, updates: LivestockUpdate | dict[str, Any]) -> Livestock:
    """
    Update identity fields.

    Nested `reproduction` and `pedigree` maps are deep-merged, so a partial
    dam edit keeps the sire and the other dam fields. Photo and embedded
    logs have their own operations and are ignored here.
    """
    if not isinstance(updates, LivestockUpdate):
        updates = LivestockUpdate.model_validate(updates)

    fields = _dump(updates)
    for key in PROTECTED_FIELDS:
        fields.pop(key, None)

    if not fields:
        raise InvalidRecordError("Tidak ada data yang diubah")

    animal = _merge(animal_id, fields)
    logger.info(f"Updated {animal_id}: {sorted(fields)}")
    return animal


async def update_animal_photo(animal_id: str, photo_url: str) -> Livestock:
    """Replace the animal's photo URL."""
    return _merge(animal_id, {"photoUrl": photo_url})


async def update_pedigree_parent(
    animal_id: str,
    parent: ParentType,
    fields: DamUpdate | SireUpdate | dict[str, Any],
) -> Livestock:
    """Merge changes into the dam or sire record."""
    if parent == "dam":
        payload = _dump(fields if isinstance(fields, DocumentModel) else DamUpdate.model_validate(fields))
    elif parent == "sire":
        payload = _dump(fields if isinstance(fields, DocumentModel) else SireUpdate.model_validate(fields))
    else:
        raise InvalidRecordError(f"Induk tidak dikenal: {parent}")

    return _merge(animal_id, {"pedigree": {parent: payload}})


async def delete_animal(animal_id: str) -> None:
    """Remove an animal and all its history."""
    sync = get_sync()
    _require_document(sync, animal_id)
    sync.apply(animal_id, lambda _: None, lambda: sync.store.delete_document(animal_id))
    logger.info(f"Deleted animal {animal_id}")


# =============================================================================
# Health Log
# =============================================================================


async def add_health_log(animal_id: str, log: HealthLogInput) -> HealthLog:
    entry = HealthLog(**log.model_dump())
    _add_entry(animal_id, HEALTH_LOG, entry)
    return entry


async def update_health_log(animal_id: str, log_id: str, log: HealthLogInput) -> HealthLog:
    entry = HealthLog(**log.model_dump(exclude={"id"}), id=log_id)
    _update_entry(animal_id, HEALTH_LOG, entry)
    return entry


async def delete_health_log(animal_id: str, log_id: str) -> None:
    _delete_entry(animal_id, HEALTH_LOG, log_id)


# =============================================================================
# Reproduction Log
# =============================================================================


async def add_reproduction_log(animal_id: str, log: ReproductionLogInput) -> ReproductionLog:
    entry = ReproductionLog(**log.model_dump())
    _add_entry(animal_id, REPRODUCTION_LOG, entry)
    return entry


async def update_reproduction_log(animal_id: str, log_id: str, log: ReproductionLogInput) -> ReproductionLog:
    entry = ReproductionLog(**log.model_dump(exclude={"id"}), id=log_id)
    _update_entry(animal_id, REPRODUCTION_LOG, entry)
    return entry


async def delete_reproduction_log(animal_id: str, log_id: str) -> None:
    _delete_entry(animal_id, REPRODUCTION_LOG, log_id)


# =============================================================================
# Growth Records
# =============================================================================


async def add_growth_record(animal_id: str, record: GrowthRecordInput) -> GrowthRecord:
    """
    Record a new weighing.

    The weight must be greater than the latest recorded weight.
    """
    animal = get_sync().get(animal_id)
    if animal is None:
        raise AnimalNotFoundError(animal_id)

    last = latest_weight(animal.growth_records) or 0
    if record.weight <= last:
        raise InvalidRecordError(f"Bobot harus lebih besar dari bobot terakhir ({last:g} kg).")

    entry = GrowthRecord(**record.model_dump())
    _add_entry(animal_id, GROWTH_RECORDS, entry)
    return entry


async def update_growth_record(animal_id: str, record_id: str, record: GrowthRecordInput) -> GrowthRecord:
    entry = GrowthRecord(**record.model_dump(exclude={"id"}), id=record_id)
    _update_entry(animal_id, GROWTH_RECORDS, entry)
    return entry


async def delete_growth_record(animal_id: str, record_id: str) -> None:
    _delete_entry(animal_id, GROWTH_RECORDS, record_id)
