"""
Livestock API endpoints.

Herd list and detail, identity edits, photo and pedigree changes, and the
Server-Sent-Events stream that pushes the whole herd after every change.
"""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from sse_starlette.sse import EventSourceResponse

from eternak.calculations import calculate_adg, calculate_age, latest_weight
from eternak.db import livestock as herd
from eternak.db.seed import default_photo_url
from eternak.db.sync import Snapshot
from eternak.errors import AnimalNotFoundError
from eternak.models.livestock import (
    DamUpdate,
    Livestock,
    LivestockCreate,
    LivestockUpdate,
    ParentType,
    PhotoUpdate,
    SireUpdate,
)
from eternak.web.auth import require_edit_access
from eternak.web.responses import (
    EntityListResponse,
    EntityResponse,
    deleted_response,
    entity_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/livestock", tags=["livestock"])

ENTITY_TYPE = "livestock"

# Seconds without a change before a keep-alive ping is sent
PING_INTERVAL = 30


def animal_detail(animal: Livestock) -> dict[str, Any]:
    """Stored document plus the values derived on read."""
    data = animal.to_document()
    data["photoUrl"] = animal.photo_url or default_photo_url(animal.id)
    for role in ("dam", "sire"):
        parent = data["pedigree"][role]
        parent["photoUrl"] = parent.get("photoUrl") or default_photo_url(animal.id, role)
    data["age"] = calculate_age(animal.birth_date)
    data["growth"] = calculate_adg(animal.growth_records).to_dict()
    data["latestWeight"] = latest_weight(animal.growth_records)
    return data


async def load_animal(animal_id: str) -> Livestock:
    animal = await herd.get_animal(animal_id)
    if animal is None:
        raise AnimalNotFoundError(animal_id)
    return animal


# =============================================================================
# Change Stream
# =============================================================================


def snapshot_event(snapshot: Snapshot) -> dict[str, str]:
    return {"event": "snapshot", "data": json.dumps(snapshot.to_dict())}


def queue_listener(queue: asyncio.Queue):
    """
    Listener that pushes snapshots into a bounded queue.

    When the client falls behind, the oldest snapshot is dropped; every
    snapshot is the whole herd, so only the latest one matters.
    """

    def on_snapshot(snapshot: Snapshot) -> None:
        try:
            queue.put_nowait(snapshot)
        except asyncio.QueueFull:
            queue.get_nowait()
            queue.put_nowait(snapshot)

    return on_snapshot


@router.get("/stream")
async def stream_livestock(request: Request):
    """Push the herd on connect and after every change."""
    queue: asyncio.Queue = asyncio.Queue(maxsize=10)
    unsubscribe = herd.listen_to_animals(queue_listener(queue))

    async def event_generator():
        try:
            while True:
                if await request.is_disconnected():
                    break
                try:
                    snapshot = await asyncio.wait_for(queue.get(), timeout=PING_INTERVAL)
                except asyncio.TimeoutError:
                    yield {"event": "ping", "data": ""}
                    continue
                yield snapshot_event(snapshot)
        except asyncio.CancelledError:
            logger.info("Livestock stream client disconnected")
            raise
        finally:
            unsubscribe()

    return EventSourceResponse(event_generator())


# =============================================================================
# Herd Endpoints
# =============================================================================


@router.get("")
async def list_livestock(q: str | None = None) -> EntityListResponse:
    """
    List the herd, sorted by id.

    `q` filters by name or registration id.
    """
    animals = await herd.list_animals(q)
    return EntityListResponse(
        data=[a.to_document() for a in animals],
        count=len(animals),
    )


@router.post("", status_code=201)
async def create_livestock(body: LivestockCreate) -> EntityResponse:
    """Register a new animal."""
    animal = await herd.add_animal(body)
    return entity_response("created", ENTITY_TYPE, animal.id, animal_detail(animal))


@router.get("/{animal_id}")
async def get_livestock(animal_id: str) -> EntityResponse:
    """One animal with age, ADG and latest weight."""
    animal = await load_animal(animal_id)
    return entity_response("read", ENTITY_TYPE, animal_id, animal_detail(animal))


@router.patch("/{animal_id}", dependencies=[Depends(require_edit_access)])
async def update_livestock(animal_id: str, body: LivestockUpdate) -> EntityResponse:
    """Edit identity fields, reproduction profile or pedigree."""
    animal = await herd.update_animal(animal_id, body)
    return entity_response("updated", ENTITY_TYPE, animal_id, animal_detail(animal))


@router.put("/{animal_id}/photo", dependencies=[Depends(require_edit_access)])
async def update_livestock_photo(animal_id: str, body: PhotoUpdate) -> EntityResponse:
    animal = await herd.update_animal_photo(animal_id, body.photo_url)
    return entity_response("updated", ENTITY_TYPE, animal_id, animal_detail(animal))


@router.patch("/{animal_id}/pedigree/{parent}", dependencies=[Depends(require_edit_access)])
async def update_livestock_pedigree(
    animal_id: str,
    parent: ParentType,
    body: dict[str, Any],
) -> EntityResponse:
    """Edit the dam or the sire. Unsent fields keep their value."""
    model = DamUpdate if parent == "dam" else SireUpdate
    animal = await herd.update_pedigree_parent(animal_id, parent, model.model_validate(body))
    return entity_response("updated", ENTITY_TYPE, animal_id, animal_detail(animal))


@router.delete("/{animal_id}", dependencies=[Depends(require_edit_access)])
async def delete_livestock(animal_id: str):
    await herd.delete_animal(animal_id)
    return deleted_response(ENTITY_TYPE, animal_id)
