"""
Endpoints for the arrays embedded in a livestock document:
health logs, reproduction logs and growth records.

Adding an entry is open; editing or deleting one needs edit access.
"""

from fastapi import APIRouter, Depends

from eternak.calculations import calculate_adg, latest_weight
from eternak.db import livestock as herd
from eternak.models.livestock import GrowthRecordInput, HealthLogInput, ReproductionLogInput
from eternak.web.auth import require_edit_access
from eternak.web.livestock_routes import load_animal
from eternak.web.responses import (
    EntityListResponse,
    EntityResponse,
    deleted_response,
    entity_response,
)

router = APIRouter(prefix="/livestock/{animal_id}", tags=["livestock-logs"])


# =============================================================================
# Health Logs
# =============================================================================


@router.get("/health-logs")
async def list_health_logs(animal_id: str) -> EntityListResponse:
    """Health events, newest first."""
    animal = await load_animal(animal_id)
    logs = sorted(animal.health_log, key=lambda log: log.date, reverse=True)
    return EntityListResponse(data=[log.to_document() for log in logs], count=len(logs))


@router.post("/health-logs", status_code=201)
async def create_health_log(animal_id: str, body: HealthLogInput) -> EntityResponse:
    entry = await herd.add_health_log(animal_id, body)
    return entity_response("created", "health_log", entry.id, entry.to_document())


@router.put("/health-logs/{entry_id}", dependencies=[Depends(require_edit_access)])
async def update_health_log(animal_id: str, entry_id: str, body: HealthLogInput) -> EntityResponse:
    entry = await herd.update_health_log(animal_id, entry_id, body)
    return entity_response("updated", "health_log", entry_id, entry.to_document())


@router.delete("/health-logs/{entry_id}", dependencies=[Depends(require_edit_access)])
async def delete_health_log(animal_id: str, entry_id: str):
    await herd.delete_health_log(animal_id, entry_id)
    return deleted_response("health_log", entry_id)


# =============================================================================
# Reproduction Logs
# =============================================================================


@router.get("/reproduction-logs")
async def list_reproduction_logs(animal_id: str) -> EntityListResponse:
    """Reproduction events, newest first."""
    animal = await load_animal(animal_id)
    logs = sorted(animal.reproduction_log, key=lambda log: log.date, reverse=True)
    return EntityListResponse(data=[log.to_document() for log in logs], count=len(logs))


@router.post("/reproduction-logs", status_code=201)
async def create_reproduction_log(animal_id: str, body: ReproductionLogInput) -> EntityResponse:
    entry = await herd.add_reproduction_log(animal_id, body)
    return entity_response("created", "reproduction_log", entry.id, entry.to_document())


@router.put("/reproduction-logs/{entry_id}", dependencies=[Depends(require_edit_access)])
async def update_reproduction_log(animal_id: str, entry_id: str, body: ReproductionLogInput) -> EntityResponse:
    entry = await herd.update_reproduction_log(animal_id, entry_id, body)
    return entity_response("updated", "reproduction_log", entry_id, entry.to_document())


@router.delete("/reproduction-logs/{entry_id}", dependencies=[Depends(require_edit_access)])
async def delete_reproduction_log(animal_id: str, entry_id: str):
    await herd.delete_reproduction_log(animal_id, entry_id)
    return deleted_response("reproduction_log", entry_id)


# =============================================================================
# Growth Records
# =============================================================================


@router.get("/growth-records")
async def get_growth_records(animal_id: str) -> EntityResponse:
    """Weighings in date order with ADG per record, the average and latest weight."""
    animal = await load_animal(animal_id)
    summary = calculate_adg(animal.growth_records).to_dict()
    summary["latestWeight"] = latest_weight(animal.growth_records)
    return entity_response("read", "growth_records", animal_id, summary)


@router.post("/growth-records", status_code=201)
async def create_growth_record(animal_id: str, body: GrowthRecordInput) -> EntityResponse:
    entry = await herd.add_growth_record(animal_id, body)
    return entity_response("created", "growth_record", entry.id, entry.to_document())


@router.put("/growth-records/{entry_id}", dependencies=[Depends(require_edit_access)])
async def update_growth_record(animal_id: str, entry_id: str, body: GrowthRecordInput) -> EntityResponse:
    entry = await herd.update_growth_record(animal_id, entry_id, body)
    return entity_response("updated", "growth_record", entry_id, entry.to_document())


@router.delete("/growth-records/{entry_id}", dependencies=[Depends(require_edit_access)])
async def delete_growth_record(animal_id: str, entry_id: str):
    await herd.delete_growth_record(animal_id, entry_id)
    return deleted_response("growth_record", entry_id)
