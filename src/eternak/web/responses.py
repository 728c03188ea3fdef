"""
Response envelopes shared by the livestock routes.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel


class EntityMeta(BaseModel):
    """Which change a response reports."""
    action: str  # "read", "created", "updated", "deleted"
    entity_type: str
    id: str
    timestamp: str


class EntityResponse(BaseModel):
    """Standard response with data and metadata."""
    data: dict[str, Any]
    meta: EntityMeta


class EntityListResponse(BaseModel):
    """Standard response for list operations."""
    data: list[dict[str, Any]]
    count: int


def make_meta(action: str, entity_type: str, entity_id: str) -> EntityMeta:
    return EntityMeta(
        action=action,
        entity_type=entity_type,
        id=entity_id,
        timestamp=datetime.now(UTC).isoformat(),
    )


def entity_response(action: str, entity_type: str, entity_id: str, data: dict[str, Any]) -> EntityResponse:
    return EntityResponse(data=data, meta=make_meta(action, entity_type, entity_id))


def deleted_response(entity_type: str, entity_id: str) -> dict[str, Any]:
    return {
        "success": True,
        "meta": make_meta("deleted", entity_type, entity_id).model_dump(),
    }
