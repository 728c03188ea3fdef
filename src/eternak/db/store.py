"""
E-TernakID - Document Store.

The remote store is treated as an opaque map of document id -> JSON
document with get / set / merge / list / delete. Array helpers mirror the
array-union and array-remove field transforms of hosted document databases.

Two backends:
- SupabaseDocumentStore: one row per document, the document in a jsonb column
- MemoryDocumentStore: process-local, for development and tests
"""

import copy
import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from eternak.config import settings
from eternak.errors import StoreConfigurationError

logger = logging.getLogger(__name__)


def deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """
    Merge `patch` into a copy of `base`.

    Nested dicts are merged key by key; every other value, lists included,
    replaces the stored one.
    """
    merged = copy.deepcopy(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class DocumentStore(ABC):
    """Remote document collection keyed by id."""

    @abstractmethod
    def list_documents(self) -> dict[str, dict[str, Any]]:
        """All documents, keyed by id."""

    @abstractmethod
    def get_document(self, doc_id: str) -> dict[str, Any] | None:
        """One document, or None."""

    @abstractmethod
    def set_document(self, doc_id: str, doc: dict[str, Any]) -> None:
        """Create or overwrite a document."""

    @abstractmethod
    def delete_document(self, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""

    def merge_document(self, doc_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Deep-merge fields into a document, creating it when absent."""
        current = self.get_document(doc_id) or {}
        merged = deep_merge(current, fields)
        self.set_document(doc_id, merged)
        return merged

    def array_union(self, doc_id: str, field: str, items: list[Any]) -> dict[str, Any]:
        """Append each item that is not already present in the array field."""
        current = self.get_document(doc_id) or {}
        values = list(current.get(field) or [])
        for item in items:
            if item not in values:
                values.append(copy.deepcopy(item))
        return self.merge_document(doc_id, {field: values})

    def array_remove(self, doc_id: str, field: str, items: list[Any]) -> dict[str, Any]:
        """Remove every element equal to one of the items."""
        current = self.get_document(doc_id) or {}
        values = [v for v in (current.get(field) or []) if v not in items]
        return self.merge_document(doc_id, {field: values})


class MemoryDocumentStore(DocumentStore):
    """In-process store. Every read and write copies the documents."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None):
        self._documents: dict[str, dict[str, Any]] = copy.deepcopy(documents or {})

    def list_documents(self) -> dict[str, dict[str, Any]]:
        return {doc_id: copy.deepcopy(doc) for doc_id, doc in sorted(self._documents.items())}

    def get_document(self, doc_id: str) -> dict[str, Any] | None:
        doc = self._documents.get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def set_document(self, doc_id: str, doc: dict[str, Any]) -> None:
        self._documents[doc_id] = copy.deepcopy(doc)

    def delete_document(self, doc_id: str) -> None:
        self._documents.pop(doc_id, None)


class SupabaseDocumentStore(DocumentStore):
    """
    Documents in a Supabase table.

    Expected schema (see migrations/001_livestock.sql):
        id text primary key, doc jsonb not null, updated_at timestamptz
    """

    def __init__(self, client: Any, table: str = "livestock"):
        self._client = client
        self._table = table

    def list_documents(self) -> dict[str, dict[str, Any]]:
        response = self._client.table(self._table).select("id, doc").order("id").execute()
        return {row["id"]: row["doc"] for row in response.data}

    def get_document(self, doc_id: str) -> dict[str, Any] | None:
        response = self._client.table(self._table).select("doc").eq("id", doc_id).execute()
        if not response.data:
            return None
        return response.data[0]["doc"]

    def set_document(self, doc_id: str, doc: dict[str, Any]) -> None:
        self._client.table(self._table).upsert(
            {
                "id": doc_id,
                "doc": doc,
                "updated_at": datetime.now(UTC).isoformat(),
            }
        ).execute()

    def delete_document(self, doc_id: str) -> None:
        self._client.table(self._table).delete().eq("id", doc_id).execute()


def create_store() -> DocumentStore:
    """Build the store selected by STORE_BACKEND."""
    backend = settings.store_backend

    if backend == "memory":
        logger.info("Using in-memory document store")
        return MemoryDocumentStore()

    if backend == "supabase":
        from eternak.db.client import get_client

        logger.info(f"Using Supabase document store (table={settings.livestock_table})")
        return SupabaseDocumentStore(get_client(), settings.livestock_table)

    raise StoreConfigurationError(f"Unknown store backend: {backend}")
