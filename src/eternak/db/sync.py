"""
E-TernakID - Livestock synchronization layer.

Keeps a local cache of every livestock document and mediates between
callers and the remote DocumentStore:

- Writes are optimistic: the cached document changes and listeners are
  notified (has_pending_writes=True) before the remote write runs. A failed
  write restores the previous document, notifies again and raises
  StoreWriteError.
- Listeners receive the whole herd on subscribe and after every change.
- refresh() picks up changes made by other processes; poll_forever() runs
  it on an interval.
"""

import asyncio
import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from eternak.db.store import DocumentStore
from eternak.errors import StoreWriteError
from eternak.models.livestock import Livestock

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """The herd as seen by listeners."""

    animals: list[Livestock] = field(default_factory=list)
    has_pending_writes: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "animals": [a.to_document() for a in self.animals],
            "has_pending_writes": self.has_pending_writes,
        }


Listener = Callable[[Snapshot], None]
Mutation = Callable[[dict[str, Any] | None], dict[str, Any] | None]
RemoteWrite = Callable[[], dict[str, Any] | None]


class LivestockSync:
    """Local cache + listeners in front of a DocumentStore."""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.loaded = False
        self._documents: dict[str, dict[str, Any]] = {}
        self._listeners: dict[int, Listener] = {}
        self._next_listener_id = 0
        self._pending_writes = 0

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Replace the cache with the remote contents."""
        self._documents = self.store.list_documents()
        self.loaded = True
        logger.info(f"Loaded {len(self._documents)} livestock documents")
        self._notify()

    def ensure_loaded(self) -> None:
        if not self.loaded:
            self.load()

    def ids(self) -> list[str]:
        self.ensure_loaded()
        return sorted(self._documents)

    def get_document(self, doc_id: str) -> dict[str, Any] | None:
        self.ensure_loaded()
        doc = self._documents.get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def get(self, doc_id: str) -> Livestock | None:
        doc = self.get_document(doc_id)
        return Livestock.model_validate(doc) if doc is not None else None

    def snapshot(self) -> Snapshot:
        self.ensure_loaded()
        animals = []
        for doc_id in sorted(self._documents):
            try:
                animals.append(Livestock.model_validate(self._documents[doc_id]))
            except ValidationError as e:
                logger.warning(f"Skipping malformed livestock document {doc_id}: {e}")
        return Snapshot(animals=animals, has_pending_writes=self._pending_writes > 0)

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def listen(self, callback: Listener) -> Callable[[], None]:
        """
        Subscribe to herd changes.

        The callback is invoked immediately with the current snapshot.
        Returns a function that unsubscribes.
        """
        snapshot = self.snapshot()
        listener_id = self._next_listener_id
        self._next_listener_id += 1
        self._listeners[listener_id] = callback
        self._deliver(callback, snapshot)

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for callback in list(self._listeners.values()):
            self._deliver(callback, snapshot)

    @staticmethod
    def _deliver(callback: Listener, snapshot: Snapshot) -> None:
        try:
            callback(snapshot)
        except Exception:
            logger.exception("Livestock listener failed")

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def apply(self, doc_id: str, mutate: Mutation, remote_write: RemoteWrite) -> dict[str, Any] | None:
        """
        Optimistically apply a change to one document.

        `mutate` receives a copy of the cached document (None if absent) and
        returns the new document, or None to delete it. `remote_write`
        persists the change; if it returns a document, that becomes the
        cached state.
        """
        self.ensure_loaded()
        previous = self._documents.get(doc_id)
        updated = mutate(copy.deepcopy(previous) if previous is not None else None)

        self._set_local(doc_id, updated)
        self._pending_writes += 1
        self._notify()

        try:
            confirmed = remote_write()
        except Exception as e:
            logger.exception(f"Write to {doc_id} failed, restoring local state")
            self._set_local(doc_id, previous)
            self._pending_writes -= 1
            self._notify()
            raise StoreWriteError(doc_id) from e

        if confirmed is not None:
            updated = confirmed
            self._set_local(doc_id, confirmed)
        self._pending_writes -= 1
        self._notify()

        return copy.deepcopy(updated) if updated is not None else None

    def _set_local(self, doc_id: str, doc: dict[str, Any] | None) -> None:
        if doc is None:
            self._documents.pop(doc_id, None)
        else:
            self._documents[doc_id] = doc

    # -------------------------------------------------------------------------
    # Remote changes
    # -------------------------------------------------------------------------

    def refresh(self) -> bool:
        """Re-read the store. Returns True (and notifies) if anything changed."""
        remote = self.store.list_documents()
        if self.loaded and remote == self._documents:
            return False
        self._documents = remote
        self.loaded = True
        self._notify()
        return True

    async def poll_forever(self, interval: float) -> None:
        """Refresh every `interval` seconds until cancelled."""
        logger.info(f"Polling livestock store every {interval}s")
        while True:
            await asyncio.sleep(interval)
            try:
                if self.refresh():
                    logger.info("Picked up remote livestock changes")
            except Exception:
                logger.exception("Livestock refresh failed")
