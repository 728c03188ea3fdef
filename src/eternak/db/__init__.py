"""
E-TernakID - Data access.

Document store backends, the synchronization layer, and livestock operations.
"""

from eternak.db.livestock import get_sync, listen_to_animals, reset_sync
from eternak.db.store import DocumentStore, MemoryDocumentStore, SupabaseDocumentStore, create_store
from eternak.db.sync import LivestockSync, Snapshot

__all__ = [
    "DocumentStore",
    "LivestockSync",
    "MemoryDocumentStore",
    "Snapshot",
    "SupabaseDocumentStore",
    "create_store",
    "get_sync",
    "listen_to_animals",
    "reset_sync",
]
