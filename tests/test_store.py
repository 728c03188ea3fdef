"""
Tests for document store backends.
"""

from unittest.mock import MagicMock, patch

import pytest

from eternak.db.store import MemoryDocumentStore, SupabaseDocumentStore, create_store, deep_merge
from eternak.errors import StoreConfigurationError


class TestDeepMerge:

    def test_nested_maps_merge(self):
        base = {"pedigree": {"dam": {"name": "A", "breed": "Bali"}, "sire": {"name": "B"}}}
        merged = deep_merge(base, {"pedigree": {"dam": {"name": "C"}}})
        assert merged == {"pedigree": {"dam": {"name": "C", "breed": "Bali"}, "sire": {"name": "B"}}}

    def test_lists_are_replaced(self):
        merged = deep_merge({"healthLog": [1, 2]}, {"healthLog": [3]})
        assert merged == {"healthLog": [3]}

    def test_base_is_not_mutated(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestMemoryDocumentStore:

    def test_set_get_delete(self):
        store = MemoryDocumentStore()
        store.set_document("KIT-01", {"name": "A"})
        assert store.get_document("KIT-01") == {"name": "A"}

        store.delete_document("KIT-01")
        assert store.get_document("KIT-01") is None
        store.delete_document("KIT-01")  # missing is a no-op

    def test_reads_are_copies(self):
        store = MemoryDocumentStore({"KIT-01": {"tags": ["a"]}})
        doc = store.get_document("KIT-01")
        doc["tags"].append("b")
        assert store.get_document("KIT-01") == {"tags": ["a"]}

    def test_list_is_sorted_by_id(self):
        store = MemoryDocumentStore({"KIT-02": {}, "KIT-01": {}})
        assert list(store.list_documents()) == ["KIT-01", "KIT-02"]

    def test_merge_creates_missing_document(self):
        store = MemoryDocumentStore()
        assert store.merge_document("KIT-09", {"name": "X"}) == {"name": "X"}

    def test_array_union_skips_existing_items(self):
        store = MemoryDocumentStore({"KIT-01": {"healthLog": [{"id": "a"}]}})
        doc = store.array_union("KIT-01", "healthLog", [{"id": "a"}, {"id": "b"}])
        assert doc["healthLog"] == [{"id": "a"}, {"id": "b"}]

    def test_array_remove_matches_whole_item(self):
        store = MemoryDocumentStore({"KIT-01": {"healthLog": [{"id": "a", "x": 1}, {"id": "b"}]}})
        store.array_remove("KIT-01", "healthLog", [{"id": "a", "x": 2}])
        assert len(store.get_document("KIT-01")["healthLog"]) == 2

        store.array_remove("KIT-01", "healthLog", [{"id": "a", "x": 1}])
        assert store.get_document("KIT-01")["healthLog"] == [{"id": "b"}]


class TestSupabaseDocumentStore:
    """The Supabase backend keeps one jsonb document per row."""

    def test_list_documents(self, mock_supabase):
        table = mock_supabase.table.return_value
        table.execute.return_value = MagicMock(data=[
            {"id": "KIT-01", "doc": {"name": "A"}},
            {"id": "KIT-02", "doc": {"name": "B"}},
        ])

        docs = SupabaseDocumentStore(mock_supabase).list_documents()

        mock_supabase.table.assert_called_with("livestock")
        table.select.assert_called_with("id, doc")
        table.order.assert_called_with("id")
        assert docs == {"KIT-01": {"name": "A"}, "KIT-02": {"name": "B"}}

    def test_get_missing_document(self, mock_supabase):
        assert SupabaseDocumentStore(mock_supabase).get_document("KIT-99") is None
        mock_supabase.table.return_value.eq.assert_called_with("id", "KIT-99")

    def test_set_document_upserts_row(self, mock_supabase):
        SupabaseDocumentStore(mock_supabase, table="ternak").set_document("KIT-01", {"name": "A"})

        mock_supabase.table.assert_called_with("ternak")
        row = mock_supabase.table.return_value.upsert.call_args.args[0]
        assert row["id"] == "KIT-01"
        assert row["doc"] == {"name": "A"}
        assert "updated_at" in row

    def test_merge_reads_then_upserts(self, mock_supabase):
        table = mock_supabase.table.return_value
        table.execute.return_value = MagicMock(data=[{"doc": {"name": "A", "pedigree": {"dam": {"name": "D"}}}}])

        merged = SupabaseDocumentStore(mock_supabase).merge_document("KIT-01", {"pedigree": {"sire": {"name": "S"}}})

        assert merged["pedigree"] == {"dam": {"name": "D"}, "sire": {"name": "S"}}
        assert table.upsert.call_args.args[0]["doc"] == merged

    def test_delete_document(self, mock_supabase):
        SupabaseDocumentStore(mock_supabase).delete_document("KIT-01")
        table = mock_supabase.table.return_value
        table.delete.assert_called_once()
        table.eq.assert_called_with("id", "KIT-01")


class TestCreateStore:

    def test_memory_backend(self):
        assert isinstance(create_store(), MemoryDocumentStore)

    def test_supabase_backend(self, mock_supabase):
        fake_settings = MagicMock(store_backend="supabase", livestock_table="livestock")
        with patch("eternak.db.store.settings", fake_settings), \
                patch("eternak.db.client.get_client", return_value=mock_supabase):
            store = create_store()
        assert isinstance(store, SupabaseDocumentStore)

    def test_unknown_backend(self):
        with patch("eternak.db.store.settings", MagicMock(store_backend="redis")):
            with pytest.raises(StoreConfigurationError):
                create_store()


class TestSupabaseClient:

    def test_missing_credentials(self):
        from eternak.db import client as db_client

        fake_settings = MagicMock(supabase_url=None, supabase_anon_key=None, supabase_service_role_key=None)
        db_client.reset_client()
        with patch.object(db_client, "settings", fake_settings):
            with pytest.raises(StoreConfigurationError):
                db_client.get_client()

    def test_prefers_service_role_key(self):
        from eternak.db import client as db_client

        fake_settings = MagicMock(
            supabase_url="https://x.supabase.co",
            supabase_anon_key="anon",
            supabase_service_role_key="service",
        )
        db_client.reset_client()
        with patch.object(db_client, "settings", fake_settings), \
                patch.object(db_client, "create_client") as create_client:
            db_client.get_client()
        create_client.assert_called_once_with("https://x.supabase.co", "service")
        db_client.reset_client()
