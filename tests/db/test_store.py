"""
Tests for the Supabase-backed document store and demo seeding.
"""
from unittest.mock import MagicMock, patch

import pytest

from kira.db.client import get_supabase_client
from kira.db.seed import DEMO_RECEIPT_ID, DEMO_USER_ID, seed_demo_data
from kira.db.store import Filter, SupabaseDocumentStore


@pytest.fixture
def mock_supabase():
    """Supabase client whose query builder returns itself for chaining."""
    client = MagicMock()
    builder = MagicMock()
    client.table.return_value = builder
    for method in ("select", "eq", "contains", "limit", "upsert"):
        getattr(builder, method).return_value = builder
    return client


class TestSupabaseDocumentStore:
    def test_get_returns_first_row(self, mock_supabase):
        builder = mock_supabase.table.return_value
        builder.execute.return_value = MagicMock(data=[{"id": "user123", "industry": "Retail"}])

        document = SupabaseDocumentStore(mock_supabase).get("users", "user123")

        assert document == {"id": "user123", "industry": "Retail"}
        mock_supabase.table.assert_called_once_with("users")
        builder.eq.assert_called_once_with("id", "user123")
        builder.limit.assert_called_once_with(1)

    def test_get_missing(self, mock_supabase):
        mock_supabase.table.return_value.execute.return_value = MagicMock(data=[])

        assert SupabaseDocumentStore(mock_supabase).get("users", "nobody") is None

    def test_query_applies_filters_and_limit(self, mock_supabase):
        builder = mock_supabase.table.return_value
        builder.execute.return_value = MagicMock(data=[{"id": "a"}, {"id": "b"}])

        rows = SupabaseDocumentStore(mock_supabase).query(
            "catalog",
            [Filter("keywords", "contains", "solar"), Filter("supplier", "eq", "SolarX")],
            limit=5,
        )

        assert rows == [{"id": "a"}, {"id": "b"}]
        builder.contains.assert_called_once_with("keywords", ["solar"])
        builder.eq.assert_called_once_with("supplier", "SolarX")
        builder.limit.assert_called_once_with(5)

    def test_query_without_limit(self, mock_supabase):
        builder = mock_supabase.table.return_value
        builder.execute.return_value = MagicMock(data=None)

        assert SupabaseDocumentStore(mock_supabase).query("catalog") == []
        builder.limit.assert_not_called()

    def test_query_rejects_unknown_op(self, mock_supabase):
        with pytest.raises(ValueError):
            SupabaseDocumentStore(mock_supabase).query("catalog", [Filter("a", "gt", 1)])

    def test_set_upserts_with_id(self, mock_supabase):
        builder = mock_supabase.table.return_value

        SupabaseDocumentStore(mock_supabase).set("receipts", "r1", {"vendor": "TNB"})

        builder.upsert.assert_called_once_with({"vendor": "TNB", "id": "r1"})
        builder.execute.assert_called_once()


class TestSupabaseClient:
    @patch("kira.db.client.settings")
    def test_missing_credentials(self, mock_settings):
        mock_settings.SUPABASE_URL = ""
        mock_settings.SUPABASE_KEY = ""

        with pytest.raises(ValueError):
            get_supabase_client()

    @patch("kira.db.client.create_client")
    @patch("kira.db.client.settings")
    def test_creates_client(self, mock_settings, mock_create_client):
        mock_settings.SUPABASE_URL = "http://localhost:54321"
        mock_settings.SUPABASE_KEY = "key"

        client = get_supabase_client()

        assert client is mock_create_client.return_value
        mock_create_client.assert_called_once_with(
            supabase_url="http://localhost:54321",
            supabase_key="key",
        )


class TestSeedDemoData:
    def test_seeds_every_collection(self, store):
        written = seed_demo_data(store)

        assert written == 9
        assert store.get("users", DEMO_USER_ID)["industry"] == "Manufacturing"
        assert store.get("receipts", DEMO_RECEIPT_ID)["user_id"] == DEMO_USER_ID
        assert len(store.query("catalog", [Filter("keywords", "contains", "solar")])) >= 1
        assert store.get("green_assets", "solar_rooftop_10kwp")["gita_eligible"] is True

    def test_idempotent(self, store):
        seed_demo_data(store)
        seed_demo_data(store)

        assert len(store.query("users")) == 1
