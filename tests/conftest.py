"""
Pytest configuration for Kira backend tests.

Sets up test environment and global fixtures. The model is always stubbed:
tests drive tool selection and structured output deterministically instead
of relying on live Gemini routing.
"""
import copy
import os
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-supabase-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from kira.agents.consultant.tools import build_tool_registry  # noqa: E402
from kira.agents.invoice.types import Invoice, LineItem  # noqa: E402
from kira.config import settings  # noqa: E402
from kira.context import AppContext  # noqa: E402
from kira.db.store import Filter  # noqa: E402


class InMemoryDocumentStore:
    """DocumentStore over plain dicts, for tests."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self.data: Dict[str, Dict[str, Dict[str, Any]]] = copy.deepcopy(data or {})

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        document = self.data.get(collection, {}).get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        rows = []
        for doc_id, document in self.data.get(collection, {}).items():
            if all(self._matches(document, condition) for condition in filters):
                rows.append({"id": doc_id, **copy.deepcopy(document)})
        return rows[:limit] if limit is not None else rows

    def set(self, collection: str, doc_id: str, value: Dict[str, Any]) -> None:
        self.data.setdefault(collection, {})[doc_id] = copy.deepcopy(value)

    @staticmethod
    def _matches(document: Dict[str, Any], condition: Filter) -> bool:
        if condition.op == "eq":
            return document.get(condition.field) == condition.value
        if condition.op == "contains":
            return condition.value in (document.get(condition.field) or [])
        raise ValueError(f"Unsupported filter op: {condition.op}")


class FakeModelClient:
    """
    Stand-in for GeminiModelClient.

    ``handler(prompt, **kwargs)`` produces each answer; every call is
    recorded in ``calls``.
    """

    def __init__(self, handler: Optional[Callable[..., Any]] = None):
        self.handler = handler or (lambda prompt, **kwargs: "ok")
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def generate(self, prompt: str, **kwargs: Any) -> Any:
        self.calls.append({"prompt": prompt, **kwargs})
        return self.handler(prompt, **kwargs)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def demo_store():
    """In-memory store holding the demo user, catalog, assets and a receipt."""
    return InMemoryDocumentStore({
        "users": {
            "user123": {
                "industry": "Manufacturing",
                "annual_revenue": 5000000,
                "total_emissions": 1440,
                "tax_credit_balance": 50000,
            },
        },
        "catalog": {
            "solar-panel": {
                "name": "Solar Panel PV-200",
                "supplier": "SolarX Sdn Bhd",
                "keywords": ["solar", "panel", "energy", "renewable"],
                "expiry_date": "2027-12-31",
            },
            "chiller": {
                "name": "High Efficiency Chiller",
                "supplier": "CoolTech MY",
                "keywords": ["chiller", "cooling", "hvac"],
                "expiry_date": "2026-06-30",
            },
        },
        "green_assets": {
            "solar_rooftop_10kwp": {
                "capex_rm": 45000,
                "annual_energy_offset_percent": 0.25,
                "annual_maintenance_rm": 500,
                "lifetime_years": 25,
                "gita_eligible": True,
            },
        },
        "industry_stats": {
            "Manufacturing": {"average_intensity": 0.35},
        },
        "receipts": {
            "receipt_abc": {
                "user_id": "user123",
                "vendor": "Tenaga Nasional Berhad",
                "date": "2026-01-31",
                "line_items": [{"name": "Electricity usage", "quantity": 12000, "unit": "kWh"}],
            },
        },
    })


@pytest.fixture
def make_model():
    """Factory for model stubs: ``make_model(handler)``."""
    return FakeModelClient


@pytest.fixture
def make_context():
    """Factory building an AppContext around a store and a model stub."""
    def _make(store=None, model=None) -> AppContext:
        return AppContext(
            store=store if store is not None else InMemoryDocumentStore(),
            model=model if model is not None else FakeModelClient(),
            tools=build_tool_registry(),
            settings=settings,
        )
    return _make


@pytest.fixture
def diesel_item():
    return LineItem(
        name="Diesel",
        supplier="Petronas Dagangan",
        quantity=300,
        unit="litres",
        price=645.0,
        is_green_eligible=False,
        purchase_date="2026-01-15",
    )


@pytest.fixture
def solar_item():
    return LineItem(
        name="Solar panel 550W",
        supplier="SolarX Sdn Bhd",
        quantity=20,
        unit="single",
        price=30000.0,
        is_green_eligible=True,
        purchase_date="2026-01-15",
    )


@pytest.fixture
def sample_invoice(diesel_item, solar_item):
    return Invoice(
        invoice_number="INV-2026-0042",
        supplier="Mixed Supplies Sdn Bhd",
        purchase_date="2026-01-15",
        total_amount=30645.0,
        items=[diesel_item, solar_item],
    )
