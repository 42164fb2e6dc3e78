"""
Document store used by the pipelines, the consultant agent and its tools.

Each collection is a Supabase table keyed by an ``id`` text column:

- users/{user_id}          industry, annual_revenue, total_emissions, tax_credit_balance
- catalog/{id}             name, supplier, keywords (text[]), expiry_date
- industry_stats/{name}    average_intensity
- green_assets/{asset_id}  capex_rm, annual_energy_offset_percent, annual_maintenance_rm,
                           lifetime_years, gita_eligible
- invoices/{id}, receipts/{id}   user_id, vendor, date, line_items (jsonb)

There is no transactional guarantee: values read here may change between
calls and writes are plain upserts.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Protocol, Sequence, cast

from supabase import Client

logger = logging.getLogger(__name__)

FilterOp = Literal["eq", "contains"]


@dataclass(frozen=True)
class Filter:
    """
    A single query condition.

    ``eq`` matches a column equal to ``value``; ``contains`` matches an array
    column holding ``value`` as one of its elements.
    """
    field: str
    op: FilterOp
    value: Any


class DocumentStore(Protocol):
    """Read/query/write interface over document collections."""

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        ...

    def set(self, collection: str, doc_id: str, value: Dict[str, Any]) -> None:
        ...


class SupabaseDocumentStore:
    """DocumentStore backed by Supabase tables."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one document by id.

        Returns:
            The row as a dict, or None when no row has that id.
        """
        result = (
            self._client.table(collection)
            .select("*")
            .eq("id", doc_id)
            .limit(1)
            .execute()
        )

        if not result.data:
            logger.debug(f"No document {collection}/{doc_id}")
            return None

        return cast(Dict[str, Any], result.data[0])

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch the documents of a collection matching every filter.

        Args:
            collection: Table name
            filters: Conditions combined with AND
            limit: Maximum number of rows (None for no limit)

        Returns:
            Matching rows; an empty list is a valid result.
        """
        request = self._client.table(collection).select("*")

        for condition in filters:
            if condition.op == "eq":
                request = request.eq(condition.field, condition.value)
            elif condition.op == "contains":
                request = request.contains(condition.field, [condition.value])
            else:
                raise ValueError(f"Unsupported filter op: {condition.op}")

        if limit is not None:
            request = request.limit(limit)

        result = request.execute()
        rows = cast(List[Dict[str, Any]], result.data or [])

        logger.debug(f"Query on {collection} returned {len(rows)} rows")
        return rows

    def set(self, collection: str, doc_id: str, value: Dict[str, Any]) -> None:
        """Create or replace the document with the given id."""
        row = {**value, "id": doc_id}
        self._client.table(collection).upsert(row).execute()
        logger.debug(f"Upserted {collection}/{doc_id}")
