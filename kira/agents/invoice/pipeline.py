"""
Invoice Pipeline Runner

Document-to-structured-data workflow:

    extract_invoice -> categorise_items -> (convert_to_carbon_entry, convert_to_gita_entry)

Each step is a single schema-constrained Gemini call. Nothing is persisted
here; callers decide what to store. There is no retry and no partial
success: a failing step fails the whole request with a typed error.
"""

import asyncio
import logging
from typing import Optional

from kira.agents.invoice.prompts import (
    CARBON_ENTRY_SYSTEM_PROMPT,
    EXTRACTION_PROMPT,
    GITA_ENTRY_SYSTEM_PROMPT,
    build_carbon_entry_prompt,
    build_gita_entry_prompt,
)
from kira.agents.invoice.types import (
    CarbonEntry,
    CategorisationResult,
    GreenIncentiveEntry,
    Invoice,
    LineItem,
)
from kira.context import AppContext
from kira.errors import CategorizationFailed, ExtractionFailed, MalformedOutput
from kira.llm.media import encode_data_uri, load_document

logger = logging.getLogger(__name__)


def extract_invoice(
    context: AppContext,
    source: str,
    mime_type: Optional[str] = None,
) -> Invoice:
    """
    Extract an Invoice from a source document.

    Args:
        context: Application context
        source: Local path, http(s) URL or data URI of the invoice (image or PDF)
        mime_type: Media type; inferred from the source when omitted

    Returns:
        Invoice conforming to the extraction schema

    Raises:
        NotFound: The source document does not exist
        ExtractionFailed: The model returned nothing parseable
        GenerationFailed: The model call itself failed
    """
    data_uri = load_document(source, mime_type)
    return _extract_from_data_uri(context, data_uri)


def extract_invoice_from_bytes(
    context: AppContext,
    data: bytes,
    mime_type: str,
) -> Invoice:
    """Extract an Invoice from raw document bytes (e.g. an uploaded receipt image)."""
    return _extract_from_data_uri(context, encode_data_uri(data, mime_type))


def _extract_from_data_uri(context: AppContext, data_uri: str) -> Invoice:
    logger.info("Invoice extraction started")

    try:
        invoice = context.model.generate(
            EXTRACTION_PROMPT,
            media=[data_uri],
            output_schema=Invoice,
            temperature=0.0,  # Deterministic for structured extraction
        )
    except MalformedOutput as e:
        raise ExtractionFailed("Extraction failed.") from e

    logger.info(f"Invoice extraction completed: {len(invoice.items)} line items")
    return invoice


def convert_to_carbon_entry(context: AppContext, item: LineItem) -> CarbonEntry:
    """
    Convert one line item into a GHG Protocol CarbonEntry.

    The model selects the scope and computes co2e_emission.

    Raises:
        CategorizationFailed: The model output is not a valid CarbonEntry
    """
    try:
        entry = context.model.generate(
            build_carbon_entry_prompt(item),
            system_instruction=CARBON_ENTRY_SYSTEM_PROMPT,
            output_schema=CarbonEntry,
            temperature=0.0,
        )
    except MalformedOutput as e:
        raise CategorizationFailed("Conversion to carbon entry failed.") from e

    logger.debug(f"Carbon entry derived: scope={entry.scope}")
    return entry


def convert_to_gita_entry(context: AppContext, item: LineItem) -> GreenIncentiveEntry:
    """
    Convert one GITA-eligible line item into a GreenIncentiveEntry.

    Raises:
        CategorizationFailed: The model output is not a valid GreenIncentiveEntry
    """
    try:
        entry = context.model.generate(
            build_gita_entry_prompt(item),
            system_instruction=GITA_ENTRY_SYSTEM_PROMPT,
            output_schema=GreenIncentiveEntry,
            temperature=0.0,
        )
    except MalformedOutput as e:
        raise CategorizationFailed("Conversion to GITA entry failed.") from e

    logger.debug(f"GITA entry derived: tier={entry.tier}")
    return entry


async def categorise_items(context: AppContext, invoice: Invoice) -> CategorisationResult:
    """
    Derive carbon and GITA entries for every line item of an invoice.

    Every item yields exactly one CarbonEntry; only items flagged
    ``is_green_eligible`` yield a GreenIncentiveEntry. Per-item conversions run
    concurrently in worker threads, bounded by MAX_CONCURRENT_DERIVATIONS,
    and results keep the input order.

    Raises:
        CategorizationFailed: A conversion failed, or nothing was derived from
            a non-empty invoice
    """
    items = list(invoice.items)
    logger.info(f"Categorisation started for {len(items)} line items")

    if not items:
        return CategorisationResult()

    semaphore = asyncio.Semaphore(max(1, context.settings.MAX_CONCURRENT_DERIVATIONS))

    async def _run(func, item: LineItem):
        async with semaphore:
            return await asyncio.to_thread(func, context, item)

    carbon_tasks = [_run(convert_to_carbon_entry, item) for item in items]
    gita_tasks = [_run(convert_to_gita_entry, item) for item in items if item.is_green_eligible]

    results = await asyncio.gather(*carbon_tasks, *gita_tasks)
    carbon_entries = list(results[: len(carbon_tasks)])
    gita_entries = list(results[len(carbon_tasks):])

    if not carbon_entries and not gita_entries:
        raise CategorizationFailed("Categorisation failed.")

    logger.info(
        f"Categorisation completed: {len(carbon_entries)} carbon entries, "
        f"{len(gita_entries)} GITA entries"
    )
    return CategorisationResult(carbon_entries=carbon_entries, gita_entries=gita_entries)
