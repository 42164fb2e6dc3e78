"""
Invoice Pipeline Package

Extracts structured invoice data from documents and classifies line items
into greenhouse-gas accounting entries and GITA tax-incentive entries.

Main Components:
- types: Pydantic models (LineItem, Invoice, CarbonEntry, GreenIncentiveEntry)
- prompts: Extraction instruction and the GHG / GITA system prompts
- pipeline: extract_invoice, categorise_items and the per-item converters

Usage:
    from kira.agents.invoice import extract_invoice, categorise_items

    invoice = extract_invoice(context, "invoices/tnb-jan.pdf")
    result = await categorise_items(context, invoice)
"""

from kira.agents.invoice.pipeline import (
    categorise_items,
    convert_to_carbon_entry,
    convert_to_gita_entry,
    extract_invoice,
    extract_invoice_from_bytes,
)
from kira.agents.invoice.types import (
    CarbonEntry,
    CategorisationResult,
    GreenIncentiveEntry,
    Invoice,
    LineItem,
)

__all__ = [
    # Pipeline
    "extract_invoice",
    "extract_invoice_from_bytes",
    "categorise_items",
    "convert_to_carbon_entry",
    "convert_to_gita_entry",
    # Types
    "LineItem",
    "Invoice",
    "CarbonEntry",
    "GreenIncentiveEntry",
    "CategorisationResult",
]
