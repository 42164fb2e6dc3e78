"""
Pydantic schemas for invoice pipeline endpoints.

The pipeline models (Invoice, LineItem, CarbonEntry, ...) are reused as
request/response bodies; this module adds the envelopes around them.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from kira.agents.invoice.types import CarbonEntry, GreenIncentiveEntry, Invoice


class InvoiceExtractRequest(BaseModel):
    """Request body for POST /invoices/extract."""
    file: str = Field(
        ...,
        min_length=1,
        description="Invoice image or PDF as base64 or a base64 data URI",
        examples=["data:application/pdf;base64,JVBERi0xLjcK"]
    )
    mime_type: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("mimeType", "mime_type"),
        description="Media type; taken from the data URI or sniffed from the base64 header when omitted",
        examples=["application/pdf"]
    )


class ReceiptProcessRequest(BaseModel):
    """Request body for POST /receipts/process."""
    user_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("userId", "user_id"),
        description="ID of the user uploading the receipt"
    )
    image_bytes: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("imageBytes", "image_bytes"),
        description="Base64-encoded receipt image or PDF"
    )
    mime_type: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("mimeType", "mime_type"),
        description="Media type; sniffed from the base64 header when omitted"
    )


class ReceiptProcessResponse(BaseModel):
    """Extracted invoice plus its carbon and GITA projections."""
    invoice: Invoice
    carbon_entries: List[CarbonEntry] = Field(default_factory=list)
    gita_entries: List[GreenIncentiveEntry] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Body returned for any failed request."""
    error: str = Field(..., description="Error kind", examples=["extraction_failed"])
    message: str = Field(..., description="Sanitized error message")
