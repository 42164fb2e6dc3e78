"""
Invoice pipeline API endpoints.

Flow:
1. POST /receipts/process - Upload receipt bytes, get invoice + carbon/GITA entries
2. POST /invoices/extract - Extract an invoice from an uploaded document
3. POST /invoices/categorise - Classify an already extracted invoice
4. POST /invoices/carbon-entry, /invoices/gita-entry - Convert a single line item

Documents arrive as base64 or data URIs only; the server never opens a
client-supplied path or fetches a client-supplied URL. Nothing here is
persisted; callers store the results they keep.
"""

import base64
import binascii
import logging
from typing import Annotated, Optional, Tuple

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from kira.agents.invoice import (
    categorise_items,
    convert_to_carbon_entry,
    convert_to_gita_entry,
    extract_invoice_from_bytes,
)
from kira.agents.invoice.types import (
    CarbonEntry,
    CategorisationResult,
    GreenIncentiveEntry,
    Invoice,
    LineItem,
)
from kira.context import AppContext
from kira.dependencies import get_app_context
from kira.errors import InvalidInput
from kira.llm.media import decode_data_uri, sniff_base64_mime_type
from kira.schemas.invoices import (
    ErrorResponse,
    InvoiceExtractRequest,
    ReceiptProcessRequest,
    ReceiptProcessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["invoices"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    500: {"model": ErrorResponse, "description": "Extraction, categorisation or model failure"},
}


def decode_document(payload: str, mime_type: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Decode an uploaded document given as a data URI or bare base64.

    Returns:
        (raw bytes, media type); an explicit mime_type wins over the data URI
        header or the sniffed base64 signature.

    Raises:
        InvalidInput: The payload is neither valid base64 nor a base64 data URI
    """
    if payload.startswith("data:"):
        try:
            uri_mime_type, data = decode_data_uri(payload)
        except ValueError as e:
            raise InvalidInput(f"Invalid data URI: {e}") from e
        resolved = mime_type or uri_mime_type
    else:
        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error:
            raise InvalidInput("Document must be base64-encoded or a base64 data URI") from None
        resolved = mime_type or sniff_base64_mime_type(payload)

    if not data:
        raise InvalidInput("Document is empty")
    return data, resolved


@router.post(
    "/receipts/process",
    response_model=ReceiptProcessResponse,
    status_code=status.HTTP_200_OK,
    summary="Extract and categorise a receipt image",
    responses=ERROR_RESPONSES,
    description="""
    Process an uploaded receipt/invoice.

    **Body:** `{userId, imageBytes, mimeType?}` where imageBytes is base64.

    Runs extraction followed by categorisation and returns the invoice with
    one carbon entry per line item and one GITA entry per eligible item.
    """
)
async def process_receipt(
    request: ReceiptProcessRequest,
    context: Annotated[AppContext, Depends(get_app_context)],
) -> ReceiptProcessResponse:
    logger.info("POST /receipts/process called")

    data, mime_type = decode_document(request.image_bytes, request.mime_type)

    invoice = await run_in_threadpool(extract_invoice_from_bytes, context, data, mime_type)
    result = await categorise_items(context, invoice)

    return ReceiptProcessResponse(
        invoice=invoice,
        carbon_entries=result.carbon_entries,
        gita_entries=result.gita_entries,
    )


@router.post(
    "/invoices/extract",
    response_model=Invoice,
    status_code=status.HTTP_200_OK,
    summary="Extract an invoice from an uploaded document",
    responses=ERROR_RESPONSES,
)
async def extract(
    request: InvoiceExtractRequest,
    context: Annotated[AppContext, Depends(get_app_context)],
) -> Invoice:
    """Extract line items, totals and GITA eligibility flags from an invoice image or PDF."""
    logger.info("POST /invoices/extract called")

    data, mime_type = decode_document(request.file, request.mime_type)
    return await run_in_threadpool(extract_invoice_from_bytes, context, data, mime_type)


@router.post(
    "/invoices/categorise",
    response_model=CategorisationResult,
    status_code=status.HTTP_200_OK,
    summary="Categorise invoice line items",
    responses=ERROR_RESPONSES,
)
async def categorise(
    invoice: Invoice,
    context: Annotated[AppContext, Depends(get_app_context)],
) -> CategorisationResult:
    """Derive carbon entries for every item and GITA entries for eligible items."""
    logger.info(f"POST /invoices/categorise called with {len(invoice.items)} items")
    return await categorise_items(context, invoice)


@router.post(
    "/invoices/carbon-entry",
    response_model=CarbonEntry,
    status_code=status.HTTP_200_OK,
    summary="Convert a line item into a carbon entry",
    responses=ERROR_RESPONSES,
)
async def carbon_entry(
    item: LineItem,
    context: Annotated[AppContext, Depends(get_app_context)],
) -> CarbonEntry:
    return await run_in_threadpool(convert_to_carbon_entry, context, item)


@router.post(
    "/invoices/gita-entry",
    response_model=GreenIncentiveEntry,
    status_code=status.HTTP_200_OK,
    summary="Convert an eligible line item into a GITA entry",
    responses=ERROR_RESPONSES,
)
async def gita_entry(
    item: LineItem,
    context: Annotated[AppContext, Depends(get_app_context)],
) -> GreenIncentiveEntry:
    return await run_in_threadpool(convert_to_gita_entry, context, item)
