"""
Pydantic request/response schemas for the HTTP surface.
"""

from .chat import ChatRequest, ChatResponse
from .health import HealthResponse
from .invoices import (
    ErrorResponse,
    InvoiceExtractRequest,
    ReceiptProcessRequest,
    ReceiptProcessResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "HealthResponse",
    "ErrorResponse",
    "InvoiceExtractRequest",
    "ReceiptProcessRequest",
    "ReceiptProcessResponse",
]
