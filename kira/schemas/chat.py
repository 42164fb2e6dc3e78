"""
Pydantic schemas for the chat endpoint.

Clients send camelCase keys (userId, receiptId); snake_case names are
accepted as well.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class ChatRequest(BaseModel):
    """Request body for POST /chat."""
    user_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("userId", "user_id"),
        description="ID of the user chatting with Kira",
        examples=["user123"]
    )
    message: str = Field(
        ...,
        min_length=1,
        max_length=4000,
        description="The user's message, passed verbatim to the model",
        examples=["If the carbon tax is RM 35 per tonne, how much will I pay?"]
    )
    document_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("receiptId", "documentId", "document_id"),
        description="Optional receipt/invoice selected in the chat",
        examples=["receipt_abc"]
    )


class ChatResponse(BaseModel):
    """Response body for POST /chat."""
    reply: str = Field(..., description="Kira's final answer")
