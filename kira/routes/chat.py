"""
Chat endpoint for the Kira consultant agent.

Endpoints:
- POST /chat: Answer one message, optionally about a selected receipt
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from kira.agents.consultant import run_consultant_agent
from kira.context import AppContext
from kira.dependencies import get_app_context
from kira.schemas.chat import ChatRequest, ChatResponse
from kira.schemas.invoices import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    status_code=status.HTTP_200_OK,
    summary="Chat with Kira",
    responses={
        400: {"model": ErrorResponse, "description": "Missing userId or message"},
        404: {"model": ErrorResponse, "description": "An asset referenced by a tool was not found"},
        500: {"model": ErrorResponse, "description": "Model or tool failure"},
    },
    description="""
    Ask Kira, the AI carbon consultant, a question.

    **Body:** `{userId, message, receiptId?}`

    The agent reads the user's profile and the selected receipt (if any),
    then lets Gemini call the consultant tools (catalog search, tax
    simulation, ROI simulation, industry benchmark) before answering.

    No conversation history is kept; send context with every message.
    """
)
async def chat(
    request: ChatRequest,
    context: Annotated[AppContext, Depends(get_app_context)],
) -> ChatResponse:
    logger.info("POST /chat called")

    reply = await run_in_threadpool(
        run_consultant_agent,
        context,
        request.user_id,
        request.message,
        request.document_id,
    )

    return ChatResponse(reply=reply)
