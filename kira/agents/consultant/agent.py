"""
Consultant Agent Runner

Kira chat workflow: one Gemini request with the consultant tools attached.
The model may call tools any number of times (up to MAX_TOOL_ROUNDS rounds)
before answering in text; that answer is returned verbatim.

Stateless: no conversation history is kept between calls.
"""

import logging
from typing import Any, Dict, Optional

from kira.agents.consultant.prompts import (
    DOCUMENT_NOT_FOUND_WARNING,
    build_consultant_prompt,
    format_document_context,
    format_user_profile,
)
from kira.agents.consultant.tools import get_user_profile
from kira.context import AppContext
from kira.utils.constants import COLLECTIONS

logger = logging.getLogger(__name__)


def get_document_context(context: AppContext, user_id: str, document_id: Optional[str]) -> Optional[str]:
    """
    Render the selected receipt as a prompt block.

    Returns:
        None when no receipt was selected; the receipt block when found; an
        inline warning string when the receipt does not exist, has no owner
        or belongs to another user.
    """
    if not document_id:
        return None

    document = context.store.get(COLLECTIONS['RECEIPTS'], document_id)
    owner = document.get("user_id") if document else None

    if document is None or owner != user_id:
        logger.warning("Selected receipt not found, continuing without it")
        return DOCUMENT_NOT_FOUND_WARNING

    return format_document_context(document_id, document)


def run_consultant_agent(
    context: AppContext,
    user_id: str,
    message: str,
    document_id: Optional[str] = None,
) -> str:
    """
    Answer one chat message as Kira.

    Args:
        context: Application context
        user_id: ID of the user being advised (absent record => guest)
        message: The user's message
        document_id: Optional receipt selected in the chat

    Returns:
        The model's final text answer

    Raises:
        GenerationFailed: The model call failed or produced no text
        NotFound / IncompleteProfile: Raised by a tool the model called

    Notes:
        - Tool arguments named user_id are overwritten with the caller's
          user_id; the model never chooses whose data a tool reads.
    """
    logger.info("--- [Kira] Processing chat request ---")

    profile = get_user_profile(context.store, user_id)
    document_context = get_document_context(context, user_id, document_id)

    prompt = build_consultant_prompt(
        user_id=user_id,
        profile_summary=format_user_profile(profile),
        document_context=document_context,
        message=message,
        default_tax_rate=context.settings.DEFAULT_CARBON_TAX_RATE,
    )

    def call_tool(name: str, args: Dict[str, Any]) -> Dict[str, Any]:
        tool = context.tools.get(name)
        if "user_id" in tool.input_model.model_fields:
            args = {**args, "user_id": user_id}
        return context.tools.invoke(context.store, name, args)

    reply = context.model.generate(
        prompt,
        tools=context.tools.function_declarations(),
        call_tool=call_tool,
        temperature=0.3,
    )

    logger.info(f"[Kira] Reply generated ({len(reply)} chars)")
    return reply
