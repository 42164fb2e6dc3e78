"""
Consultant Agent Prompt Templates

Kira is an AI carbon consultant for Malaysian SMEs. The whole request fits in
one user prompt: profile summary, optional receipt context, the verbatim user
message and behavioural instructions. Tool declarations travel separately in
the request config.
"""

import json
from typing import Any, Dict, Optional

from kira.agents.consultant.types import UserProfile

GUEST_PROFILE = "Guest User"
NO_DOCUMENT_CONTEXT = "No specific receipt attached."
DOCUMENT_NOT_FOUND_WARNING = "[System] User selected a receipt, but ID was not found."


def format_user_profile(profile: Optional[UserProfile]) -> str:
    """Render a one-line profile summary, or the guest marker."""
    if profile is None:
        return GUEST_PROFILE

    revenue = f"RM{profile.annual_revenue:,.0f}" if profile.annual_revenue is not None else "Unknown"
    return (
        f"Industry: {profile.industry or 'Unknown'}, "
        f"Annual Revenue: {revenue}, "
        f"Total Emissions: {profile.total_emissions or 0}t."
    )


def format_document_context(document_id: str, document: Dict[str, Any]) -> str:
    """Render a compact receipt/invoice summary block."""
    line_items = document.get("line_items") or []
    return f"""=== SELECTED RECEIPT/INVOICE CONTEXT ===
Receipt ID: {document_id}
Vendor: {document.get("vendor") or "Unknown"}
Date: {document.get("date") or "N/A"}
Line Items: {json.dumps(line_items, default=str)}
========================================"""


def build_consultant_prompt(
    user_id: str,
    profile_summary: str,
    document_context: Optional[str],
    message: str,
    default_tax_rate: float = 30.0,
) -> str:
    """
    Build the single prompt for one consultant turn.

    Args:
        user_id: ID of the user being advised
        profile_summary: Output of format_user_profile
        document_context: Receipt block or warning string; None when no receipt was selected
        message: The user's message, passed verbatim
        default_tax_rate: Carbon tax rate (RM/t) to assume when the user gives none

    Returns:
        str: Prompt ready to be sent to Gemini with the tool declarations
    """
    if document_context:
        active_context = f"User has attached this specific receipt/invoice to the chat:\n{document_context}"
    else:
        active_context = NO_DOCUMENT_CONTEXT

    return f"""You are Kira, an AI Carbon Consultant helping Malaysian SMEs.

-- USER PROFILE --
User ID: {user_id}
{profile_summary}

-- ACTIVE CONTEXT --
{active_context}

-- USER MESSAGE --
"{message}"

-- INSTRUCTIONS --
1. Answer the user's message above.
2. If a receipt is attached and the user asks how to reduce its emissions, look at the 'Line Items' array. Extract keywords (like 'electricity', 'fuel', 'packaging') and use the searchCatalog tool to find green alternatives.
3. For carbon tax questions use simulateTaxImpact; if the user gives no rate, assume RM{default_tax_rate:g} per tonne.
4. For "is this investment worth it" questions use simulateInvestment; for comparisons with competitors use getIndustryBenchmark.
5. Be conversational, professional, and helpful. Use RM for currency (e.g. RM1,250.00)."""
