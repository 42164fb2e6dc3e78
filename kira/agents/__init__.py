"""
AI Components for Kira backend.

Contains implementations of AI-powered workflows:

1. Invoice Pipeline (Schema-Constrained Gemini Calls)
   - Extracts invoices from images/PDFs with Gemini vision
   - Classifies each line item into a GHG Protocol carbon entry and,
     when eligible, a GITA tax-incentive entry

2. Consultant Agent "Kira" (Gemini Function Calling)
   - Answers chat messages with the user's profile and selected receipt
   - Lets the model call store-backed tools (catalog, tax, ROI, benchmark)

Neither workflow keeps state between calls or persists its output.
"""

from kira.agents.consultant import run_consultant_agent
from kira.agents.invoice import categorise_items, extract_invoice

__all__ = [
    "run_consultant_agent",
    "extract_invoice",
    "categorise_items",
]
