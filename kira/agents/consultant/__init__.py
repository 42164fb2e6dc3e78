"""
Consultant Agent Package ("Kira")

Tool-augmented chat agent for Malaysian SMEs. Gemini is given the user's
profile, an optional receipt and four declared tools backed by the document
store:

- searchCatalog: green product/supplier lookup (MyHIJAU catalog)
- simulateTaxImpact: carbon tax liability vs GITA credit
- simulateInvestment: ROI and payback of a green asset
- getIndustryBenchmark: carbon intensity vs industry average

Main Components:
- registry: ToolDeclaration / ToolRegistry
- types: tool input/output models and the canonical UserProfile
- schemas: JSON parameter schemas sent to Gemini
- tools: tool implementations and build_tool_registry()
- prompts: prompt builder
- agent: run_consultant_agent()
"""

from kira.agents.consultant.agent import get_document_context, run_consultant_agent
from kira.agents.consultant.registry import ToolDeclaration, ToolRegistry
from kira.agents.consultant.tools import (
    build_tool_registry,
    get_industry_benchmark,
    get_user_profile,
    search_catalog,
    simulate_investment,
    simulate_tax_impact,
)
from kira.agents.consultant.types import UserProfile

__all__ = [
    # Main runner
    "run_consultant_agent",
    "get_document_context",
    # Registry
    "ToolDeclaration",
    "ToolRegistry",
    "build_tool_registry",
    # Tools
    "search_catalog",
    "simulate_tax_impact",
    "simulate_investment",
    "get_industry_benchmark",
    "get_user_profile",
    # Types
    "UserProfile",
]
