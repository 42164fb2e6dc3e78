"""
Consultant Tool Implementations

These are the backend tools the consultant agent can call during a chat.
Each tool performs one store read (or none) plus simple arithmetic and
returns a small structured value. Descriptions are the model's only routing
hint, so each one states when, and only when, the tool applies.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from kira.agents.consultant.registry import ToolDeclaration, ToolRegistry
from kira.agents.consultant.schemas import (
    INDUSTRY_BENCHMARK_PARAMETERS,
    SEARCH_CATALOG_PARAMETERS,
    SIMULATE_INVESTMENT_PARAMETERS,
    SIMULATE_TAX_IMPACT_PARAMETERS,
)
from kira.agents.consultant.types import (
    IndustryBenchmarkInput,
    IndustryBenchmarkOutput,
    SearchCatalogInput,
    SearchCatalogOutput,
    SimulateInvestmentInput,
    SimulateInvestmentOutput,
    SimulateTaxImpactInput,
    SimulateTaxImpactOutput,
    UserProfile,
)
from kira.db.store import DocumentStore, Filter
from kira.errors import IncompleteProfile, NotFound
from kira.utils.constants import (
    CATALOG_SEARCH_LIMIT,
    COLLECTIONS,
    CORPORATE_TAX_RATE,
    DEFAULT_INDUSTRY_INTENSITY,
    PAYBACK_NEVER_YEARS,
    UNIT_ENERGY_PRICE_RM_PER_KWH,
)

logger = logging.getLogger(__name__)


def get_user_profile(store: DocumentStore, user_id: str) -> Optional[UserProfile]:
    """
    Read the canonical user profile.

    Returns:
        UserProfile, or None when the user has no record (guest).

    Raises:
        IncompleteProfile: The record holds non-numeric or non-finite figures
    """
    data = store.get(COLLECTIONS['USERS'], user_id)
    if data is None:
        return None

    try:
        return UserProfile.model_validate(data)
    except ValidationError as e:
        logger.error(f"User record failed validation: {e.error_count()} errors")
        raise IncompleteProfile("User data invalid: profile figures must be finite numbers.") from e


def search_catalog(store: DocumentStore, tool_input: SearchCatalogInput) -> SearchCatalogOutput:
    """
    Find MyHIJAU catalog entries tagged with a keyword.

    The query is lower-cased and trimmed, then matched against each entry's
    ``keywords`` array. At most CATALOG_SEARCH_LIMIT entries are returned;
    no match is a valid, empty result.
    """
    term = tool_input.query.lower().strip()
    logger.info(f"[TOOL] Searching catalog for keyword: '{term}'")

    results = store.query(
        COLLECTIONS['CATALOG'],
        [Filter("keywords", "contains", term)],
        limit=CATALOG_SEARCH_LIMIT,
    )

    if not results:
        logger.info("   -> No catalog entries found")

    return SearchCatalogOutput(results=results[:CATALOG_SEARCH_LIMIT])


def simulate_tax_impact(store: DocumentStore, tool_input: SimulateTaxImpactInput) -> SimulateTaxImpactOutput:
    """
    Estimate carbon tax liability and how much GITA credit offsets it.

    gross = total_emissions x rate
    net = max(0, gross - tax_credit_balance)
    savings = gross - net

    A user without a record is treated as having no emissions and no credit.
    """
    logger.info(f"[TOOL] Simulating tax at RM{tool_input.proposed_tax_rate}/t")

    profile = get_user_profile(store, tool_input.user_id) or UserProfile()
    emissions = profile.total_emissions or 0.0
    credit = profile.tax_credit_balance or 0.0

    gross = emissions * tool_input.proposed_tax_rate
    net = max(0.0, gross - credit)

    return SimulateTaxImpactOutput(
        gross_liability=gross,
        net_liability=net,
        savings=gross - net,
    )


def simulate_investment(store: DocumentStore, tool_input: SimulateInvestmentInput) -> SimulateInvestmentOutput:
    """
    Compute ROI and payback period for a green asset.

    Annual savings value the energy the asset offsets at the TNB tariff, less
    maintenance. GITA-eligible assets also save corporate tax on their capex.
    When annual savings are not positive the asset never pays back and the
    payback period is PAYBACK_NEVER_YEARS.

    Raises:
        NotFound: The asset is not in the green_assets collection
    """
    logger.info(f"[TOOL] Simulating ROI for asset: {tool_input.asset_id}")

    asset = store.get(COLLECTIONS['GREEN_ASSETS'], tool_input.asset_id)
    if asset is None:
        raise NotFound(f"Asset '{tool_input.asset_id}' not found in ROI database.")

    capex = float(asset.get("capex_rm") or 0)
    offset_percent = float(asset.get("annual_energy_offset_percent") or 0)
    maintenance = float(asset.get("annual_maintenance_rm") or 0)
    lifetime_years = float(asset.get("lifetime_years") or 1)

    annual_energy_kwh = tool_input.monthly_energy_usage_kwh * 12
    energy_offset_kwh = annual_energy_kwh * offset_percent
    annual_savings = (energy_offset_kwh * UNIT_ENERGY_PRICE_RM_PER_KWH) - maintenance

    tax_savings = capex * CORPORATE_TAX_RATE if asset.get("gita_eligible") else 0.0
    effective_cost = capex - tax_savings

    if annual_savings > 0:
        payback_years = round(effective_cost / annual_savings, 2)
    else:
        payback_years = PAYBACK_NEVER_YEARS

    lifetime_savings = annual_savings * lifetime_years
    if effective_cost > 0:
        lifetime_roi = round(((lifetime_savings - effective_cost) / effective_cost) * 100, 1)
    else:
        lifetime_roi = 0.0

    return SimulateInvestmentOutput(
        payback_period_years=payback_years,
        annual_savings_rm=annual_savings,
        tax_savings_rm=tax_savings,
        lifetime_roi=lifetime_roi,
    )


def get_industry_benchmark(store: DocumentStore, tool_input: IndustryBenchmarkInput) -> IndustryBenchmarkOutput:
    """
    Compare the user's carbon intensity with their industry average.

    Intensity is kg CO2e per RM of revenue: total_emissions (tonnes) x 1000
    / annual_revenue.

    Raises:
        IncompleteProfile: No user record, no industry, or no positive revenue
    """
    logger.info("[TOOL] Benchmarking user against industry")

    profile = get_user_profile(store, tool_input.user_id)
    if profile is None or not profile.industry:
        raise IncompleteProfile("User data incomplete: industry is required for benchmarking.")
    if not profile.annual_revenue or profile.annual_revenue <= 0:
        raise IncompleteProfile("User data incomplete: annual revenue is required for benchmarking.")

    emissions = profile.total_emissions or 0.0
    user_intensity = (emissions * 1000) / profile.annual_revenue

    stats = store.get(COLLECTIONS['INDUSTRY_STATS'], profile.industry)
    if stats and stats.get("average_intensity") is not None:
        average_intensity = float(stats["average_intensity"])
    else:
        logger.warning(f"No industry stats for '{profile.industry}', using default average")
        average_intensity = DEFAULT_INDUSTRY_INTENSITY

    is_better = user_intensity < average_intensity
    performance = "Better (Lower Carbon)" if is_better else "Worse (Higher Carbon)"
    if average_intensity > 0:
        percent_diff = abs(user_intensity - average_intensity) / average_intensity * 100
    else:
        percent_diff = 0.0

    return IndustryBenchmarkOutput(
        user_intensity=user_intensity,
        industry_average=average_intensity,
        performance=f"{percent_diff:.0f}% {performance} than industry average.",
    )


# =============================================================================
# Tool Declarations
# =============================================================================

SEARCH_CATALOG_TOOL = ToolDeclaration(
    name="searchCatalog",
    description=(
        "Use this tool ONLY when the user asks for recommendations on green products, "
        "sustainable suppliers, alternatives to high-carbon items, or where to buy "
        "eco-friendly assets. Search by ONE keyword only."
    ),
    parameters=SEARCH_CATALOG_PARAMETERS,
    input_model=SearchCatalogInput,
    output_model=SearchCatalogOutput,
    handler=search_catalog,
)

SIMULATE_TAX_IMPACT_TOOL = ToolDeclaration(
    name="simulateTaxImpact",
    description=(
        "Use this tool ONLY when the user asks how much carbon tax they will have to pay, "
        "their tax liability, or mentions a specific carbon tax rate."
    ),
    parameters=SIMULATE_TAX_IMPACT_PARAMETERS,
    input_model=SimulateTaxImpactInput,
    output_model=SimulateTaxImpactOutput,
    handler=simulate_tax_impact,
)

SIMULATE_INVESTMENT_TOOL = ToolDeclaration(
    name="simulateInvestment",
    description=(
        "Use this tool ONLY when the user asks whether a specific green asset investment "
        "or purchase is worth it: calculates ROI, annual savings and payback period."
    ),
    parameters=SIMULATE_INVESTMENT_PARAMETERS,
    input_model=SimulateInvestmentInput,
    output_model=SimulateInvestmentOutput,
    handler=simulate_investment,
)

INDUSTRY_BENCHMARK_TOOL = ToolDeclaration(
    name="getIndustryBenchmark",
    description=(
        "Use this tool ONLY when the user asks how their carbon footprint or intensity "
        "compares to competitors or their industry average."
    ),
    parameters=INDUSTRY_BENCHMARK_PARAMETERS,
    input_model=IndustryBenchmarkInput,
    output_model=IndustryBenchmarkOutput,
    handler=get_industry_benchmark,
)


def build_tool_registry() -> ToolRegistry:
    """Build the registry of every consultant tool."""
    return ToolRegistry([
        SEARCH_CATALOG_TOOL,
        SIMULATE_TAX_IMPACT_TOOL,
        SIMULATE_INVESTMENT_TOOL,
        INDUSTRY_BENCHMARK_TOOL,
    ])
