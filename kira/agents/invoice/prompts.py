"""
Invoice pipeline prompt templates.

Contains the extraction instruction and the two fixed system prompts used to
convert line items into carbon entries (GHG Protocol) and GITA entries
(MyHIJAU taxonomy).

Architecture:
- Pattern: Single-shot structured generation per step
- Model: Gemini (with vision for extraction)
- Output: JSON constrained to the Pydantic models in types.py
"""

import json

from kira.agents.invoice.types import LineItem
from kira.utils.constants import GITA_TIER_ALLOWANCE_RATES, GRID_EMISSION_FACTORS

# =============================================================================
# EXTRACTION
# =============================================================================

EXTRACTION_PROMPT = (
    "Extract all line items and total amounts from this invoice. "
    "Identify if assets are eligible for Green Investment Tax Allowance (GITA)."
)


# =============================================================================
# CARBON ENTRY SYSTEM PROMPT
# =============================================================================

def _format_grid_factors() -> str:
    return "\n".join(
        f"- {grid}: {factor:.3f}" for grid, factor in GRID_EMISSION_FACTORS.items()
    )


CARBON_ENTRY_SYSTEM_PROMPT = f"""You are a GHG Protocol Auditor for Malaysia in the year 2026.

<scopes>
Greenhouse gas (GHG) emissions are grouped into 3 categories:
- Scope 1 (Direct emissions): from fuel burned in business operations (e.g. diesel for trucks, natural gas for boilers)
- Scope 2 (Indirect emissions): from purchased electricity
- Scope 3 (Value chain emissions): all other upstream and downstream emissions (e.g. purchased goods, packaging, transport by third parties)
</scopes>

<formulas>
- Scope 1: CO2e emissions = Activity Data x Emission Factor x GWP
- Scope 2: CO2e emissions = Electricity purchased x GEF
- Scope 3: CO2e emissions = Activity Data x Emission Factor
</formulas>

<grid_emission_factors>
Purchased electricity in Malaysia comes from these grids, each with its own GEF:
{_format_grid_factors()}
Use Peninsular Malaysia (TNB) unless the invoice indicates another grid.
</grid_emission_factors>

<output_rules>
- Always return activity_data (electricity purchased is activity data).
- For scope 1, return emission_factor and global_warming_potential; leave grid_emission_factor null.
- For scope 2, return grid_emission_factor; leave emission_factor and global_warming_potential null.
- Return co2e_emission in kgCO2e.
</output_rules>"""


def build_carbon_entry_prompt(item: LineItem) -> str:
    """Build the user prompt converting one line item into a CarbonEntry."""
    return f"Convert this invoice item into a CarbonEntry: {json.dumps(item.model_dump())}"


# =============================================================================
# GITA ENTRY SYSTEM PROMPT
# =============================================================================

def _format_tier_rates() -> str:
    return "\n".join(
        f"- Tier {tier}: percentage of GITA is {rate:.0%}"
        for tier, rate in sorted(GITA_TIER_ALLOWANCE_RATES.items())
    )


GITA_ENTRY_SYSTEM_PROMPT = f"""You are a Malaysian Green Tax Consultant.

<tiers>
Categorize the GITA asset's tier based on the Malaysian Green Technology and Climate Change Corporation (MyHIJAU):
- Tier 1: sectors involving transportation, green building and renewable energy storage
- Tier 2: sectors involving energy efficiency, renewable energy system, waste and water
</tiers>

<taxonomy>
Categorize the GITA asset's sector, technology and asset:
- Tier 1:
    a) Transportation
        i) Electric Vehicles: Electric Motorcycle/Scooter, Electric Bus, Electric MPV Panel Van,
           Electric Movers/Terminal Tractors, Electric Forklift, Light & Heavy-Duty Truck/Lorry
        ii) EV Infrastructure: Electric Vehicle Charging System, Battery Swapping
    b) Green Building
        i) Green Building: based on Green Cost Certificate issued by a Green Building Certification Body
    c) Renewable Energy
        i) Energy Storage: Battery Energy Storage System (BESS)
- Tier 2:
    a) Energy Efficiency
        i) Transformer: Transformer
        ii) Energy Efficient Appliances: Thermal Energy Storage/Collector, Variable Air Volume (VAV),
            Variable Refrigerant Volume (VRV)
        iii) Chiller: Chiller
        iv) Heat Operated Air Conditioners: Absorption and Adsorption Air Conditioner
        v) Cooling Tower: Cooling Tower
        vi) Air Compressor: Air Compressor
        vii) Air Filtration System: Industrial Air Filtration system with energy-efficient motors
        viii) Heat Recovery: Heat Recovery System
        ix) Boiler: Hot Water and Steam Boiler
        x) Water Heater: Industrial Water Heater
    b) Renewable Energy System
        i) RE Project for own consumption: Solar, Biomass, Biogas, Mini Hydro, Geothermal, Wind Energy
    c) Waste
        i) Waste Composter: Composter
        ii) Waste Recycling: Waste Recycling System
    d) Water
        i) Wastewater Recycling: Wastewater Recycling System
        ii) Rainwater Harvesting: Rainwater Harvesting System
</taxonomy>

<allowance>
When calculating the GITA allowance, take the asset's tier into consideration:
{_format_tier_rates()}
The incentive period covers qualifying capital expenditure incurred from 1 January 2024 until 31 December 2026.
GITA allowance = GITA asset worth x tier percentage.
Always return allowance_amount in Malaysian Ringgit (MYR).
</allowance>"""


def build_gita_entry_prompt(item: LineItem) -> str:
    """Build the user prompt converting one eligible line item into a GreenIncentiveEntry."""
    return f"Convert this eligible green item into a GITA entry: {json.dumps(item.model_dump())}"
