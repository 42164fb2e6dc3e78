"""
Invoice pipeline type definitions.

Pydantic models shared by the extraction and classification pipelines.
They double as the Gemini response schemas, so field descriptions are
written for the model as much as for readers. Non-finite numbers
(NaN/Infinity) are rejected on every model.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineItem(BaseModel):
    """Single line item from an invoice."""
    model_config = ConfigDict(allow_inf_nan=False, frozen=True)

    name: str = Field(..., description="The name of this line item (eg: petrol, solar panel, diesel, biodegradable container).")
    supplier: str = Field(..., description="The supplier of this item.")
    quantity: float = Field(..., description="The amount purchased for this item.")
    unit: str = Field(..., description="The unit (eg: single, kg, litres, kWh) purchased for this line item.")
    price: float = Field(..., description="The total price for this line item.")
    currency: str = Field("MYR", description="ISO currency code of the price.")
    is_green_eligible: bool = Field(..., description="Whether this item qualifies for GITA (Green Investment Tax Allowance).")
    purchase_date: str = Field(..., description="The date of this invoice issued in YYYY-MM-DD format.")


class Invoice(BaseModel):
    """An extracted invoice. Immutable once produced."""
    model_config = ConfigDict(allow_inf_nan=False, frozen=True)

    invoice_number: str = Field(..., description="The invoice number printed on the document.")
    supplier: str = Field(..., description="The supplier of this invoice.")
    purchase_date: str = Field(..., description="The date of this invoice issued in YYYY-MM-DD format.")
    total_amount: float = Field(..., description="The total amount payable on this invoice.")
    currency: str = Field("MYR", description="ISO currency code of the total amount.")
    items: Tuple[LineItem, ...] = Field(default=(), description="All line items on this invoice.")


class CarbonEntry(BaseModel):
    """GHG Protocol accounting entry derived from one line item."""
    model_config = ConfigDict(allow_inf_nan=False)

    scope: int = Field(..., description="Scope (1, 2 or 3) according to the Greenhouse Gas Protocol.")
    activity_data: float = Field(..., description="The activity data of this entry (eg: litres of fuel, kWh of electricity purchased).")
    emission_factor: Optional[float] = Field(None, description="Emission factor of the activity data. Scope 1 only.")
    grid_emission_factor: Optional[float] = Field(None, description="Grid Emission Factor (GEF) of the electricity grid. Scope 2 only.")
    global_warming_potential: Optional[float] = Field(None, description="Global Warming Potential (GWP) of the gas emitted. Scope 1 only.")
    co2e_emission: float = Field(..., description="CO2-equivalent emission of this entry, in kgCO2e.")

    @field_validator("scope")
    @classmethod
    def validate_scope(cls, value: int) -> int:
        if value not in (1, 2, 3):
            raise ValueError(f"scope must be 1, 2 or 3, got {value}")
        return value


class GreenIncentiveEntry(BaseModel):
    """GITA (Green Investment Tax Allowance) entry derived from an eligible line item."""
    model_config = ConfigDict(allow_inf_nan=False)

    tier: int = Field(..., description="GITA tier of the asset (1 or 2).")
    sector: str = Field(..., description="The sector (eg: energy efficiency, renewable energy system, waste, water).")
    technology: str = Field(..., description="The technology (eg: Transformer, Energy Efficient Appliances, Chiller).")
    asset: str = Field(..., description="The asset (eg: Transformer, Thermal Energy Storage/Collector, Variable Air Volume).")
    allowance_amount: float = Field(..., description="Tax allowance: asset cost x tier percentage (tier 1: 100%, tier 2: 60%).")
    currency: str = Field("MYR", description="ISO currency code of the allowance amount.")

    @field_validator("tier")
    @classmethod
    def validate_tier(cls, value: int) -> int:
        if value not in (1, 2):
            raise ValueError(f"tier must be 1 or 2, got {value}")
        return value


class CategorisationResult(BaseModel):
    """Carbon and GITA projections of an invoice's line items."""
    carbon_entries: List[CarbonEntry] = Field(default_factory=list)
    gita_entries: List[GreenIncentiveEntry] = Field(default_factory=list)
