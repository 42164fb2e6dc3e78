"""
Consultant tool input/output models.

Input models validate the arguments the model passes to a tool; output
models define what is sent back to the model as the function response.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from kira.utils.constants import DEFAULT_MONTHLY_ENERGY_USAGE_KWH


class UserProfile(BaseModel):
    """Canonical user record (users/{user_id}). Read-only to the backend."""
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    industry: Optional[str] = None
    annual_revenue: Optional[float] = None
    total_emissions: Optional[float] = None  # tonnes CO2e per year
    tax_credit_balance: Optional[float] = None  # RM


# --- searchCatalog ---

class SearchCatalogInput(BaseModel):
    query: str = Field(..., min_length=1)


class SearchCatalogOutput(BaseModel):
    results: List[Dict[str, Any]] = Field(default_factory=list)


# --- simulateTaxImpact ---

class SimulateTaxImpactInput(BaseModel):
    user_id: str
    proposed_tax_rate: float = Field(30.0, ge=0, allow_inf_nan=False)


class SimulateTaxImpactOutput(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    gross_liability: float
    net_liability: float
    savings: float


# --- simulateInvestment ---

class SimulateInvestmentInput(BaseModel):
    asset_id: str
    monthly_energy_usage_kwh: float = Field(
        DEFAULT_MONTHLY_ENERGY_USAGE_KWH, ge=0, allow_inf_nan=False
    )


class SimulateInvestmentOutput(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    payback_period_years: float
    annual_savings_rm: float
    tax_savings_rm: float
    lifetime_roi: float


# --- getIndustryBenchmark ---

class IndustryBenchmarkInput(BaseModel):
    user_id: str


class IndustryBenchmarkOutput(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    user_intensity: float
    industry_average: float
    performance: str
