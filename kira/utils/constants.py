"""
Fixed figures used by the consultant tools and the classification prompts.

Monetary values are in Malaysian Ringgit (RM).
"""

# Average commercial electricity tariff (TNB) used to value energy offsets
UNIT_ENERGY_PRICE_RM_PER_KWH = 0.50

# Malaysian corporate income tax rate applied to GITA-eligible capex
CORPORATE_TAX_RATE = 0.24

# Monthly energy usage assumed when the user gives none
DEFAULT_MONTHLY_ENERGY_USAGE_KWH = 5000.0

# Sentinel payback period meaning "never pays back"
PAYBACK_NEVER_YEARS = 99.0

# Industry carbon intensity (kg CO2e per RM revenue) used when no stat is stored
DEFAULT_INDUSTRY_INTENSITY = 0.0002

# Upper bound on catalog search results returned to the model
CATALOG_SEARCH_LIMIT = 5

# Grid emission factors (tCO2e/MWh) for Malaysian electricity grids
GRID_EMISSION_FACTORS = {
    'Peninsular Malaysia (Tenaga Nasional Bhd, TNB)': 0.774,
    'Kulim Hi-Tech Park (N.U.R Power Sdn. Bhd.)': 0.540,
    'Sabah (Sabah Electricity Sdn. Bhd., SESB)': 0.525,
    'Sarawak (Sarawak Energy Bhd)': 0.199,
}

# GITA allowance as a fraction of qualifying asset cost, by tier
GITA_TIER_ALLOWANCE_RATES = {
    1: 1.00,
    2: 0.60,
}

# Document store collections (Supabase table names)
COLLECTIONS = {
    'USERS': 'users',
    'CATALOG': 'catalog',
    'INDUSTRY_STATS': 'industry_stats',
    'GREEN_ASSETS': 'green_assets',
    'INVOICES': 'invoices',
    'RECEIPTS': 'receipts',
}
