"""
Consultant tool parameter schemas.

JSON schemas sent to Gemini as function-declaration parameters. They mirror
the input models in types.py exactly; descriptions tell the model how to
fill each argument.
"""

SEARCH_CATALOG_PARAMETERS = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "A single keyword to search (e.g., 'solar', 'led', 'chiller')"
        }
    },
    "required": ["query"]
}

SIMULATE_TAX_IMPACT_PARAMETERS = {
    "type": "object",
    "properties": {
        "user_id": {
            "type": "string",
            "description": "ID of the user being advised (provided by backend)"
        },
        "proposed_tax_rate": {
            "type": "number",
            "description": "Carbon tax rate in RM per tonne CO2e. Default to 30 if not specified."
        }
    },
    "required": ["user_id", "proposed_tax_rate"]
}

SIMULATE_INVESTMENT_PARAMETERS = {
    "type": "object",
    "properties": {
        "asset_id": {
            "type": "string",
            "description": "The ID of the green asset (e.g. 'solar_rooftop_10kwp')"
        },
        "monthly_energy_usage_kwh": {
            "type": "number",
            "description": "Estimated monthly energy usage in kWh. Default 5000."
        }
    },
    "required": ["asset_id"]
}

INDUSTRY_BENCHMARK_PARAMETERS = {
    "type": "object",
    "properties": {
        "user_id": {
            "type": "string",
            "description": "ID of the user being advised (provided by backend)"
        }
    },
    "required": ["user_id"]
}
