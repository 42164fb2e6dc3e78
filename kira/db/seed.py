"""
Demo data for local development.

Writes a demo user, MyHIJAU catalog entries, green assets used by the ROI
simulator, industry statistics and a sample receipt. Writes are independent
upserts; a failure part-way leaves earlier records in place.
"""

import logging
from typing import Any, Dict, List, Tuple

from kira.db.store import DocumentStore
from kira.utils.constants import COLLECTIONS

logger = logging.getLogger(__name__)

DEMO_USER_ID = "user123"

DEMO_USER: Dict[str, Any] = {
    "industry": "Manufacturing",
    "annual_revenue": 5000000,
    "last_month_emissions": 120,
    "total_emissions": 1440,
    "tax_credit_balance": 50000,
}

DEMO_CATALOG: List[Tuple[str, Dict[str, Any]]] = [
    ("solar-panel-pv-200", {
        "name": "Solar Panel PV-200",
        "supplier": "SolarX Sdn Bhd",
        "keywords": ["solar", "panel", "energy", "renewable", "solar panel", "solar panels"],
        "expiry_date": "2027-12-31",
    }),
    ("high-efficiency-chiller", {
        "name": "High Efficiency Chiller",
        "supplier": "CoolTech MY",
        "keywords": ["chiller", "cooling", "hvac"],
        "expiry_date": "2026-06-30",
    }),
    ("led-highbay-150w", {
        "name": "LED High Bay 150W",
        "supplier": "Lumina Green Sdn Bhd",
        "keywords": ["led", "lighting", "electricity", "energy"],
        "expiry_date": "2027-03-31",
    }),
]

DEMO_GREEN_ASSETS: List[Tuple[str, Dict[str, Any]]] = [
    ("solar_rooftop_10kwp", {
        "name": "Rooftop Solar PV 10kWp",
        "capex_rm": 45000,
        "annual_energy_offset_percent": 0.25,
        "annual_maintenance_rm": 500,
        "lifetime_years": 25,
        "gita_eligible": True,
    }),
    ("led_retrofit_warehouse", {
        "name": "Warehouse LED Retrofit",
        "capex_rm": 12000,
        "annual_energy_offset_percent": 0.10,
        "annual_maintenance_rm": 200,
        "lifetime_years": 10,
        "gita_eligible": False,
    }),
]

DEMO_INDUSTRY_STATS: List[Tuple[str, Dict[str, Any]]] = [
    ("Manufacturing", {"average_intensity": 0.35}),
    ("Retail", {"average_intensity": 0.12}),
]

DEMO_RECEIPT_ID = "receipt_abc"

DEMO_RECEIPT: Dict[str, Any] = {
    "user_id": DEMO_USER_ID,
    "vendor": "Tenaga Nasional Berhad",
    "date": "2026-01-31",
    "line_items": [
        {"name": "Electricity usage", "quantity": 12000, "unit": "kWh", "price": 6240.0},
        {"name": "Diesel for generator", "quantity": 300, "unit": "litres", "price": 645.0},
    ],
}


def seed_demo_data(store: DocumentStore) -> int:
    """
    Seed every demo record into the store.

    Returns:
        Number of documents written.
    """
    logger.info("Seeding demo data...")
    written = 0

    store.set(COLLECTIONS['USERS'], DEMO_USER_ID, DEMO_USER)
    written += 1
    logger.info(f"User '{DEMO_USER_ID}' created")

    for doc_id, entry in DEMO_CATALOG:
        store.set(COLLECTIONS['CATALOG'], doc_id, entry)
        written += 1

    for doc_id, asset in DEMO_GREEN_ASSETS:
        store.set(COLLECTIONS['GREEN_ASSETS'], doc_id, asset)
        written += 1

    for industry, stats in DEMO_INDUSTRY_STATS:
        store.set(COLLECTIONS['INDUSTRY_STATS'], industry, stats)
        written += 1

    store.set(COLLECTIONS['RECEIPTS'], DEMO_RECEIPT_ID, DEMO_RECEIPT)
    written += 1

    logger.info(f"Seeded {written} documents")
    return written
