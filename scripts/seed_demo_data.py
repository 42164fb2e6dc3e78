#!/usr/bin/env python3
"""
Demo Data Seeding Script

Inserts the demo user, MyHIJAU catalog entries, green assets, industry
statistics and a sample receipt into the Supabase project configured in
.env (SUPABASE_URL / SUPABASE_KEY).

Usage:
    python scripts/seed_demo_data.py
"""

import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kira.db import SupabaseDocumentStore, get_supabase_client
from kira.db.seed import seed_demo_data


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main() -> int:
    store = SupabaseDocumentStore(get_supabase_client())
    written = seed_demo_data(store)
    logger.info(f"Done: {written} documents written")
    return 0


if __name__ == "__main__":
    sys.exit(main())
