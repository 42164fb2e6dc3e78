#!/usr/bin/env python3
"""
Kira Chat Test Script

Sends one message to the consultant agent against the configured Supabase
project and Gemini API, without starting the HTTP server. Seed demo data
first (scripts/seed_demo_data.py) to exercise the tools.

Usage:
    python scripts/chat_with_kira.py --message "Hello, who are you?"
    python scripts/chat_with_kira.py --message "I need to buy a solar panel."
    python scripts/chat_with_kira.py --message "If the carbon tax is RM 35 per tonne, how much will I pay?"
    python scripts/chat_with_kira.py --message "How can I reduce the carbon from this bill?" --receipt receipt_abc
"""

import argparse
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kira.agents.consultant import run_consultant_agent
from kira.context import create_app_context
from kira.db.seed import DEMO_USER_ID
from kira.errors import KiraError


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send one message to Kira")
    parser.add_argument("--message", "-m", required=True, help="Message to send")
    parser.add_argument("--user", "-u", default=DEMO_USER_ID, help="User ID (default: demo user)")
    parser.add_argument("--receipt", "-r", default=None, help="Optional receipt ID to attach")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    context = create_app_context()

    try:
        reply = run_consultant_agent(context, args.user, args.message, args.receipt)
    except KiraError as e:
        logger.error(f"Chat failed ({e.code}): {e}")
        return 1
    finally:
        context.close()

    print()
    print("=" * 60)
    print(reply)
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
