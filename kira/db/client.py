"""
Supabase client factory.

The backend talks to Supabase with a server-side key. Requests carry the
caller's user id in the body, so every query that touches user data is
scoped explicitly by that id in the service/tool layer.
"""

import logging

from kira.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Create a Supabase client for the document store.

    Called once by the process entry point when the application context is
    built. The returned client is shared by every request.

    Returns:
        A Supabase client authenticated with SUPABASE_KEY.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY is not configured.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_KEY must be configured to use the document store."
        )

    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_KEY
    )

    logger.debug("Created Supabase client for document store")

    return client
