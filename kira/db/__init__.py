"""
Database access layer for Kira backend.

Includes:
- Supabase client initialization
- The DocumentStore interface used by pipelines, the agent and its tools
- Demo data seeding
"""

from .client import get_supabase_client
from .store import DocumentStore, Filter, SupabaseDocumentStore

__all__ = ["get_supabase_client", "DocumentStore", "Filter", "SupabaseDocumentStore"]
