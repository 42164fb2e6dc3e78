"""
Application context.

Holds the collaborators every pipeline and agent call needs: the document
store, the model client and the consultant tool registry. The process entry
point builds it once (``create_app_context``) and closes it on shutdown
(``AppContext.close``); request handlers receive it explicitly.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from kira.config import Settings, settings as default_settings
from kira.db.client import get_supabase_client
from kira.db.store import DocumentStore, SupabaseDocumentStore
from kira.llm.client import GeminiModelClient

if TYPE_CHECKING:
    from kira.agents.consultant.registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Per-process collaborators shared by all requests."""
    store: DocumentStore
    model: GeminiModelClient
    tools: "ToolRegistry"
    settings: Settings = field(default_factory=lambda: default_settings)

    def close(self) -> None:
        """Release the model client. The Supabase client needs no teardown."""
        logger.info("Closing application context")
        self.model.close()


def create_app_context(app_settings: Optional[Settings] = None) -> AppContext:
    """
    Build the application context from settings.

    Raises:
        ValueError: If Supabase or Gemini credentials are missing.
    """
    from kira.agents.consultant.tools import build_tool_registry

    app_settings = app_settings or default_settings

    store = SupabaseDocumentStore(get_supabase_client())
    model = GeminiModelClient.from_api_key(
        app_settings.GOOGLE_API_KEY,
        model=app_settings.GEMINI_MODEL,
        max_tool_rounds=app_settings.MAX_TOOL_ROUNDS,
    )
    tools = build_tool_registry()

    logger.info(
        f"Application context created: model={app_settings.GEMINI_MODEL}, "
        f"tools={', '.join(tools.names())}"
    )
    return AppContext(store=store, model=model, tools=tools, settings=app_settings)
