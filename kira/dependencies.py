"""
FastAPI dependency functions.
"""

from fastapi import Request

from kira.context import AppContext


def get_app_context(request: Request) -> AppContext:
    """
    Return the application context built at startup.

    Tests override this dependency to inject stub collaborators.
    """
    return request.app.state.context
