"""API module with all routers."""

from api import chart_router

__all__ = [
    "chart_router",
]
