"""
API Routers package.

Each module contains a FastAPI router for a specific domain.
"""

from .menu import router as menu_router

__all__ = [
    "menu_router",
]
