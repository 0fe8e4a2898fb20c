"""Celebrity Penpal - API Routers"""
from .auth import router as auth_router
from .celebrities import router as celebrities_router
from .letters import router as letters_router
from .penpals import router as penpals_router
from .forum import router as forum_router

__all__ = [
    "auth_router",
    "celebrities_router",
    "letters_router",
    "penpals_router",
    "forum_router",
]
