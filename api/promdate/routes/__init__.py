from fastapi import APIRouter, FastAPI

from .chat import router as chat_router
from .discovery import router as discovery_router
from .invites import router as invites_router
from .profile import router as profile_router
from .safety import router as safety_router


def include_modular_routers(app: FastAPI) -> None:
    app.include_router(profile_router, tags=["profile"])
    app.include_router(discovery_router, tags=["discovery"])
    app.include_router(invites_router, tags=["invites"])
    app.include_router(chat_router, tags=["matches"])
    app.include_router(safety_router, tags=["safety"])


__all__ = ["include_modular_routers", "APIRouter"]
