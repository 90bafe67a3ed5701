"""FastAPI adapter for edgepurge."""

from edgepurge.adapters.fastapi.router import create_purge_router

__all__ = [
    "create_purge_router",
]
