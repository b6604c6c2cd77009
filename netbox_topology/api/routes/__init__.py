"""API Routes."""

from .topology import router as topology_router

__all__ = [
    "topology_router",
]
