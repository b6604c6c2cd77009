"""
NetBox Topology Web API.

FastAPI backend для слоя визуализации.
"""

from .. import __version__

__all__ = ["__version__"]
