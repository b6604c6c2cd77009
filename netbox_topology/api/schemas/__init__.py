"""Pydantic schemas для API."""

from .common import HealthResponse, ErrorResponse
from .topology import (
    TopologyOptions,
    AdaptRequest,
    NetBoxImportRequest,
    TopologyResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "TopologyOptions",
    "AdaptRequest",
    "NetBoxImportRequest",
    "TopologyResponse",
]
