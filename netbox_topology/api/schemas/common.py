"""Общие schemas для API."""

from typing import Optional, Dict, Any
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Ответ health check."""

    status: str = "ok"
    version: str
    uptime: float


class ErrorResponse(BaseModel):
    """Ответ с ошибкой."""

    success: bool = False
    error: str
    detail: Optional[str] = None
    context: Dict[str, Any] = {}
