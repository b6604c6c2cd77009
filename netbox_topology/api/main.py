"""
NetBox Topology Web API.

FastAPI backend для слоя визуализации топологии.

Запуск:
    uvicorn netbox_topology.api.main:app --reload --host 0.0.0.0 --port 8080

Документация:
    http://localhost:8080/docs (Swagger UI)
    http://localhost:8080/redoc (ReDoc)
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from ..core.exceptions import (
    AdapterError,
    ConfigError,
    NetBoxError,
    TopologyError,
    format_error_for_log,
)
from .schemas import HealthResponse, ErrorResponse
from .routes import topology_router

logger = logging.getLogger(__name__)

# Время запуска для uptime
START_TIME = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events."""
    logger.info(f"NetBox Topology API v{__version__} starting...")
    yield
    logger.info("NetBox Topology API shutting down...")


app = FastAPI(
    title="NetBox Topology API",
    description="""
## NetBox Topology Web API

REST API для построения сетевой топологии из данных NetBox.

### Возможности

- **Adapt** - Снимок NetBox в теле запроса → топология
- **NetBox** - Чтение снимка из NetBox API → топология

Линки строятся из кабелей NetBox и LLDP-отчётов коллекторов.
Отброшенные ссылки возвращаются в отчёте (partial=true), а не как ошибка.
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS для фронтенда
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception handlers
# =============================================================================

# Класс ошибки → HTTP статус (проверяется по порядку)
ERROR_STATUS = (
    (AdapterError, 422),
    (NetBoxError, 502),
    (ConfigError, 400),
)


def _error_response(status_code: int, exc: TopologyError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            context=exc.details,
        ).model_dump(),
    )


@app.exception_handler(TopologyError)
async def topology_exception_handler(request: Request, exc: TopologyError):
    """Ошибки адаптера, NetBox и конфигурации."""
    for error_class, status_code in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        status_code = 500

    logger.warning(f"{request.url.path}: {format_error_for_log(exc)}")
    return _error_response(status_code, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик ошибок."""
    logger.exception(f"Необработанная ошибка {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            detail=str(exc),
        ).model_dump(),
    )


# =============================================================================
# Health check
# =============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check",
)
async def health_check():
    """Проверка состояния API."""
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime=time.time() - START_TIME,
    )


@app.get("/", tags=["Health"])
async def root():
    """Корневой endpoint."""
    return {
        "name": "NetBox Topology API",
        "version": __version__,
        "docs": "/docs",
    }


# =============================================================================
# Routes
# =============================================================================

app.include_router(topology_router, prefix="/api/topology", tags=["Topology"])
