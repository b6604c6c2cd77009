"""
Core модули NetBox Topology.

Содержит:
- models: Dataclass-модели (upstream payload, Device, Interface, Link, DiscoveryResult)
- domain: Логика преобразования NetBox → топология
- exceptions: Иерархия исключений (адаптер / NetBox / конфигурация)
- Structured Logging: JSON/Human-readable логирование
- constants: Словари статусов и префиксы идентификаторов
"""

from .logging import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
    StructuredLogger,
    JSONFormatter,
    HumanFormatter,
    LogConfig,
    RotationType,
)
from .exceptions import (
    TopologyError,
    AdapterError,
    MalformedInputError,
    NetBoxError,
    NetBoxConnectionError,
    NetBoxAPIError,
    UpstreamFetchError,
    ConfigError,
    format_error_for_log,
)
from .models import (
    TopologyPayload,
    NeighborReport,
    Device,
    Interface,
    Link,
    Site,
    Location,
    DiscoveryResult,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    "StructuredLogger",
    "JSONFormatter",
    "HumanFormatter",
    "LogConfig",
    "RotationType",
    # Exceptions
    "TopologyError",
    "AdapterError",
    "MalformedInputError",
    "NetBoxError",
    "NetBoxConnectionError",
    "NetBoxAPIError",
    "UpstreamFetchError",
    "ConfigError",
    "format_error_for_log",
    # Models
    "TopologyPayload",
    "NeighborReport",
    "Device",
    "Interface",
    "Link",
    "Site",
    "Location",
    "DiscoveryResult",
]
