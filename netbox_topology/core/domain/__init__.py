"""
Domain Layer для NetBox Topology.

Чистая логика преобразования, без I/O:
- status: нормализация статусов NetBox
- adapters: устройство / интерфейс / сайт → внутренние сущности
- links: линки из кабелей (Pass A) и LLDP-отчётов (Pass B)
- summary: гистограммы vendor / OS / role
- topology: TopologyAssembler — весь конвейер
- lldp: NeighborReportNormalizer — ключи отчётов коллекторов

Использование:
    from netbox_topology.core.domain import assemble_topology

    result = assemble_topology(payload, "Main Office")
"""

from .status import DeviceStatus, normalize_device_status, is_cable_connected, cable_confidence
from .adapters import adapt_device, adapt_interface, adapt_site
from .links import adapt_cable, endpoint_index, infer_cable_links, infer_lldp_links
from .lldp import NeighborReportNormalizer
from .report import AdaptationReport, DroppedReference
from .summary import histogram, build_summary
from .topology import TopologyAssembler, assemble_topology

__all__ = [
    "DeviceStatus",
    "normalize_device_status",
    "is_cable_connected",
    "cable_confidence",
    "adapt_device",
    "adapt_interface",
    "adapt_site",
    "adapt_cable",
    "endpoint_index",
    "infer_cable_links",
    "infer_lldp_links",
    "NeighborReportNormalizer",
    "AdaptationReport",
    "DroppedReference",
    "histogram",
    "build_summary",
    "TopologyAssembler",
    "assemble_topology",
]
