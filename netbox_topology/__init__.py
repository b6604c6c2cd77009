"""
NetBox Topology - построение сетевой топологии из данных NetBox.

Модуль предоставляет:
- Преобразование устройств, интерфейсов и сайтов NetBox во внутреннюю модель
- Вывод линков из кабелей (Pass A) и LLDP-отчётов (Pass B)
- Гистограммы vendor / OS / role для сводки скана
- Чтение снимка из NetBox API (pynetbox)
- Экспорт результата (JSON, Excel), CLI и HTTP API

Примеры использования:
    # CLI
    python -m netbox_topology adapt snapshot.json -o topology.json
    python -m netbox_topology import-netbox --lldp lldp.json

    # Python API
    from netbox_topology import NetBoxClient, assemble_topology

    payload = NetBoxClient().fetch_topology(lldp_neighbors=neighbors)
    result = assemble_topology(payload, "Main Office")
    data = result.to_dict()
"""

__version__ = "1.0.0"

from .core.domain import TopologyAssembler, assemble_topology, AdaptationReport
from .core.models import DiscoveryResult, TopologyPayload, NeighborReport
from .netbox import NetBoxClient

__all__ = [
    "__version__",
    "TopologyAssembler",
    "assemble_topology",
    "AdaptationReport",
    "DiscoveryResult",
    "TopologyPayload",
    "NeighborReport",
    "NetBoxClient",
]
