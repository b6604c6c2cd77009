"""
Модуль интеграции с NetBox.

Использует библиотеку pynetbox для чтения снимка топологии.

Пример использования:
    from netbox_topology.netbox import NetBoxClient

    client = NetBoxClient(url="https://netbox.example.com", token="xxx")
    payload = client.fetch_topology(lldp_neighbors=neighbors)
"""

from .client import NetBoxClient, ENDPOINTS
from .session import NetBoxSession

__all__ = ["NetBoxClient", "NetBoxSession", "ENDPOINTS"]
