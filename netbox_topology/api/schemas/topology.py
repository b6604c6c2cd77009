"""Schemas для построения топологии."""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class TopologyOptions(BaseModel):
    """Общие опции сборки."""

    name: Optional[str] = Field(None, description="Имя скана (default: topology.scan_name)")
    strict: bool = Field(False, description="Интерфейс без устройства — ошибка 422")
    include_report: bool = Field(True, description="Вернуть отчёт об отброшенных ссылках")


class AdaptRequest(TopologyOptions):
    """Снимок NetBox в теле запроса."""

    devices: List[Dict[str, Any]]
    interfaces: List[Dict[str, Any]]
    cables: List[Dict[str, Any]]
    ip_addresses: List[Dict[str, Any]] = []
    sites: List[Dict[str, Any]] = []
    lldp_neighbors: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="LLDP-отчёты (канонические ключи или формат коллектора)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Main Office",
                "devices": [],
                "interfaces": [],
                "cables": [],
                "ip_addresses": [],
                "sites": [],
                "lldp_neighbors": [
                    {
                        "local_device": "core-sw-01",
                        "local_interface": "GigabitEthernet1/0/1",
                        "remote_device": "access-sw-01",
                        "remote_interface": "GigabitEthernet1/0/1",
                    }
                ],
            }
        }
    )


class NetBoxImportRequest(TopologyOptions):
    """
    Импорт напрямую из NetBox.

    url/token можно не указывать: тогда берутся X-NetBox-URL /
    X-NetBox-Token headers, затем NETBOX_URL / NETBOX_TOKEN.
    """

    url: Optional[str] = Field(None, description="NetBox URL")
    token: Optional[str] = Field(None, description="NetBox API Token")
    verify_ssl: Optional[bool] = None
    lldp_neighbors: List[Dict[str, Any]] = Field(default_factory=list)


class TopologyResponse(BaseModel):
    """Результат сборки."""

    success: bool = True
    partial: bool = False
    result: Dict[str, Any]
    report: Optional[Dict[str, Any]] = None
