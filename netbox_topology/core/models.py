"""
Data Models для NetBox Topology.

Типизированные dataclasses вместо Dict[str, Any]:
- Upstream-обёртки: TopologyPayload, NeighborReport (вход адаптера)
- Внутренние сущности: Device, Interface, Link, Site (выход адаптера)
- Результат скана: DiscoveryResult → DiscoveryResults → DiscoverySummary

Сериализация для слоя визуализации:
    result = assemble_topology(payload)
    data = result.to_dict()   # camelCase ключи, ISO-8601 даты
    data["results"]["links"][0]["sourceDeviceId"]
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, List, Any, Dict, TYPE_CHECKING

from .constants import REQUIRED_PAYLOAD_LISTS, OPTIONAL_PAYLOAD_LISTS
from .exceptions import MalformedInputError

if TYPE_CHECKING:
    from .domain.report import AdaptationReport


# Ключи, которые не получаются простым camelCase
_KEY_OVERRIDES = {
    "top_os": "topOS",
}


def _camel(name: str) -> str:
    """snake_case → camelCase."""
    if name in _KEY_OVERRIDES:
        return _KEY_OVERRIDES[name]
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize(value: Any) -> Any:
    """
    Рекурсивно приводит модель к JSON-совместимой структуре.

    None-поля dataclass пропускаются, datetime → ISO-8601, Enum → value.
    """
    if is_dataclass(value) and not isinstance(value, type):
        result = {}
        for f in fields(value):
            if f.metadata.get("serialize") is False:
                continue
            item = getattr(value, f.name)
            if item is None:
                continue
            result[_camel(f.name)] = serialize(item)
        return result
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


class _Serializable:
    """Миксин to_dict() для всех моделей."""

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь (camelCase, без None)."""
        return serialize(self)


# =============================================================================
# UPSTREAM
# =============================================================================

@dataclass
class NeighborReport(_Serializable):
    """
    LLDP-отчёт о соседе в формате выгрузки Slurpit.

    Отчёт без какого-либо из четырёх имён не ошибка: он просто не
    сопоставится с устройствами и попадёт в отчёт об отброшенных.

    Attributes:
        local_device: Hostname локального устройства
        local_interface: Локальный интерфейс
        remote_device: Hostname соседа
        remote_interface: Интерфейс соседа
        remote_platform: Платформа соседа (system description)
        remote_port_description: Описание порта соседа
    """
    local_device: Optional[str] = None
    local_interface: Optional[str] = None
    remote_device: Optional[str] = None
    remote_interface: Optional[str] = None
    remote_platform: Optional[str] = None
    remote_port_description: Optional[str] = None

    REQUIRED_KEYS = ("local_device", "local_interface", "remote_device", "remote_interface")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NeighborReport":
        """Создаёт NeighborReport из словаря."""
        if not isinstance(data, dict):
            raise MalformedInputError(
                "Neighbor report must be an object", entity="lldp_neighbor",
            )
        return cls(
            local_device=data.get("local_device"),
            local_interface=data.get("local_interface"),
            remote_device=data.get("remote_device"),
            remote_interface=data.get("remote_interface"),
            remote_platform=data.get("remote_platform"),
            remote_port_description=data.get("remote_port_description"),
        )

    @property
    def missing_keys(self) -> List[str]:
        """Обязательные имена, которых нет в отчёте."""
        return [key for key in self.REQUIRED_KEYS if getattr(self, key) in (None, "")]


@dataclass
class TopologyPayload:
    """
    Полный снимок данных NetBox (+ LLDP соседи) для одного запуска адаптера.

    Пагинация уже выбрана: каждый ключ — плоский список записей API.
    """
    devices: List[Dict[str, Any]]
    interfaces: List[Dict[str, Any]]
    cables: List[Dict[str, Any]]
    ip_addresses: List[Dict[str, Any]] = field(default_factory=list)
    sites: List[Dict[str, Any]] = field(default_factory=list)
    lldp_neighbors: List[NeighborReport] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TopologyPayload":
        """
        Проверяет структуру верхнего уровня и создаёт TopologyPayload.

        Raises:
            MalformedInputError: payload не словарь или обязательный ключ не список
        """
        if isinstance(data, TopologyPayload):
            return data
        if not isinstance(data, dict):
            raise MalformedInputError("Payload must be an object", entity="payload")

        for key in REQUIRED_PAYLOAD_LISTS:
            if not isinstance(data.get(key), list):
                raise MalformedInputError(
                    "Payload key must be a list", entity="payload", field=key,
                )

        optional = {}
        for key in OPTIONAL_PAYLOAD_LISTS:
            value = data.get(key)
            if value is None:
                value = []
            if not isinstance(value, list):
                raise MalformedInputError(
                    "Payload key must be a list", entity="payload", field=key,
                )
            optional[key] = value

        return cls(
            devices=data["devices"],
            interfaces=data["interfaces"],
            cables=data["cables"],
            ip_addresses=optional["ip_addresses"],
            sites=optional["sites"],
            lldp_neighbors=[
                NeighborReport.from_dict(row) for row in optional["lldp_neighbors"]
            ],
        )


# =============================================================================
# ВНУТРЕННИЕ СУЩНОСТИ
# =============================================================================

@dataclass
class Location(_Serializable):
    """Географическое расположение устройства или сайта."""
    id: str
    name: str
    latitude: float
    longitude: float
    created_at: datetime
    updated_at: datetime
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    site_hierarchy: List[str] = field(default_factory=list)


@dataclass
class DeviceFingerprint(_Serializable):
    """Отпечаток устройства для роли (заполняется вне адаптера)."""
    snmp_oids: List[str] = field(default_factory=list)
    wmi_classes: List[str] = field(default_factory=list)
    banners: List[str] = field(default_factory=list)
    ports: List[int] = field(default_factory=list)
    services: List[str] = field(default_factory=list)


@dataclass
class DeviceRole(_Serializable):
    """Роль устройства (Core Switch, Firewall, Server)."""
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    device_fingerprint: DeviceFingerprint = field(default_factory=DeviceFingerprint)
    monitors: List[Any] = field(default_factory=list)
    actions: List[Any] = field(default_factory=list)


@dataclass
class Interface(_Serializable):
    """
    Интерфейс устройства.

    Attributes:
        id: interface-<upstream id>
        device_id: device-<upstream device id> (внешний ключ, не ссылка)
        if_index: Числовой индекс (upstream id)
        admin_status: up/down по флагу enabled
        oper_status: Совпадает с admin_status (нет отдельного link-state)
        vlan_id: vlan-<upstream id> untagged VLAN
    """
    id: str
    device_id: str
    if_index: int
    name: str
    admin_status: str
    oper_status: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    mac_address: Optional[str] = None
    speed: Optional[int] = None
    duplex: Optional[str] = None
    mtu: Optional[int] = None
    type: Optional[str] = None
    vlan_id: Optional[str] = None
    links: List[Any] = field(default_factory=list)


@dataclass
class LLDPInfo(_Serializable):
    """Метаданные LLDP для линка, выведенного из отчёта соседа."""
    chassis_id: str
    port_id: str
    ttl: int
    system_name: str
    last_seen: datetime
    system_description: Optional[str] = None
    port_description: Optional[str] = None
    system_capabilities: List[str] = field(default_factory=list)
    enabled_capabilities: List[str] = field(default_factory=list)
    management_addresses: List[str] = field(default_factory=list)


@dataclass
class ProtocolInfo(_Serializable):
    """Протокол-специфичные данные линка."""
    lldp: Optional[LLDPInfo] = None


@dataclass
class Link(_Serializable):
    """
    Связь между двумя интерфейсами.

    Attributes:
        discovery_source: snmp (из кабеля) или lldp (из отчёта соседа)
        confidence: Уверенность в [0, 1]
        is_up: Линк поднят
    """
    id: str
    source_device_id: str
    source_interface_id: str
    target_device_id: str
    target_interface_id: str
    discovery_source: str
    confidence: float
    last_seen: datetime
    is_up: bool
    created_at: datetime
    updated_at: datetime
    vlans: List[str] = field(default_factory=list)
    speed: Optional[int] = None
    protocol_info: Optional[ProtocolInfo] = None


@dataclass
class Device(_Serializable):
    """
    Устройство во внутренней модели.

    Attributes:
        id: device-<upstream id>
        hostname: Имя устройства в NetBox
        ip_addresses: Только host-часть, IPv4 раньше IPv6
        os: Платформа или "Unknown"
        status: up/down/warning/unknown
        labels: Имена тегов
        tags: Slug тегов
    """
    id: str
    hostname: str
    vendor: str
    model: str
    os: str
    status: str
    last_seen: datetime
    created_at: datetime
    updated_at: datetime
    fqdn: Optional[str] = None
    ip_addresses: List[str] = field(default_factory=list)
    location: Optional[Location] = None
    labels: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    roles: List[DeviceRole] = field(default_factory=list)
    interfaces: List[Interface] = field(default_factory=list)
    credentials: List[Any] = field(default_factory=list)
    dependencies: List[Any] = field(default_factory=list)
    monitors: List[Any] = field(default_factory=list)
    serial_number: Optional[str] = None
    asset_tag: Optional[str] = None
    site_name: Optional[str] = None


@dataclass
class Site(_Serializable):
    """Площадка (site) NetBox."""
    id: str
    name: str
    location: Location
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    facility: Optional[str] = None
    time_zone: Optional[str] = None
    status: Optional[str] = None
    devices: List[Device] = field(default_factory=list)
    subnets: List[Any] = field(default_factory=list)
    vlans: List[Any] = field(default_factory=list)


# =============================================================================
# РЕЗУЛЬТАТ СКАНА
# =============================================================================

@dataclass
class SeedDevice(_Serializable):
    """Точка входа скана (для импорта — сам NetBox API)."""
    id: str
    type: str
    value: str
    is_active: bool = True
    description: Optional[str] = None


@dataclass
class ExpansionSettings(_Serializable):
    """Настройки расширения скана (переносятся как есть)."""
    enabled: bool = True
    max_hops: int = 10
    max_devices: int = 0
    include_virtual: bool = False
    include_cloud: bool = False
    include_wireless: bool = True
    include_storage: bool = False


@dataclass
class CredentialSettings(_Serializable):
    """Настройки учётных данных скана (для импорта пустые)."""
    selected_credentials: List[str] = field(default_factory=list)
    priority_order: List[str] = field(default_factory=list)
    use_all_current: bool = False
    use_all_future: bool = False


@dataclass
class ScanOptions(_Serializable):
    """Опции скана (значения по умолчанию для импорта)."""
    auto_monitoring: bool = False
    timeout: int = 30
    retries: int = 3
    parallel_scans: int = 1
    exclusion_filters: List[Any] = field(default_factory=list)


@dataclass
class DiscoverySummary(_Serializable):
    """
    Сводка скана.

    Гистограммы — списки {"vendor"|"os"|"role": name, "count": N},
    отсортированные по убыванию count (стабильно).
    """
    scan_duration: float = 0
    devices_per_second: float = 0
    credentials_used: List[str] = field(default_factory=list)
    protocols_used: List[str] = field(default_factory=list)
    top_vendors: List[Dict[str, Any]] = field(default_factory=list)
    top_os: List[Dict[str, Any]] = field(default_factory=list)
    top_roles: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class DiscoveryResults(_Serializable):
    """Результаты скана: счётчики, устройства, линки."""
    total_devices: int
    new_devices: int
    updated_devices: int
    failed_devices: int
    devices: List[Device]
    links: List[Link]
    summary: DiscoverySummary
    errors: List[Any] = field(default_factory=list)


@dataclass
class DiscoveryResult(_Serializable):
    """
    Итог одного запуска адаптера.

    report (AdaptationReport) не входит в to_dict() по умолчанию:
    это канал диагностики для вызывающего кода, а не часть результата скана.
    """
    id: str
    name: str
    status: str
    start_time: datetime
    end_time: datetime
    progress: int
    seed_devices: List[SeedDevice]
    expansion_settings: ExpansionSettings
    credential_settings: CredentialSettings
    scan_options: ScanOptions
    results: DiscoveryResults
    created_at: datetime
    updated_at: datetime
    sites: List[Site] = field(default_factory=list)
    report: Optional["AdaptationReport"] = field(
        default=None, metadata={"serialize": False},
    )

    @property
    def is_partial(self) -> bool:
        """True если часть ссылок/интерфейсов отброшена."""
        return bool(self.report and self.report.is_partial)

    def to_dict(self, include_report: bool = False) -> Dict[str, Any]:
        """
        Конвертирует в словарь для слоя визуализации.

        Args:
            include_report: Добавить ключ "report" с диагностикой
        """
        data = serialize(self)
        if include_report and self.report is not None:
            data["report"] = self.report.to_dict()
        return data
