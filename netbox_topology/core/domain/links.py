"""
Вывод линков из двух независимых источников.

Pass A — кабели NetBox (discovery_source="snmp"): берутся первые
A- и B-терминации кабеля (trunk/LAG-кабели с несколькими терминациями
на сторону полностью не моделируются).

Pass B — LLDP-отчёты (discovery_source="lldp"): устройства и интерфейсы
ищутся по точному, регистрозависимому совпадению имён. Нормализация
имён НЕ выполняется: расхождение имён между источниками даёт
пропущенный линк, а не ошибку.

Результаты проходов склеиваются без дедупликации: кабель и LLDP-отчёт
об одном и том же соединении дают два линка.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Set

from ..constants import SOURCE_CABLE, SOURCE_LLDP, LLDP_CONFIDENCE, LLDP_TTL
from ..exceptions import MalformedInputError
from ..logging import get_logger
from ..models import Device, Interface, LLDPInfo, Link, NeighborReport, ProtocolInfo
from .adapters import (
    cable_link_id,
    device_id,
    interface_id,
    lldp_link_id,
    parse_timestamp,
)
from .report import AdaptationReport, record_drop
from .status import cable_confidence, is_cable_connected

logger = get_logger(__name__)


# =============================================================================
# PASS A: КАБЕЛИ
# =============================================================================

def _terminations(cable: Dict[str, Any], key: str, cable_id: Any) -> List[Any]:
    value = cable.get(key)
    if not isinstance(value, list):
        raise MalformedInputError(
            "Cable terminations must be a list", entity="cable", field=key, record_id=cable_id,
        )
    return value


def _termination_endpoint(termination: Any) -> Optional[Dict[str, Any]]:
    """
    Возвращает object терминации, если в нём есть интерфейс с устройством.

    Терминация без object.device (circuit, power port) не разрешается.
    """
    if not isinstance(termination, dict):
        return None
    obj = termination.get("object")
    if not isinstance(obj, dict) or obj.get("id") is None:
        return None
    device = obj.get("device")
    if not isinstance(device, dict) or device.get("id") is None:
        return None
    return obj


def endpoint_index(devices: Sequence[Device]) -> Dict[str, Set[str]]:
    """device id → id его интерфейсов (известные концы кабелей)."""
    return {device.id: {intf.id for intf in device.interfaces} for device in devices}


def _unknown_endpoint(
    known: Dict[str, Set[str]], dev_id: str, intf_id: str,
) -> Optional[str]:
    if dev_id not in known:
        return f"device {dev_id} not in payload"
    if intf_id not in known[dev_id]:
        return f"interface {intf_id} not found on {dev_id}"
    return None


def adapt_cable(
    cable: Dict[str, Any],
    report: Optional[AdaptationReport] = None,
    known: Optional[Dict[str, Set[str]]] = None,
) -> Optional[Link]:
    """
    Преобразует кабель NetBox в Link.

    Args:
        cable: Запись /api/dcim/cables/
        report: Отчёт для регистрации отброшенного кабеля
        known: endpoint_index() адаптированных устройств. Если задан,
               кабель к устройству или интерфейсу вне снимка отбрасывается

    Returns:
        Link или None если терминацию не удалось разрешить

    Raises:
        MalformedInputError: Нет id или терминации не список
    """
    if not isinstance(cable, dict) or cable.get("id") is None:
        raise MalformedInputError("Cable record must be an object with id", entity="cable")

    cable_id = cable["id"]
    link_id = cable_link_id(cable_id)
    a_side = _terminations(cable, "a_terminations", cable_id)
    b_side = _terminations(cable, "b_terminations", cable_id)

    if not a_side or not b_side:
        _drop_cable(report, link_id, "cable has an empty termination side")
        return None

    a_obj = _termination_endpoint(a_side[0])
    b_obj = _termination_endpoint(b_side[0])
    if a_obj is None or b_obj is None:
        side = "a" if a_obj is None else "b"
        _drop_cable(report, link_id, f"{side}-side termination has no device")
        return None

    source_device = device_id(a_obj["device"]["id"])
    source_intf = interface_id(a_obj["id"])
    target_device = device_id(b_obj["device"]["id"])
    target_intf = interface_id(b_obj["id"])

    if known is not None:
        reason = (
            _unknown_endpoint(known, source_device, source_intf)
            or _unknown_endpoint(known, target_device, target_intf)
        )
        if reason:
            _drop_cable(report, link_id, reason)
            return None

    status = cable.get("status")
    created = parse_timestamp(cable.get("created"), "cable", cable_id)
    updated = parse_timestamp(cable.get("last_updated"), "cable", cable_id)

    return Link(
        id=link_id,
        source_device_id=source_device,
        source_interface_id=source_intf,
        target_device_id=target_device,
        target_interface_id=target_intf,
        discovery_source=SOURCE_CABLE,
        confidence=cable_confidence(status),
        last_seen=updated,
        is_up=is_cable_connected(status),
        created_at=created,
        updated_at=updated,
    )


def _drop_cable(report: Optional[AdaptationReport], link_id: str, reason: str) -> None:
    logger.warning("Кабель пропущен", operation="adapt_cable", kind="cable", ref=link_id, reason=reason)
    record_drop(report, "cable", link_id, reason)


def infer_cable_links(
    cables: Sequence[Dict[str, Any]],
    report: Optional[AdaptationReport] = None,
    devices: Optional[Sequence[Device]] = None,
) -> List[Link]:
    """
    Pass A: линки из всех кабелей, неразрешённые отброшены.

    Args:
        cables: Записи кабелей NetBox
        report: Отчёт об отброшенных кабелях
        devices: Адаптированные устройства с интерфейсами; оба конца
                 линка должны ссылаться на них

    Returns:
        List[Link]: Линки в порядке кабелей
    """
    known = endpoint_index(devices) if devices is not None else None
    links = []
    for cable in cables:
        link = adapt_cable(cable, report, known)
        if link is not None:
            links.append(link)
    return links


# =============================================================================
# PASS B: LLDP
# =============================================================================

def _find_device(devices: Sequence[Device], hostname: str) -> Optional[Device]:
    """Первое устройство с точно таким hostname."""
    for device in devices:
        if device.hostname == hostname:
            return device
    return None


def _find_interface(device: Device, name: str) -> Optional[Interface]:
    """Первый интерфейс устройства с точно таким именем."""
    for intf in device.interfaces:
        if intf.name == name:
            return intf
    return None


def neighbor_to_link(
    index: int,
    neighbor: NeighborReport,
    devices: Sequence[Device],
    report: Optional[AdaptationReport] = None,
    now: Optional[datetime] = None,
) -> Optional[Link]:
    """
    Преобразует один LLDP-отчёт в Link.

    Args:
        index: Позиция отчёта в списке (входит в id линка)
        neighbor: Отчёт о соседе
        devices: Уже адаптированные устройства с интерфейсами
        report: Отчёт об отброшенных соседях
        now: Время обнаружения (по умолчанию текущее UTC)

    Returns:
        Link или None если имя не указано или устройство/интерфейс не найдены
    """
    link_id = lldp_link_id(index)
    if neighbor.missing_keys:
        _drop_neighbor(report, link_id, f"missing {', '.join(neighbor.missing_keys)}")
        return None

    source_device = _find_device(devices, neighbor.local_device)
    target_device = _find_device(devices, neighbor.remote_device)
    if source_device is None or target_device is None:
        missing = neighbor.local_device if source_device is None else neighbor.remote_device
        _drop_neighbor(report, link_id, f"device {missing!r} not found")
        return None

    source_intf = _find_interface(source_device, neighbor.local_interface)
    target_intf = _find_interface(target_device, neighbor.remote_interface)
    if source_intf is None or target_intf is None:
        if source_intf is None:
            missing = f"{source_device.hostname}:{neighbor.local_interface}"
        else:
            missing = f"{target_device.hostname}:{neighbor.remote_interface}"
        _drop_neighbor(report, link_id, f"interface {missing!r} not found")
        return None

    now = now or datetime.now(timezone.utc)
    lldp = LLDPInfo(
        chassis_id=target_device.id,
        port_id=target_intf.name,
        ttl=LLDP_TTL,
        system_name=target_device.hostname,
        system_description=neighbor.remote_platform,
        port_description=neighbor.remote_port_description,
        management_addresses=list(target_device.ip_addresses),
        last_seen=now,
    )

    return Link(
        id=link_id,
        source_device_id=source_device.id,
        source_interface_id=source_intf.id,
        target_device_id=target_device.id,
        target_interface_id=target_intf.id,
        discovery_source=SOURCE_LLDP,
        confidence=LLDP_CONFIDENCE,
        last_seen=now,
        is_up=True,
        protocol_info=ProtocolInfo(lldp=lldp),
        created_at=now,
        updated_at=now,
    )


def _drop_neighbor(report: Optional[AdaptationReport], link_id: str, reason: str) -> None:
    logger.warning("LLDP сосед пропущен", operation="infer_lldp", kind="neighbor", ref=link_id, reason=reason)
    record_drop(report, "neighbor", link_id, reason)


def infer_lldp_links(
    neighbors: Sequence[NeighborReport],
    devices: Sequence[Device],
    report: Optional[AdaptationReport] = None,
) -> List[Link]:
    """
    Pass B: линки из LLDP-отчётов.

    Args:
        neighbors: Отчёты о соседях (dict или NeighborReport)
        devices: Адаптированные устройства с привязанными интерфейсами
        report: Отчёт об отброшенных соседях

    Returns:
        List[Link]: Линки в порядке отчётов

    Raises:
        MalformedInputError: Отчёт не словарь
    """
    now = datetime.now(timezone.utc)
    links = []
    for index, neighbor in enumerate(neighbors):
        if not isinstance(neighbor, NeighborReport):
            neighbor = NeighborReport.from_dict(neighbor)
        link = neighbor_to_link(index, neighbor, devices, report, now=now)
        if link is not None:
            links.append(link)
    return links
