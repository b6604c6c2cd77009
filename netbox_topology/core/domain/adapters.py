"""
Адаптеры сущностей NetBox → внутренняя модель.

Каждая функция преобразует одну upstream-запись (dict из REST API NetBox)
в одну внутреннюю сущность. Идентификаторы выводятся из upstream id чистой
функцией, поэтому повторная адаптация всегда даёт тот же id.

Обязательные вложенные объекты (device_type, manufacturer, role, device у
интерфейса) используются безусловно: их отсутствие — MalformedInputError.
Опциональные поля (platform, tags, координаты, primary_ip6) получают
документированные значения по умолчанию.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..constants import (
    DEVICE_PREFIX,
    INTERFACE_PREFIX,
    SITE_PREFIX,
    LOCATION_PREFIX,
    ROLE_PREFIX,
    VLAN_PREFIX,
    CABLE_LINK_PREFIX,
    LLDP_LINK_PREFIX,
    DEFAULT_OS,
)
from ..exceptions import MalformedInputError
from ..logging import get_logger
from ..models import Device, DeviceFingerprint, DeviceRole, Interface, Location, Site
from .status import normalize_device_status, status_value

logger = get_logger(__name__)


# =============================================================================
# ИДЕНТИФИКАТОРЫ
# =============================================================================

def device_id(upstream_id: Any) -> str:
    """device-<id>"""
    return f"{DEVICE_PREFIX}{upstream_id}"


def interface_id(upstream_id: Any) -> str:
    """interface-<id>"""
    return f"{INTERFACE_PREFIX}{upstream_id}"


def site_id(upstream_id: Any) -> str:
    """site-<id>"""
    return f"{SITE_PREFIX}{upstream_id}"


def location_id(upstream_id: Any) -> str:
    """loc-<id>"""
    return f"{LOCATION_PREFIX}{upstream_id}"


def role_id(upstream_id: Any) -> str:
    """role-<id>"""
    return f"{ROLE_PREFIX}{upstream_id}"


def vlan_ref(upstream_id: Any) -> str:
    """vlan-<id>"""
    return f"{VLAN_PREFIX}{upstream_id}"


def cable_link_id(upstream_id: Any) -> str:
    """link-<cable id>"""
    return f"{CABLE_LINK_PREFIX}{upstream_id}"


def lldp_link_id(index: int) -> str:
    """lldp-link-<позиция в списке соседей>"""
    return f"{LLDP_LINK_PREFIX}{index}"


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ
# =============================================================================

def strip_prefix_length(address: str) -> str:
    """
    Убирает длину префикса из CIDR-записи.

    Args:
        address: "192.168.1.1/24" или "2001:db8::1/64"

    Returns:
        str: "192.168.1.1" / "2001:db8::1"
    """
    return address.split("/")[0]


def parse_timestamp(value: Any, entity: str = "", record_id: Any = None) -> datetime:
    """
    Разбирает ISO-8601 timestamp NetBox ("2025-01-15T10:30:00Z").

    Отсутствующее значение → текущее время (UTC).

    Raises:
        MalformedInputError: Строка не является ISO-8601
    """
    if value is None or value == "":
        logger.debug("Timestamp отсутствует, используем now()", kind=entity, ref=str(record_id))
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise MalformedInputError(
            "Timestamp must be an ISO-8601 string", entity=entity, record_id=record_id,
        )
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise MalformedInputError(
            f"Invalid timestamp {value!r}", entity=entity, record_id=record_id,
        ) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require(record: Dict[str, Any], key: str, entity: str, record_id: Any = None) -> Any:
    """Значение обязательного поля (не None)."""
    value = record.get(key)
    if value is None:
        raise MalformedInputError(
            "Missing required field", entity=entity, field=key, record_id=record_id,
        )
    return value


def _require_object(
    record: Dict[str, Any], key: str, entity: str, record_id: Any = None,
) -> Dict[str, Any]:
    """Обязательный вложенный объект (dict)."""
    value = _require(record, key, entity, record_id)
    if not isinstance(value, dict):
        raise MalformedInputError(
            "Field must be an object", entity=entity, field=key, record_id=record_id,
        )
    return value


def _check_record(upstream: Any, entity: str) -> Any:
    """Проверяет что запись — dict, возвращает её id."""
    if not isinstance(upstream, dict):
        raise MalformedInputError(f"{entity} record must be an object", entity=entity)
    return _require(upstream, "id", entity)


def _optional_object(record: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    value = record.get(key)
    return value if isinstance(value, dict) else None


# =============================================================================
# АДАПТЕРЫ
# =============================================================================

def adapt_device(upstream: Dict[str, Any]) -> Device:
    """
    Преобразует устройство NetBox в Device.

    Args:
        upstream: Запись /api/dcim/devices/

    Returns:
        Device: Внутреннее устройство (interfaces пока пустые)

    Raises:
        MalformedInputError: Нет id, name, device_type, manufacturer или role
    """
    nb_id = _check_record(upstream, "device")
    name = _require(upstream, "name", "device", nb_id)
    device_type = _require_object(upstream, "device_type", "device", nb_id)
    manufacturer = _require_object(device_type, "manufacturer", "device", nb_id)
    role = _require_object(upstream, "role", "device", nb_id)

    created = parse_timestamp(upstream.get("created"), "device", nb_id)
    updated = parse_timestamp(upstream.get("last_updated"), "device", nb_id)

    # IPv4 всегда первым
    ip_addresses: List[str] = []
    for key in ("primary_ip4", "primary_ip6"):
        primary = _optional_object(upstream, key)
        if primary and primary.get("address"):
            ip_addresses.append(strip_prefix_length(primary["address"]))

    site = _optional_object(upstream, "site") or {}
    nested_location = _optional_object(upstream, "location") or {}

    location = None
    latitude = upstream.get("latitude")
    longitude = upstream.get("longitude")
    if latitude is not None and longitude is not None:
        location = Location(
            id=location_id(nb_id),
            name=site.get("name", ""),
            latitude=latitude,
            longitude=longitude,
            address=site.get("display"),
            city=nested_location.get("name"),
            country="",
            site_hierarchy=[site["name"]] if site.get("name") else [],
            created_at=created,
            updated_at=updated,
        )

    platform = _optional_object(upstream, "platform")
    tags = [tag for tag in (upstream.get("tags") or []) if isinstance(tag, dict)]

    device_role = DeviceRole(
        id=role_id(_require(role, "id", "device", nb_id)),
        name=_require(role, "name", "device", nb_id),
        description=role.get("display"),
        device_fingerprint=DeviceFingerprint(),
        created_at=created,
        updated_at=updated,
    )

    return Device(
        id=device_id(nb_id),
        hostname=name,
        fqdn=upstream.get("display"),
        ip_addresses=ip_addresses,
        vendor=_require(manufacturer, "name", "device", nb_id),
        model=_require(device_type, "model", "device", nb_id),
        os=(platform or {}).get("name") or DEFAULT_OS,
        status=normalize_device_status(upstream.get("status")).value,
        location=location,
        labels=[tag.get("name") for tag in tags if tag.get("name")],
        tags=[tag.get("slug") for tag in tags if tag.get("slug")],
        last_seen=updated,
        roles=[device_role],
        serial_number=upstream.get("serial") or None,
        asset_tag=upstream.get("asset_tag") or None,
        site_name=site.get("name"),
        created_at=created,
        updated_at=updated,
    )


def adapt_interface(upstream: Dict[str, Any]) -> Interface:
    """
    Преобразует интерфейс NetBox в Interface.

    device_id берётся из вложенной ссылки device.id, а не из состояния
    адаптера: порядок адаптации устройств и интерфейсов не важен.

    Args:
        upstream: Запись /api/dcim/interfaces/

    Returns:
        Interface

    Raises:
        MalformedInputError: Нет id, name или device.id
    """
    nb_id = _check_record(upstream, "interface")
    name = _require(upstream, "name", "interface", nb_id)
    owner = _require_object(upstream, "device", "interface", nb_id)
    owner_id = _require(owner, "id", "interface", nb_id)

    # Отдельного link-state нет: admin и oper берутся из enabled
    state = "up" if upstream.get("enabled") else "down"

    untagged_vlan = _optional_object(upstream, "untagged_vlan")

    return Interface(
        id=interface_id(nb_id),
        device_id=device_id(owner_id),
        if_index=nb_id,
        name=name,
        description=upstream.get("description") or None,
        mac_address=upstream.get("mac_address") or None,
        speed=upstream.get("speed"),
        duplex=status_value(upstream.get("duplex")),
        mtu=upstream.get("mtu"),
        type=status_value(upstream.get("type")),
        admin_status=state,
        oper_status=state,
        vlan_id=vlan_ref(untagged_vlan["id"]) if untagged_vlan and untagged_vlan.get("id") is not None else None,
        created_at=parse_timestamp(upstream.get("created"), "interface", nb_id),
        updated_at=parse_timestamp(upstream.get("last_updated"), "interface", nb_id),
    )


def adapt_site(upstream: Dict[str, Any]) -> Site:
    """
    Преобразует сайт NetBox в Site.

    Координаты без значения становятся 0 (точка 0,0 — известное упрощение).

    Args:
        upstream: Запись /api/dcim/sites/

    Returns:
        Site
    """
    nb_id = _check_record(upstream, "site")
    name = _require(upstream, "name", "site", nb_id)
    created = parse_timestamp(upstream.get("created"), "site", nb_id)
    updated = parse_timestamp(upstream.get("last_updated"), "site", nb_id)

    location = Location(
        id=location_id(nb_id),
        name=name,
        latitude=upstream.get("latitude") or 0,
        longitude=upstream.get("longitude") or 0,
        address=upstream.get("physical_address"),
        city=name,
        country="",
        postal_code="",
        site_hierarchy=[name],
        created_at=created,
        updated_at=updated,
    )

    return Site(
        id=site_id(nb_id),
        name=name,
        description=upstream.get("description"),
        location=location,
        facility=upstream.get("facility"),
        time_zone=upstream.get("time_zone"),
        status=status_value(upstream.get("status")),
        created_at=created,
        updated_at=updated,
    )
