"""
Нормализация статусов NetBox во внутренний словарь.

Единственная точка трансляции upstream-статусов: если NetBox добавит
новое значение, правится только этот модуль.
"""

from enum import Enum
from typing import Any

from ..constants import (
    DEVICE_STATUS_MAP,
    CABLE_CONNECTED,
    CABLE_CONFIDENCE_CONNECTED,
    CABLE_CONFIDENCE_OTHER,
)


class DeviceStatus(str, Enum):
    """Внутренний статус устройства."""
    UP = "up"
    DOWN = "down"
    WARNING = "warning"
    UNKNOWN = "unknown"


def status_value(raw: Any) -> Any:
    """
    Извлекает значение choice-поля NetBox.

    NetBox отдаёт статусы как {"value": "active", "label": "Active"},
    но в ручных выгрузках встречается и просто строка.

    Args:
        raw: dict с ключом value, строка или None

    Returns:
        Значение статуса (обычно str) или None
    """
    if isinstance(raw, dict):
        return raw.get("value")
    return raw


def normalize_device_status(raw: Any) -> DeviceStatus:
    """
    Преобразует статус устройства NetBox во внутренний.

    active → up; offline/failed/decommissioning → down;
    planned/staged → warning; всё остальное → unknown. Не бросает исключений.

    Args:
        raw: Статус NetBox (строка или choice-dict)

    Returns:
        DeviceStatus
    """
    value = status_value(raw)
    if not isinstance(value, str):
        return DeviceStatus.UNKNOWN
    return DeviceStatus(DEVICE_STATUS_MAP.get(value, DeviceStatus.UNKNOWN.value))


def is_cable_connected(raw: Any) -> bool:
    """Линк поднят только при статусе кабеля "connected"."""
    return status_value(raw) == CABLE_CONNECTED


def cable_confidence(raw: Any) -> float:
    """1.0 для connected, 0.5 для любого другого статуса."""
    if is_cable_connected(raw):
        return CABLE_CONFIDENCE_CONNECTED
    return CABLE_CONFIDENCE_OTHER
