"""
Сводные гистограммы по устройствам (vendor / OS / role).

Сортировка по убыванию count стабильная: при равенстве сохраняется
порядок первого появления значения.
"""

from typing import Any, Dict, Iterable, List, Sequence

from ..constants import PROTOCOLS_USED
from ..models import Device, DiscoverySummary


def histogram(values: Iterable[str], label: str) -> List[Dict[str, Any]]:
    """
    Считает вхождения и сортирует по убыванию.

    Args:
        values: Значения в порядке обхода
        label: Имя ключа значения ("vendor", "os", "role")

    Returns:
        List[Dict]: [{label: value, "count": N}, ...]

    Example:
        histogram(["Cisco", "Dell", "Cisco"], "vendor")
        # [{"vendor": "Cisco", "count": 2}, {"vendor": "Dell", "count": 1}]
    """
    counts: Dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    # dict хранит порядок вставки, sorted стабилен
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{label: value, "count": count} for value, count in ordered]


def build_summary(devices: Sequence[Device]) -> DiscoverySummary:
    """
    Строит DiscoverySummary для списка устройств.

    Роли считаются по всем ролям каждого устройства.
    """
    return DiscoverySummary(
        scan_duration=0,
        devices_per_second=0,
        credentials_used=[],
        protocols_used=list(PROTOCOLS_USED),
        top_vendors=histogram((d.vendor for d in devices), "vendor"),
        top_os=histogram((d.os for d in devices), "os"),
        top_roles=histogram((role.name for d in devices for role in d.roles), "role"),
    )
