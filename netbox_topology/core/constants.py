"""
Константы преобразования NetBox → внутренняя топология.

Словари статусов, префиксы идентификаторов, фиксированные значения
LLDP-ссылок и параметры скана по умолчанию.
"""

from typing import Dict, List

# =============================================================================
# СТАТУСЫ
# =============================================================================

# NetBox device status → внутренний статус (up/down/warning/unknown)
# Всё что не в словаре: unknown (включая inventory и будущие значения)
DEVICE_STATUS_MAP: Dict[str, str] = {
    "active": "up",
    "offline": "down",
    "failed": "down",
    "decommissioning": "down",
    "planned": "warning",
    "staged": "warning",
}

# Единственный статус кабеля, при котором линк считается поднятым
CABLE_CONNECTED = "connected"

# Двухточечная шкала уверенности для кабелей
CABLE_CONFIDENCE_CONNECTED = 1.0
CABLE_CONFIDENCE_OTHER = 0.5

# =============================================================================
# ИДЕНТИФИКАТОРЫ
# =============================================================================

DEVICE_PREFIX = "device-"
INTERFACE_PREFIX = "interface-"
SITE_PREFIX = "site-"
LOCATION_PREFIX = "loc-"
ROLE_PREFIX = "role-"
VLAN_PREFIX = "vlan-"
CABLE_LINK_PREFIX = "link-"
LLDP_LINK_PREFIX = "lldp-link-"
SCAN_PREFIX = "scan-netbox-"

# =============================================================================
# ИСТОЧНИКИ ЛИНКОВ
# =============================================================================

SOURCE_CABLE = "snmp"
SOURCE_LLDP = "lldp"

LLDP_CONFIDENCE = 0.9
LLDP_TTL = 120

# =============================================================================
# ЗНАЧЕНИЯ ПО УМОЛЧАНИЮ
# =============================================================================

DEFAULT_OS = "Unknown"
DEFAULT_SCAN_NAME = "NetBox Import"
SCAN_STATUS_COMPLETED = "completed"

PROTOCOLS_USED: List[str] = ["netbox", "lldp", "snmp"]

SEED_DEVICE_DEFAULTS = {
    "id": "seed-netbox",
    "type": "cloud",
    "value": "NetBox API",
    "description": "Imported from NetBox via Slurpit",
    "is_active": True,
}

# Ключи payload, которые обязаны быть списками
REQUIRED_PAYLOAD_LISTS = ("devices", "interfaces", "cables")
OPTIONAL_PAYLOAD_LISTS = ("ip_addresses", "sites", "lldp_neighbors")
