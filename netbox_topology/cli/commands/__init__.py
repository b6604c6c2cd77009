"""
CLI команды.

- adapt.py: adapt (JSON-снимок → топология)
- netbox.py: import-netbox (NetBox API → топология)
"""

from .adapt import cmd_adapt
from .netbox import cmd_import_netbox

__all__ = [
    "cmd_adapt",
    "cmd_import_netbox",
]
