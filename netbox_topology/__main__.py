"""
Точка входа для запуска модуля.

Позволяет запускать утилиту как:
    python -m netbox_topology [команда] [опции]

Примеры:
    python -m netbox_topology adapt snapshot.json
    python -m netbox_topology import-netbox --lldp lldp.json --format excel
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
