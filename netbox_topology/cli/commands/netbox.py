"""
Команда import-netbox.

Читает снимок напрямую из NetBox API и собирает топологию.
С NetBox мы только ЧИТАЕМ данные.
"""

import logging

from ...config import config
from ...core.domain import assemble_topology
from ...netbox import NetBoxClient
from ..utils import load_lldp_file, write_result, print_summary

logger = logging.getLogger(__name__)


def cmd_import_netbox(args) -> int:
    """
    Обработчик команды import-netbox.

    Приоритет: CLI аргументы > переменные окружения > config.yaml.

    Returns:
        int: Код выхода (0 — успех, в т.ч. частичный)
    """
    neighbors = load_lldp_file(args.lldp) if args.lldp else []

    client = NetBoxClient(
        url=args.url,
        token=args.token,
        ssl_verify=False if args.no_verify_ssl else None,
    )
    payload = client.fetch_topology(lldp_neighbors=neighbors, max_workers=args.workers)

    name = args.name or config.topology.scan_name
    strict = args.strict or bool(config.topology.strict)

    result = assemble_topology(payload, name=name, strict=strict)
    write_result(result, args)
    print_summary(result)

    if result.is_partial:
        logger.warning(
            f"Импорт выполнен частично: отброшено {result.report.total_dropped} ссылок"
        )
    return 0
