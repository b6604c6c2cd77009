"""
Команда adapt.

Преобразует сохранённый снимок NetBox (JSON) в DiscoveryResult.
"""

import logging

from ...config import config
from ...core.domain import assemble_topology
from ..utils import load_json_file, write_result, print_summary

logger = logging.getLogger(__name__)


def cmd_adapt(args) -> int:
    """
    Обработчик команды adapt.

    Файл содержит объект {devices, interfaces, cables, ip_addresses,
    sites, lldp_neighbors?} в формате ответов NetBox API.

    Returns:
        int: Код выхода (0 — успех, в т.ч. частичный)
    """
    payload = load_json_file(args.file)

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
