"""
CLI модуль netbox_topology.

Структура:
- utils.py: общие утилиты (load_json_file, get_exporter, write_result)
- commands/: обработчики команд
  - adapt.py: adapt
  - netbox.py: import-netbox

Примеры использования:
    python -m netbox_topology adapt snapshot.json -o topology.json
    python -m netbox_topology import-netbox --lldp lldp.json --format excel
"""

import argparse
import logging
from typing import List, Optional

from ..core.exceptions import (
    AdapterError,
    ConfigError,
    NetBoxError,
    format_error_for_log,
)
from .commands import cmd_adapt, cmd_import_netbox

logger = logging.getLogger(__name__)

# Коды выхода
EXIT_OK = 0
EXIT_ADAPTER_ERROR = 1
EXIT_UPSTREAM_ERROR = 2

COMMANDS = {
    "adapt": cmd_adapt,
    "import-netbox": cmd_import_netbox,
}


def _output_arguments() -> argparse.ArgumentParser:
    """Аргументы вывода, общие для всех подкоманд."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "-o",
        "--output",
        default=None,
        help="Файл результата (default: stdout для json, папка reports для excel)",
    )
    parent.add_argument(
        "--format",
        "-f",
        choices=["json", "excel"],
        default=None,
        help="Формат вывода (default: output.default_format из config.yaml)",
    )
    parent.add_argument(
        "--name",
        default=None,
        help="Имя скана (default: topology.scan_name)",
    )
    parent.add_argument(
        "--strict",
        action="store_true",
        help="Интерфейс без устройства в снимке — ошибка, а не предупреждение",
    )
    return parent


def setup_parser() -> argparse.ArgumentParser:
    """
    Создаёт парсер аргументов командной строки.

    Returns:
        ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="netbox_topology",
        description="Построение сетевой топологии из данных NetBox (кабели + LLDP)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  %(prog)s adapt snapshot.json -o topology.json
  %(prog)s adapt snapshot.json --format excel --name "Main Office"
  %(prog)s import-netbox --url https://netbox.local --token xxx
  %(prog)s import-netbox --lldp lldp.json --strict
        """,
    )

    # Общие аргументы
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Подробный вывод (DEBUG)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Логи в формате JSON",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Путь к файлу конфигурации YAML (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Команды")
    output_args = _output_arguments()

    # === ADAPT ===
    adapt_parser = subparsers.add_parser(
        "adapt",
        parents=[output_args],
        help="Преобразовать сохранённый снимок NetBox (JSON)",
    )
    adapt_parser.add_argument(
        "file",
        help="JSON файл {devices, interfaces, cables, ip_addresses, sites, lldp_neighbors}",
    )

    # === IMPORT-NETBOX ===
    netbox_parser = subparsers.add_parser(
        "import-netbox",
        parents=[output_args],
        help="Загрузить снимок из NetBox API и построить топологию",
    )
    netbox_parser.add_argument(
        "--url",
        default=None,
        help="URL NetBox (default: NETBOX_URL или netbox.url)",
    )
    netbox_parser.add_argument(
        "--token",
        default=None,
        help="API токен (default: NETBOX_TOKEN или netbox.token)",
    )
    netbox_parser.add_argument(
        "--lldp",
        default=None,
        help="JSON файл с LLDP-соседями (формат коллектора или канонический)",
    )
    netbox_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Количество параллельных запросов (default: netbox.max_workers)",
    )
    netbox_parser.add_argument(
        "--no-verify-ssl",
        action="store_true",
        help="Не проверять SSL сертификат NetBox",
    )

    return parser


def _setup_logging(args) -> None:
    """Настройка логирования: -v / --json-logs > config.yaml > INFO."""
    from ..config import config
    from ..core.logging import LogConfig, setup_logging, setup_logging_from_config

    log_config = LogConfig.from_dict(config.logging.to_dict())
    if args.verbose:
        log_config.level = logging.DEBUG

    if args.json_logs:
        setup_logging(json_format=True, level=log_config.level)
    else:
        setup_logging_from_config(log_config)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Главная функция CLI.

    Returns:
        int: 0 — успех (в т.ч. частичный импорт), 1 — ошибка входных
             данных, 2 — ошибка NetBox или конфигурации
    """
    from ..config import load_config

    parser = setup_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        load_config(args.config)
    except ConfigError as e:
        logging.basicConfig()
        logger.error(format_error_for_log(e))
        return EXIT_UPSTREAM_ERROR

    _setup_logging(args)
    logger.debug(f"Run started (command={args.command})")

    try:
        return COMMANDS[args.command](args)
    except AdapterError as e:
        logger.error(format_error_for_log(e))
        return EXIT_ADAPTER_ERROR
    except (NetBoxError, ConfigError) as e:
        logger.error(format_error_for_log(e))
        return EXIT_UPSTREAM_ERROR
