"""
Утилиты CLI.

Общие функции для всех команд CLI: чтение JSON-файлов, выбор
экспортера, вывод результата и сводки.
"""

import json
import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import config
from ..core.exceptions import AdapterError, MalformedInputError
from ..core.models import DiscoveryResult
from ..core.domain import NeighborReportNormalizer
from ..exporters import JSONExporter, ExcelExporter

logger = logging.getLogger(__name__)


def load_json_file(path: str) -> Any:
    """
    Загружает JSON из файла.

    Args:
        path: Путь к файлу

    Returns:
        Any: Разобранный JSON

    Raises:
        AdapterError: Файл не найден
        MalformedInputError: Файл не является корректным JSON
    """
    file_path = Path(path)
    if not file_path.exists():
        raise AdapterError(f"Файл не найден: {path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedInputError(
            f"Некорректный JSON: {e}", entity="file", details={"path": str(path)},
        ) from e


def load_lldp_file(path: str) -> List[Dict[str, Any]]:
    """
    Загружает LLDP-отчёты коллектора и приводит ключи к каноническим.

    Принимает список записей или объект {"lldp_neighbors": [...]}.

    Raises:
        MalformedInputError: Структура файла не распознана
    """
    data = load_json_file(path)
    if isinstance(data, dict):
        data = data.get("lldp_neighbors")
    if not isinstance(data, list):
        raise MalformedInputError(
            "LLDP файл должен содержать список соседей", entity="lldp_neighbor",
        )

    neighbors = NeighborReportNormalizer().normalize_dicts(data)
    logger.info(f"Загружено LLDP-соседей: {len(neighbors)}")
    return neighbors


def get_exporter(format_type: str, output_folder: str):
    """
    Возвращает экспортер по типу формата.

    Args:
        format_type: Тип формата (json, excel)
        output_folder: Папка для вывода

    Returns:
        BaseExporter: Экспортер
    """
    if format_type == "excel":
        return ExcelExporter(output_folder=output_folder)
    return JSONExporter(
        output_folder=output_folder,
        indent=config.output.json_indent,
        include_metadata=False,
        include_report=bool(config.output.include_report),
    )


def write_result(result: DiscoveryResult, args) -> Optional[Path]:
    """
    Выводит результат согласно --format / --output.

    JSON без --output печатается в stdout, Excel всегда пишется в файл.

    Returns:
        Path: Путь к файлу или None при выводе в stdout
    """
    format_type = getattr(args, "format", None) or config.output.default_format or "json"
    output = getattr(args, "output", None)

    if output:
        output_path = Path(output)
        exporter = get_exporter(format_type, str(output_path.parent))
        return exporter.export(result, output_path.name)

    exporter = get_exporter(format_type, config.output.output_folder or "reports")
    if isinstance(exporter, JSONExporter):
        print(exporter.dumps(result))
        return None
    return exporter.export(result)


def print_summary(result: DiscoveryResult) -> None:
    """Выводит краткую сводку в stderr (stdout занят JSON)."""
    results = result.results
    out = sys.stderr

    print(f"\n{'='*60}", file=out)
    print(f"СВОДКА: {result.name}", file=out)
    print(f"{'='*60}", file=out)
    print(f"  Устройств: {results.total_devices}", file=out)
    print(f"  Линков:    {len(results.links)}", file=out)
    for entry in results.summary.top_vendors:
        print(f"    {entry['vendor']}: {entry['count']}", file=out)

    if result.is_partial:
        report = result.report
        print(
            f"  [!] Частичный результат: кабелей отброшено {report.dropped_cables}, "
            f"LLDP {report.dropped_neighbors}, интерфейсов {report.orphan_interfaces}",
            file=out,
        )
    print(f"{'='*60}", file=out)
