"""
JSON экспортер.

Сохраняет DiscoveryResult в том виде, в котором его читает слой
визуализации (camelCase, ISO-8601).

Пример использования:
    exporter = JSONExporter(indent=2, include_report=True)
    exporter.export(result, "topology.json")
"""

import json
import logging
from pathlib import Path
from datetime import datetime, date, timezone
from typing import Dict, Any, Optional

from ..core.models import DiscoveryResult
from .base import BaseExporter

logger = logging.getLogger(__name__)


class JSONExporter(BaseExporter):
    """
    Экспортер топологии в JSON формат.

    Attributes:
        indent: Отступ для форматирования (None = компактный)
        ensure_ascii: Экранировать не-ASCII символы
        include_metadata: Обернуть результат в {"metadata", "data"}
        include_report: Добавить отчёт адаптера (отброшенные ссылки)

    Example:
        # Компактный JSON без обёртки, как его читает UI
        exporter = JSONExporter(indent=None, include_metadata=False)
    """

    file_extension = ".json"

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
        indent: Optional[int] = 2,
        ensure_ascii: bool = False,
        include_metadata: bool = True,
        include_report: bool = False,
        sort_keys: bool = False,
    ):
        super().__init__(output_folder, encoding)

        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.include_metadata = include_metadata
        self.include_report = include_report
        self.sort_keys = sort_keys

    def build(self, result: DiscoveryResult) -> Dict[str, Any]:
        """
        Формирует выходную структуру.

        Args:
            result: Результат скана

        Returns:
            Dict: result.to_dict() или {"metadata": ..., "data": ...}
        """
        data = result.to_dict(include_report=self.include_report)
        if not self.include_metadata:
            return data

        return {
            "metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "total_devices": result.results.total_devices,
                "total_links": len(result.results.links),
                "is_partial": result.is_partial,
            },
            "data": data,
        }

    def dumps(self, result: DiscoveryResult) -> str:
        """Сериализует результат в строку (для вывода в stdout)."""
        return json.dumps(
            self.build(result),
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
            sort_keys=self.sort_keys,
            default=self._json_serializer,
        )

    def _write(self, result: DiscoveryResult, file_path: Path) -> None:
        """
        Записывает результат в JSON файл.

        Args:
            result: Результат скана
            file_path: Путь к файлу
        """
        with open(file_path, "w", encoding=self.encoding) as f:
            f.write(self.dumps(result))

        logger.debug(
            f"JSON записан: {result.results.total_devices} устройств, "
            f"{len(result.results.links)} линков"
        )

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """
        Сериализатор для нестандартных типов данных.

        Модели уже приведены через to_dict(); здесь остаются даты и
        множества из upstream-словарей.
        """
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)

        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
