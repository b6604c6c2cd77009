"""
Базовый класс экспортера топологии.

Определяет интерфейс для всех экспортеров и общую логику:
папка отчётов, имя файла, плоские строки для табличных форматов.

Пример создания кастомного экспортера:
    class GraphMLExporter(BaseExporter):
        file_extension = ".graphml"

        def _write(self, result, file_path):
            # Логика записи в GraphML
            pass
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from datetime import datetime
from typing import List, Dict, Any, Optional

from ..core.models import DiscoveryResult

logger = logging.getLogger(__name__)


class BaseExporter(ABC):
    """
    Абстрактный базовый класс для экспортеров DiscoveryResult.

    Attributes:
        output_folder: Папка для сохранения файлов
        encoding: Кодировка файлов
    """

    # Расширение файла (переопределяется в наследниках)
    file_extension: str = ".txt"

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
    ):
        """
        Инициализация экспортера.

        Args:
            output_folder: Папка для сохранения отчётов
            encoding: Кодировка файлов
        """
        self.output_folder = Path(output_folder)
        self.encoding = encoding

    def export(
        self,
        result: Optional[DiscoveryResult],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """
        Экспортирует результат скана в файл.

        Args:
            result: Результат TopologyAssembler
            filename: Имя файла (без пути). Если None — генерируется автоматически

        Returns:
            Path: Путь к созданному файлу или None при ошибке записи
        """
        if result is None:
            logger.warning("Нет данных для экспорта")
            return None

        self._ensure_output_folder()

        if not filename:
            filename = self._generate_filename()
        if not filename.endswith(self.file_extension):
            filename += self.file_extension

        file_path = self.output_folder / filename

        try:
            self._write(result, file_path)
        except OSError as e:
            logger.error(f"Ошибка экспорта в {file_path}: {e}")
            return None

        logger.info(f"Топология экспортирована: {file_path}")
        return file_path

    @abstractmethod
    def _write(self, result: DiscoveryResult, file_path: Path) -> None:
        """
        Записывает результат в файл.

        Args:
            result: Результат скана
            file_path: Путь к файлу
        """

    def _ensure_output_folder(self) -> None:
        """Создаёт папку для отчётов если не существует."""
        if not self.output_folder.exists():
            self.output_folder.mkdir(parents=True, exist_ok=True)
            logger.info(f"Создана папка: {self.output_folder}")

    def _generate_filename(self) -> str:
        """Генерирует имя файла с текущей датой."""
        date_str = datetime.now().strftime("%Y-%m-%d_%H%M%S")
        return f"topology_{date_str}"


def device_rows(result: DiscoveryResult) -> List[Dict[str, Any]]:
    """
    Плоские строки устройств для табличных форматов.

    Args:
        result: Результат скана

    Returns:
        List[Dict]: Одна строка на устройство
    """
    rows = []
    for device in result.results.devices:
        rows.append({
            "hostname": device.hostname,
            "vendor": device.vendor,
            "model": device.model,
            "os": device.os,
            "status": device.status,
            "ip_addresses": ", ".join(device.ip_addresses),
            "site": device.site_name or "",
            "roles": ", ".join(role.name for role in device.roles),
            "interfaces": len(device.interfaces),
            "serial": device.serial_number or "",
        })
    return rows


def link_rows(result: DiscoveryResult) -> List[Dict[str, Any]]:
    """
    Плоские строки линков с именами вместо идентификаторов.

    Кабель может ссылаться на устройство вне снимка — тогда
    в строке остаётся внутренний идентификатор.
    """
    hostnames: Dict[str, str] = {}
    interface_names: Dict[str, str] = {}
    for device in result.results.devices:
        hostnames[device.id] = device.hostname
        for intf in device.interfaces:
            interface_names[intf.id] = intf.name

    rows = []
    for link in result.results.links:
        rows.append({
            "id": link.id,
            "source": hostnames.get(link.source_device_id, link.source_device_id),
            "source_interface": interface_names.get(
                link.source_interface_id, link.source_interface_id
            ),
            "target": hostnames.get(link.target_device_id, link.target_device_id),
            "target_interface": interface_names.get(
                link.target_interface_id, link.target_interface_id
            ),
            "discovery_source": link.discovery_source,
            "confidence": link.confidence,
            "is_up": "up" if link.is_up else "down",
        })
    return rows


def summary_rows(result: DiscoveryResult) -> List[Dict[str, Any]]:
    """Строки сводки: итоговые счётчики и гистограммы vendor / OS / role."""
    results = result.results
    rows = [
        {"category": "total", "name": "devices", "count": results.total_devices},
        {"category": "total", "name": "links", "count": len(results.links)},
    ]
    histograms = (
        ("vendor", results.summary.top_vendors),
        ("os", results.summary.top_os),
        ("role", results.summary.top_roles),
    )
    for label, entries in histograms:
        for entry in entries:
            rows.append({"category": label, "name": entry[label], "count": entry["count"]})

    if result.report is not None:
        rows.append({
            "category": "dropped",
            "name": "references",
            "count": result.report.total_dropped,
        })
    return rows
