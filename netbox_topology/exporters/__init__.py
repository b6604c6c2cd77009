"""
Модули экспорта топологии.

Поддерживаемые форматы:
- JSON (.json) - DiscoveryResult для слоя визуализации
- Excel (.xlsx) - листы Devices / Links / Summary с форматированием

Пример использования:
    from netbox_topology.exporters import JSONExporter, ExcelExporter

    JSONExporter(include_report=True).export(result, "topology.json")
    ExcelExporter(autofilter=True).export(result, "topology.xlsx")
"""

from .base import BaseExporter, device_rows, link_rows, summary_rows
from .json_exporter import JSONExporter
from .excel import ExcelExporter

EXPORTERS = {
    "json": JSONExporter,
    "excel": ExcelExporter,
}

__all__ = [
    "BaseExporter",
    "JSONExporter",
    "ExcelExporter",
    "EXPORTERS",
    "device_rows",
    "link_rows",
    "summary_rows",
]
