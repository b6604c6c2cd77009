"""
Excel экспортер топологии.

Создаёт книгу с листами:
- Devices: устройства (статус подсвечивается цветом)
- Links: линки из кабелей и LLDP (up/down подсвечивается)
- Summary: счётчики и гистограммы vendor / OS / role

Пример использования:
    exporter = ExcelExporter(autofilter=True, freeze_header=True)
    exporter.export(result, "topology.xlsx")
"""

import logging
from pathlib import Path
from typing import List, Dict, Any, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from ..core.models import DiscoveryResult
from .base import BaseExporter, device_rows, link_rows, summary_rows

logger = logging.getLogger(__name__)


# Предустановленные цвета
COLORS = {
    "header_bg": "4472C4",  # Синий фон заголовка
    "header_font": "FFFFFF",  # Белый текст заголовка
    "up": "C6EFCE",  # Зелёный
    "down": "FFC7CE",  # Красный
    "warning": "FFEB9C",  # Жёлтый
}

# Колонки со встроенной подсветкой: значение → ключ COLORS
STATUS_COLUMNS = {
    "status": {"up": "up", "down": "down", "warning": "warning"},
    "is_up": {"up": "up", "down": "down"},
}


class ExcelExporter(BaseExporter):
    """
    Экспортер топологии в Excel с форматированием.

    Attributes:
        autofilter: Включить автофильтр
        freeze_header: Закрепить строку заголовка
        auto_width: Автоподбор ширины колонок
        color_rules: Дополнительные правила {column: {value: color_hex}}

    Example:
        exporter = ExcelExporter(
            color_rules={"discovery_source": {"lldp": "DDEBF7"}}
        )
    """

    file_extension = ".xlsx"

    def __init__(
        self,
        output_folder: str = "reports",
        autofilter: bool = True,
        freeze_header: bool = True,
        auto_width: bool = True,
        color_rules: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        super().__init__(output_folder, encoding="utf-8")

        self.autofilter = autofilter
        self.freeze_header = freeze_header
        self.auto_width = auto_width
        self.color_rules = color_rules or {}

        self._init_styles()

    def _init_styles(self) -> None:
        """Инициализирует стили для Excel."""
        self.header_font = Font(bold=True, color=COLORS["header_font"])
        self.header_fill = PatternFill(
            start_color=COLORS["header_bg"],
            end_color=COLORS["header_bg"],
            fill_type="solid",
        )
        self.header_alignment = Alignment(horizontal="center", vertical="center")

        thin_border = Side(style="thin", color="D9D9D9")
        self.cell_border = Border(
            left=thin_border, right=thin_border, top=thin_border, bottom=thin_border
        )

    def _write(self, result: DiscoveryResult, file_path: Path) -> None:
        """
        Записывает результат в Excel файл (три листа).

        Args:
            result: Результат скана
            file_path: Путь к файлу
        """
        wb = Workbook()
        sheets = (
            ("Devices", device_rows(result)),
            ("Links", link_rows(result)),
            ("Summary", summary_rows(result)),
        )

        ws = wb.active
        for index, (title, rows) in enumerate(sheets):
            if index:
                ws = wb.create_sheet()
            ws.title = title
            self._write_sheet(ws, rows)

        wb.save(file_path)
        logger.debug(
            f"Excel записан: {len(sheets[0][1])} устройств, {len(sheets[1][1])} линков"
        )

    def _write_sheet(self, ws, rows: List[Dict[str, Any]]) -> None:
        """Заголовок, данные и форматирование одного листа."""
        if not rows:
            return

        columns = list(rows[0].keys())
        self._write_header(ws, columns)
        self._write_data(ws, rows, columns)

        if self.auto_width:
            self._adjust_column_widths(ws, columns, rows)
        if self.autofilter:
            ws.auto_filter.ref = ws.dimensions
        if self.freeze_header:
            ws.freeze_panes = "A2"

    def _write_header(self, ws, columns: List[str]) -> None:
        """Записывает и форматирует заголовок."""
        for col_idx, column in enumerate(columns, start=1):
            cell = ws.cell(row=1, column=col_idx, value=column.upper())
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.header_alignment
            cell.border = self.cell_border

    def _write_data(
        self,
        ws,
        rows: List[Dict[str, Any]],
        columns: List[str],
    ) -> None:
        """Записывает данные с применением цветовых правил."""
        for row_idx, row in enumerate(rows, start=2):
            for col_idx, column in enumerate(columns, start=1):
                value = row.get(column, "")
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                cell.border = self.cell_border
                self._apply_color_rules(cell, column, value)

    def _apply_color_rules(self, cell, column: str, value: Any) -> None:
        """
        Применяет цветовые правила к ячейке.

        Кастомные правила имеют приоритет над встроенными.
        """
        str_value = str(value).lower()
        column = column.lower()

        color = self.color_rules.get(column, {}).get(str_value)
        if color is None:
            color_key = STATUS_COLUMNS.get(column, {}).get(str_value)
            color = COLORS.get(color_key) if color_key else None
        if color is None:
            return

        cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")

    def _adjust_column_widths(
        self,
        ws,
        columns: List[str],
        rows: List[Dict[str, Any]],
    ) -> None:
        """Автоподбор ширины колонок (максимум 50)."""
        for col_idx, column in enumerate(columns, start=1):
            max_length = len(column)
            for row in rows:
                max_length = max(max_length, len(str(row.get(column, ""))))
            ws.column_dimensions[get_column_letter(col_idx)].width = min(max_length + 2, 50)
