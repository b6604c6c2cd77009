"""
Отчёт об отброшенных ссылках.

Неразрешённые ссылки — штатный шум discovery-данных: они не прерывают
преобразование, а копятся здесь, чтобы вызывающий код мог показать
"импорт выполнен частично".
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# kind → имя счётчика
_COUNTERS = {
    "cable": "dropped_cables",
    "neighbor": "dropped_neighbors",
    "interface": "orphan_interfaces",
}


@dataclass
class DroppedReference:
    """
    Одна отброшенная запись.

    Attributes:
        kind: cable, neighbor или interface
        ref: Идентификатор записи (link-7, lldp-link-3, interface-12)
        reason: Причина
    """
    kind: str
    ref: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        """Конвертирует в словарь."""
        return {"kind": self.kind, "ref": self.ref, "reason": self.reason}


@dataclass
class AdaptationReport:
    """
    Канал диагностики одного запуска адаптера.

    Example:
        report = AdaptationReport()
        report.drop("cable", "link-4", "a-side termination has no device")
        report.is_partial  # True
    """
    dropped_cables: int = 0
    dropped_neighbors: int = 0
    orphan_interfaces: int = 0
    details: List[DroppedReference] = field(default_factory=list)

    def drop(self, kind: str, ref: str, reason: str) -> DroppedReference:
        """Регистрирует отброшенную запись."""
        counter = _COUNTERS[kind]
        setattr(self, counter, getattr(self, counter) + 1)
        entry = DroppedReference(kind=kind, ref=ref, reason=reason)
        self.details.append(entry)
        return entry

    @property
    def total_dropped(self) -> int:
        """Общее количество отброшенных записей."""
        return self.dropped_cables + self.dropped_neighbors + self.orphan_interfaces

    @property
    def is_partial(self) -> bool:
        """True если хоть что-то отброшено."""
        return self.total_dropped > 0

    def by_kind(self, kind: str) -> List[DroppedReference]:
        """Отброшенные записи одного типа."""
        return [entry for entry in self.details if entry.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация для JSON/API."""
        return {
            "droppedCables": self.dropped_cables,
            "droppedNeighbors": self.dropped_neighbors,
            "orphanInterfaces": self.orphan_interfaces,
            "isPartial": self.is_partial,
            "details": [entry.to_dict() for entry in self.details],
        }


def record_drop(
    report: Optional[AdaptationReport],
    kind: str,
    ref: str,
    reason: str,
) -> None:
    """Регистрирует drop, если отчёт передан (report=None допустим)."""
    if report is not None:
        report.drop(kind, ref, reason)
