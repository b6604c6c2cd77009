"""
Нормализация LLDP/CDP отчётов о соседях.

Коллекторы и парсеры (NTC Templates, Slurpit, собственные сборщики)
называют одни и те же поля по-разному. Здесь приводятся только КЛЮЧИ:
значения (hostname, имя порта) не меняются, сопоставление с NetBox
остаётся точным.
"""

from typing import Any, Dict, List, Sequence

from ..exceptions import MalformedInputError
from ..models import NeighborReport


# Маппинг альтернативных ключей к каноническим ключам отчёта
KEY_MAPPING: Dict[str, str] = {
    # Локальное устройство
    "local_device": "local_device",
    "hostname": "local_device",
    "local_hostname": "local_device",
    "device": "local_device",
    # Локальный интерфейс
    "local_interface": "local_interface",
    "local_intf": "local_interface",
    "local_port": "local_interface",
    # Сосед
    "remote_device": "remote_device",
    "remote_hostname": "remote_device",
    "neighbor": "remote_device",
    "neighbor_name": "remote_device",
    "system_name": "remote_device",
    "device_id": "remote_device",
    # Порт соседа
    "remote_interface": "remote_interface",
    "remote_port": "remote_interface",
    "neighbor_interface": "remote_interface",
    "neighbor_port_id": "remote_interface",
    "port_id": "remote_interface",
    # Платформа
    "remote_platform": "remote_platform",
    "platform": "remote_platform",
    "hardware": "remote_platform",
    "system_description": "remote_platform",
    # Описание порта
    "remote_port_description": "remote_port_description",
    "port_description": "remote_port_description",
}


class NeighborReportNormalizer:
    """
    Приводит сырые записи соседей к NeighborReport.

    Если несколько исходных ключей маппятся в один канонический, побеждает
    первый непустой (канонический ключ всегда в приоритете).

    Example:
        normalizer = NeighborReportNormalizer()
        raw = [{"hostname": "core-sw-01", "local_intf": "Gi1/0/1",
                "neighbor": "access-sw-01", "neighbor_interface": "Gi1/0/1"}]
        reports = normalizer.normalize(raw)
    """

    def normalize(self, data: Sequence[Dict[str, Any]]) -> List[NeighborReport]:
        """
        Нормализует список сырых записей.

        Args:
            data: Сырые записи соседей

        Returns:
            List[NeighborReport]

        Raises:
            MalformedInputError: Запись не словарь
        """
        return [NeighborReport.from_dict(row) for row in self.normalize_dicts(data)]

    def normalize_dicts(self, data: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Нормализует ключи, оставляя записи словарями.

        Args:
            data: Сырые записи соседей

        Returns:
            List[Dict]: Записи с каноническими ключами
        """
        result = []
        for row in data:
            if not isinstance(row, dict):
                raise MalformedInputError(
                    "Neighbor report must be an object", entity="lldp_neighbor",
                )
            result.append(self._normalize_row(row))
        return result

    def _normalize_row(self, row: Dict[str, Any]) -> Dict[str, Any]:
        normalized: Dict[str, Any] = {}

        # Канонические ключи первыми, чтобы алиасы их не перезаписали
        for key, value in row.items():
            if key.lower() == KEY_MAPPING.get(key.lower()) and value not in (None, ""):
                normalized[key.lower()] = value

        for key, value in row.items():
            target = KEY_MAPPING.get(key.lower())
            if target is None or value in (None, ""):
                continue
            normalized.setdefault(target, value)

        return normalized
