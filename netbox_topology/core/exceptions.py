"""
Типизированные исключения для NetBox Topology.

Иерархия:
    TopologyError (базовый)
    ├── AdapterError (преобразование данных)
    │   └── MalformedInputError (нет обязательного поля / неверная структура)
    ├── NetBoxError (получение данных из NetBox API)
    │   ├── NetBoxConnectionError (подключение, таймаут)
    │   └── NetBoxAPIError (ошибка API, HTTP код)
    └── ConfigError (конфигурация)

Неразрешённые ссылки (кабель или LLDP-сосед на неизвестное устройство)
исключением НЕ являются — они попадают в AdaptationReport.

Пример использования:
    from netbox_topology.core.exceptions import MalformedInputError, NetBoxError

    try:
        result = assemble_topology(payload)
    except MalformedInputError as e:
        logger.error(f"Схема данных не совпадает: {e}")
    except NetBoxError as e:
        logger.error(f"NetBox недоступен: {e}")
"""

from typing import Optional, Any


class TopologyError(Exception):
    """
    Базовое исключение для всех ошибок NetBox Topology.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Adapter Errors ===

class AdapterError(TopologyError):
    """Ошибка логики преобразования upstream-данных."""
    pass


class MalformedInputError(AdapterError):
    """
    Обязательное поле upstream-записи отсутствует или имеет неверный тип.

    Фатально для всего вызова assemble: частичный результат не возвращается.

    Attributes:
        entity: Тип записи (device, interface, cable, payload)
        field: Поле с ошибкой
        record_id: ID upstream-записи (если известен)

    Пример:
        raise MalformedInputError("Missing required field", entity="device",
                                  field="device_type", record_id=12)
    """

    def __init__(
        self,
        message: str,
        entity: Optional[str] = None,
        field: Optional[str] = None,
        record_id: Optional[Any] = None,
        details: Optional[dict] = None,
    ):
        self.entity = entity
        self.field = field
        self.record_id = record_id
        details = details or {}
        if entity:
            details["entity"] = entity
        if field:
            details["field"] = field
        if record_id is not None:
            details["record_id"] = record_id
        super().__init__(message, details)


# === NetBox Errors ===

class NetBoxError(TopologyError):
    """
    Базовая ошибка получения данных из NetBox API.

    Attributes:
        url: URL NetBox
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.url = url
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)


# Ошибки сетевого сборщика отличаются от ошибок адаптера по типу
UpstreamFetchError = NetBoxError


class NetBoxConnectionError(NetBoxError):
    """
    Ошибка подключения к NetBox API (отказ соединения, таймаут).

    Пример:
        raise NetBoxConnectionError("Connection refused", url="https://netbox.local")
    """
    pass


class NetBoxAPIError(NetBoxError):
    """
    Ошибка при вызове NetBox API.

    Attributes:
        status_code: HTTP код ответа
        endpoint: API endpoint

    Пример:
        raise NetBoxAPIError("Forbidden", status_code=403, endpoint="dcim/devices")
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        details = details or {}
        if status_code:
            details["status_code"] = status_code
        if endpoint:
            details["endpoint"] = endpoint
        super().__init__(message, url, details)


# === Config Errors ===

class ConfigError(TopologyError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("NetBox URL не указан", key="netbox.url")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


# === Utility Functions ===

def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, TopologyError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"

