"""
Загрузчик конфигурации из config.yaml.

Предоставляет доступ к настройкам через точку:
    config.netbox.url
    config.topology.scan_name
    config.output.output_folder

Приоритет: аргументы CLI/API > переменные окружения > config.yaml > defaults.
"""

import copy
import os
import logging
from typing import Any, Optional

import yaml

from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Путь к файлу конфигурации рядом с пакетом
CONFIG_FILE = os.path.join(os.path.dirname(__file__), "config.yaml")

DEFAULTS = {
    "netbox": {
        "url": "",
        "token": "",
        "verify_ssl": True,
        "timeout": 30,
        "max_workers": 5,
    },
    "topology": {
        "scan_name": "NetBox Import",
        "strict": False,
    },
    "output": {
        "output_folder": "reports",
        "default_format": "json",
        "json_indent": 2,
        "include_report": True,
    },
    "logging": {
        "level": "INFO",
        "json_format": False,
        "console": True,
        "file_path": None,
        "rotation": "size",
        "max_bytes": 10 * 1024 * 1024,
        "backup_count": 5,
    },
}


class ConfigSection:
    """Секция конфигурации с доступом через точку."""

    def __init__(self, data: dict = None):
        self._data = data if data is not None else {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Получить значение с дефолтом."""
        return self._data.get(key, default)

    def to_dict(self) -> dict:
        """Копия данных секции."""
        return copy.deepcopy(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data})"


class Config:
    """
    Главный класс конфигурации.

    Пример:
        config.netbox.url          # "https://netbox.example.com"
        config.topology.strict     # False
        config.output.json_indent  # 2
    """

    def __init__(self, config_file: Optional[str] = None):
        self._data = self._get_defaults()
        self.config_file: Optional[str] = None
        self._load_yaml(config_file)
        self._load_env()

    def _get_defaults(self) -> dict:
        """Значения по умолчанию."""
        return copy.deepcopy(DEFAULTS)

    def _load_yaml(self, config_file: Optional[str] = None) -> None:
        """
        Загружает настройки из YAML файла.

        Raises:
            ConfigError: Явно указанный файл не найден или не парсится
        """
        explicit = config_file is not None
        if not config_file:
            search_paths = [
                CONFIG_FILE,
                "config.yaml",
                "config.yml",
                ".netbox_topology.yaml",
            ]
            for path in search_paths:
                if os.path.exists(path):
                    config_file = path
                    break

        if not config_file:
            return
        if not os.path.exists(config_file):
            if explicit:
                raise ConfigError("Файл конфигурации не найден", config_file=config_file)
            return

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
            if not isinstance(yaml_data, dict):
                raise ConfigError(
                    "Корень конфигурации должен быть словарём", config_file=config_file,
                )
        except (yaml.YAMLError, ConfigError) as e:
            if explicit:
                if isinstance(e, ConfigError):
                    raise
                raise ConfigError(f"Ошибка разбора YAML: {e}", config_file=config_file) from e
            # Найденный автоматически файл не должен ломать импорт пакета
            logger.warning(f"Ошибка чтения {config_file}: {e}")
            return

        self._merge_dict(self._data, yaml_data)
        self.config_file = config_file
        logger.debug(f"Конфигурация загружена из {config_file}")

    def _load_env(self) -> None:
        """Загружает настройки из переменных окружения."""
        if os.getenv("NETBOX_URL"):
            self._data["netbox"]["url"] = os.getenv("NETBOX_URL")
        if os.getenv("NETBOX_TOKEN"):
            self._data["netbox"]["token"] = os.getenv("NETBOX_TOKEN")

    def _merge_dict(self, base: dict, override: dict) -> None:
        """Рекурсивно мержит словари."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_dict(base[key], value)
            else:
                base[key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def reload(self, config_file: Optional[str] = None) -> None:
        """Перезагружает конфигурацию."""
        self._data = self._get_defaults()
        self._load_yaml(config_file)
        self._load_env()


# Глобальный экземпляр
config = Config()


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Перезагружает глобальную конфигурацию из файла.

    Args:
        config_file: Путь к YAML файлу (опционально)

    Returns:
        Config: Объект конфигурации
    """
    config.reload(config_file)
    return config
