"""
NetBox клиент для получения снимка топологии.

Читает устройства, интерфейсы, кабели, IP-адреса и сайты через pynetbox
и отдаёт их одним payload для TopologyAssembler. Запросы независимы,
поэтому выполняются параллельно.

Пример использования:
    from netbox_topology.netbox import NetBoxClient

    client = NetBoxClient(url="https://netbox.example.com", token="xxx")
    payload = client.fetch_topology()
    result = assemble_topology(payload)
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Sequence

import pynetbox
import requests

from ..config import config
from ..core.exceptions import ConfigError, NetBoxAPIError, NetBoxConnectionError
from .session import NetBoxSession

logger = logging.getLogger(__name__)

# Ключ payload → (приложение, endpoint) pynetbox
ENDPOINTS: Dict[str, tuple] = {
    "devices": ("dcim", "devices"),
    "interfaces": ("dcim", "interfaces"),
    "cables": ("dcim", "cables"),
    "ip_addresses": ("ipam", "ip_addresses"),
    "sites": ("dcim", "sites"),
}


class NetBoxClient:
    """
    Клиент NetBox API (только чтение).

    Attributes:
        url: URL NetBox сервера
        api: Объект pynetbox.api

    Example:
        client = NetBoxClient()  # url/token из config.yaml или NETBOX_URL/NETBOX_TOKEN
        devices = client.get_devices()
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        ssl_verify: Optional[bool] = None,
        timeout: Optional[int] = None,
    ):
        """
        Инициализация клиента NetBox.

        Args:
            url: URL NetBox сервера (или config.netbox.url / NETBOX_URL)
            token: API токен (или config.netbox.token / NETBOX_TOKEN)
            ssl_verify: Проверять SSL сертификат
            timeout: Таймаут HTTP-запроса в секундах

        Raises:
            ConfigError: URL или токен не указаны
        """
        self.url = url or config.netbox.url
        token = token or config.netbox.token

        if not self.url:
            raise ConfigError(
                "NetBox URL не указан. Укажите url или установите NETBOX_URL",
                key="netbox.url",
            )
        if not token:
            raise ConfigError(
                "NetBox токен не указан. Укажите token или установите NETBOX_TOKEN",
                key="netbox.token",
            )

        if ssl_verify is None:
            ssl_verify = config.netbox.verify_ssl
        if timeout is None:
            timeout = config.netbox.timeout

        self.api = pynetbox.api(self.url, token=token)
        self.api.http_session = NetBoxSession(timeout=timeout, verify=ssl_verify)

        logger.info(f"NetBox клиент инициализирован: {self.url}")

    def _fetch(self, key: str) -> List[Dict[str, Any]]:
        """
        Выбирает все записи endpoint (пагинация внутри pynetbox).

        Args:
            key: Ключ payload из ENDPOINTS

        Returns:
            List[Dict]: Записи как вложенные словари

        Raises:
            NetBoxAPIError: NetBox вернул ошибку
            NetBoxConnectionError: Нет соединения / таймаут
        """
        app_name, endpoint_name = ENDPOINTS[key]
        endpoint_path = f"{app_name}/{endpoint_name}"
        endpoint = getattr(getattr(self.api, app_name), endpoint_name)

        try:
            records = list(endpoint.all())
        except pynetbox.RequestError as e:
            status_code = getattr(getattr(e, "req", None), "status_code", None)
            raise NetBoxAPIError(
                f"Ошибка NetBox API: {e}",
                url=self.url,
                status_code=status_code,
                endpoint=endpoint_path,
            ) from e
        except pynetbox.ContentError as e:
            raise NetBoxAPIError(
                f"NetBox вернул не JSON: {e}", url=self.url, endpoint=endpoint_path,
            ) from e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise NetBoxConnectionError(
                f"Нет соединения с NetBox: {e}", url=self.url,
            ) from e

        result = [dict(record) for record in records]
        logger.debug(f"Получено {endpoint_path}: {len(result)}")
        return result

    def get_devices(self) -> List[Dict[str, Any]]:
        """Все устройства (/api/dcim/devices/)."""
        return self._fetch("devices")

    def get_interfaces(self) -> List[Dict[str, Any]]:
        """Все интерфейсы (/api/dcim/interfaces/)."""
        return self._fetch("interfaces")

    def get_cables(self) -> List[Dict[str, Any]]:
        """Все кабели (/api/dcim/cables/)."""
        return self._fetch("cables")

    def get_ip_addresses(self) -> List[Dict[str, Any]]:
        """Все IP-адреса (/api/ipam/ip-addresses/)."""
        return self._fetch("ip_addresses")

    def get_sites(self) -> List[Dict[str, Any]]:
        """Все сайты (/api/dcim/sites/)."""
        return self._fetch("sites")

    def fetch_topology(
        self,
        lldp_neighbors: Optional[Sequence[Dict[str, Any]]] = None,
        max_workers: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Получает полный снимок для адаптера.

        Все endpoint читаются параллельно; payload отдаётся только целиком.
        NetBox не хранит LLDP, поэтому соседи передаются отдельно
        (например, из коллектора или файла Slurpit).

        Args:
            lldp_neighbors: LLDP-отчёты для Pass B
            max_workers: Количество потоков (по умолчанию config.netbox.max_workers)

        Returns:
            Dict: {devices, interfaces, cables, ip_addresses, sites, lldp_neighbors}

        Raises:
            NetBoxAPIError, NetBoxConnectionError: Ошибка любого из запросов
        """
        workers = max_workers or config.netbox.max_workers or len(ENDPOINTS)
        payload: Dict[str, Any] = {}

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self._fetch, key): key for key in ENDPOINTS}
            for future in as_completed(futures):
                payload[futures[future]] = future.result()

        payload["lldp_neighbors"] = list(lldp_neighbors or [])

        logger.info(
            f"Снимок NetBox получен: устройств={len(payload['devices'])}, "
            f"интерфейсов={len(payload['interfaces'])}, кабелей={len(payload['cables'])}"
        )
        return payload
