"""
HTTP-сессия для NetBox API.

requests.Session с таймаутом по умолчанию и повтором при HTTP 429
(rate limit NetBox / reverse proxy). pynetbox использует её как
api.http_session.
"""

import logging
import time
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
MAX_RETRIES_429 = 3
DEFAULT_RETRY_DELAY = 2


class NetBoxSession(requests.Session):
    """
    Сессия с таймаутом и retry на 429.

    Attributes:
        timeout: Таймаут запроса в секундах (если не передан явно)
        max_retries: Сколько раз повторять запрос при 429

    Example:
        session = NetBoxSession(timeout=60, verify=False)
        api.http_session = session
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        verify: bool = True,
        max_retries: int = MAX_RETRIES_429,
    ):
        super().__init__()
        self.timeout = timeout
        self.verify = verify
        self.max_retries = max_retries

    def request(self, method: str, url: str, *args: Any, **kwargs: Any) -> requests.Response:
        """
        Выполняет запрос, повторяя его при HTTP 429.

        Задержка берётся из заголовка Retry-After, иначе растёт линейно:
        DEFAULT_RETRY_DELAY * номер попытки.
        """
        kwargs.setdefault("timeout", self.timeout)

        attempt = 0
        while True:
            response = super().request(method, url, *args, **kwargs)
            if response.status_code != 429 or attempt >= self.max_retries:
                return response

            attempt += 1
            delay = self._retry_delay(response, attempt)
            logger.warning(
                f"NetBox вернул 429, повтор {attempt}/{self.max_retries} через {delay}с: {url}"
            )
            time.sleep(delay)

    @staticmethod
    def _retry_delay(response: requests.Response, attempt: int) -> float:
        """Задержка из Retry-After (секунды) или DEFAULT_RETRY_DELAY * attempt."""
        value = response.headers.get("Retry-After") if response.headers else None
        try:
            return max(float(value), 0.0)
        except (TypeError, ValueError):
            return DEFAULT_RETRY_DELAY * attempt
