"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- load_fixture: Загрузка JSON-снимков из tests/fixtures
- topology_payload: Снимок NetBox 5 устройств / 7 интерфейсов / 4 кабеля / 4 LLDP
- make_device, make_interface, make_cable: Минимальные upstream-записи
"""

import copy
import json

import pytest
from pathlib import Path
from typing import Dict, Any, Optional


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Возвращает путь к директории fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def load_fixture(fixtures_dir):
    """
    Fixture для загрузки JSON из файлов.

    Usage:
        payload = load_fixture("netbox", "topology.json")
    """
    def _load(source: str, filename: str) -> Any:
        fixture_path = fixtures_dir / source / filename
        if not fixture_path.exists():
            pytest.skip(f"Fixture не найден: {fixture_path}")
        return json.loads(fixture_path.read_text(encoding="utf-8"))
    return _load


@pytest.fixture
def topology_payload(load_fixture) -> Dict[str, Any]:
    """
    Снимок NetBox: core-sw-01, access-sw-01/02, fw-01, server-01.

    Каждый кабель продублирован LLDP-отчётом (4 + 4 линка).
    """
    return load_fixture("netbox", "topology.json")


@pytest.fixture
def make_device():
    """
    Фабрика upstream-устройства NetBox.

    Usage:
        device = make_device(1, "core-sw-01", vendor="Cisco")
    """
    def _make(
        nb_id: int,
        name: str,
        vendor: str = "Cisco",
        model: str = "Catalyst 9300",
        role: str = "Access Switch",
        role_id: int = 1,
        platform: Optional[str] = "Cisco IOS",
        status: str = "active",
        **extra: Any,
    ) -> Dict[str, Any]:
        device = {
            "id": nb_id,
            "name": name,
            "display": name,
            "device_type": {
                "id": 1,
                "model": model,
                "manufacturer": {"id": 1, "name": vendor, "slug": vendor.lower()},
            },
            "role": {"id": role_id, "name": role, "display": role},
            "status": {"value": status, "label": status.capitalize()},
            "tags": [],
            "created": "2024-01-01T00:00:00Z",
            "last_updated": "2025-01-15T10:30:00Z",
        }
        if platform is not None:
            device["platform"] = {"id": 1, "name": platform}
        device.update(extra)
        return device
    return _make


@pytest.fixture
def make_interface():
    """Фабрика upstream-интерфейса NetBox."""
    def _make(nb_id: int, device_id: int, name: str, **extra: Any) -> Dict[str, Any]:
        interface = {
            "id": nb_id,
            "name": name,
            "device": {"id": device_id, "name": f"device-{device_id}"},
            "enabled": True,
            "created": "2024-01-01T00:00:00Z",
            "last_updated": "2025-01-15T10:30:00Z",
        }
        interface.update(extra)
        return interface
    return _make


@pytest.fixture
def make_cable():
    """
    Фабрика upstream-кабеля NetBox.

    a/b — пары (interface_id, device_id); None вместо device_id даёт
    терминацию без устройства.
    """
    def _make(
        nb_id: int,
        a: tuple,
        b: tuple,
        status: str = "connected",
    ) -> Dict[str, Any]:
        def termination(intf_id, dev_id):
            obj = {"id": intf_id, "name": f"port-{intf_id}"}
            if dev_id is not None:
                obj["device"] = {"id": dev_id, "name": f"device-{dev_id}"}
            return {"object_type": "dcim.interface", "object": obj}

        return {
            "id": nb_id,
            "a_terminations": [termination(*a)],
            "b_terminations": [termination(*b)],
            "status": {"value": status, "label": status.capitalize()},
            "created": "2024-01-01T00:00:00Z",
            "last_updated": "2025-01-15T10:30:00Z",
        }
    return _make


@pytest.fixture
def minimal_payload(make_device, make_interface, make_cable) -> Dict[str, Any]:
    """Два устройства, по интерфейсу, один кабель и один LLDP-отчёт."""
    return copy.deepcopy({
        "devices": [
            make_device(1, "core-sw-01", role="Core Switch"),
            make_device(2, "access-sw-01", role_id=2),
        ],
        "interfaces": [
            make_interface(10, 1, "Gi1/0/1"),
            make_interface(20, 2, "Gi0/1"),
        ],
        "cables": [make_cable(100, (10, 1), (20, 2))],
        "ip_addresses": [],
        "sites": [],
        "lldp_neighbors": [
            {
                "local_device": "core-sw-01",
                "local_interface": "Gi1/0/1",
                "remote_device": "access-sw-01",
                "remote_interface": "Gi0/1",
            }
        ],
    })


def pytest_configure(config):
    """Регистрация custom markers для pytest."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (быстрые, без внешних зависимостей)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (требуют fixtures)"
    )
    config.addinivalue_line(
        "markers", "netbox: NetBox client tests (требуют mock NetBox API)"
    )
    config.addinivalue_line(
        "markers", "api: HTTP API tests (FastAPI TestClient)"
    )
