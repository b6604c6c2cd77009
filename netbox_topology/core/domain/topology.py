"""
Сборка топологии из снимка NetBox.

Конвейер:
    payload → устройства → интерфейсы (по устройствам) → кабели (Pass A)
            → LLDP (Pass B) → гистограммы → DiscoveryResult

Сборка чистая и синхронная: без I/O, без глобального состояния.
Один экземпляр TopologyAssembler можно вызывать из разных потоков.
"""

import time
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from ..constants import (
    DEFAULT_SCAN_NAME,
    SCAN_PREFIX,
    SCAN_STATUS_COMPLETED,
    SEED_DEVICE_DEFAULTS,
)
from ..exceptions import MalformedInputError
from ..logging import get_logger
from ..models import (
    CredentialSettings,
    Device,
    DiscoveryResult,
    DiscoveryResults,
    ExpansionSettings,
    Interface,
    ScanOptions,
    SeedDevice,
    TopologyPayload,
)
from .adapters import adapt_device, adapt_interface, adapt_site
from .links import infer_cable_links, infer_lldp_links
from .report import AdaptationReport
from .summary import build_summary

logger = get_logger(__name__)


class TopologyAssembler:
    """
    Оркестратор преобразования NetBox → DiscoveryResult.

    Attributes:
        strict: Интерфейс без устройства в том же payload — ошибка
                (MalformedInputError), а не запись в отчёте

    Example:
        assembler = TopologyAssembler()
        result = assembler.assemble(payload, "Main Office")
        if result.is_partial:
            print(result.report.to_dict())
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def assemble(
        self,
        payload: Union[Dict[str, Any], TopologyPayload],
        name: str = DEFAULT_SCAN_NAME,
    ) -> DiscoveryResult:
        """
        Преобразует полный снимок NetBox в DiscoveryResult.

        Args:
            payload: Словарь {devices, interfaces, cables, ip_addresses,
                     sites, lldp_neighbors?} или TopologyPayload
            name: Имя скана

        Returns:
            DiscoveryResult: status=completed, progress=100

        Raises:
            MalformedInputError: Нарушена структура обязательных полей
        """
        data = TopologyPayload.from_dict(payload)
        report = AdaptationReport()
        scan_logger = logger.bind(operation="assemble", scan=name)

        devices = [adapt_device(record) for record in data.devices]
        self._attach_interfaces(devices, data.interfaces, report)

        links = infer_cable_links(data.cables, report, devices)
        links.extend(infer_lldp_links(data.lldp_neighbors, devices, report))

        sites = [adapt_site(record) for record in data.sites]

        result = self._package(name, devices, links, report)
        result.sites = sites

        scan_logger.info(
            f"Топология собрана: устройств={len(devices)}, линков={len(links)}, "
            f"отброшено={report.total_dropped}",
        )
        return result

    def _attach_interfaces(
        self,
        devices: List[Device],
        upstream_interfaces: List[Dict[str, Any]],
        report: AdaptationReport,
    ) -> None:
        """Группирует интерфейсы по device_id и привязывает к устройствам."""
        by_device: Dict[str, List[Interface]] = defaultdict(list)
        for record in upstream_interfaces:
            intf = adapt_interface(record)
            by_device[intf.device_id].append(intf)

        known = set()
        for device in devices:
            device.interfaces = by_device.get(device.id, [])
            known.add(device.id)

        for owner, orphans in by_device.items():
            if owner in known:
                continue
            for intf in orphans:
                reason = f"owning device {owner} not in payload"
                if self.strict:
                    raise MalformedInputError(
                        "Interface references unknown device",
                        entity="interface",
                        field="device",
                        record_id=intf.if_index,
                    )
                logger.warning(
                    "Интерфейс без устройства", operation="assemble",
                    kind="interface", ref=intf.id, reason=reason,
                )
                report.drop("interface", intf.id, reason)

    def _package(
        self,
        name: str,
        devices: List[Device],
        links: list,
        report: AdaptationReport,
    ) -> DiscoveryResult:
        """Упаковывает устройства и линки в DiscoveryResult."""
        now = datetime.now(timezone.utc)
        results = DiscoveryResults(
            total_devices=len(devices),
            new_devices=len(devices),
            updated_devices=0,
            failed_devices=0,
            devices=devices,
            links=links,
            errors=[],
            summary=build_summary(devices),
        )
        return DiscoveryResult(
            id=f"{SCAN_PREFIX}{int(time.time() * 1000)}",
            name=name,
            status=SCAN_STATUS_COMPLETED,
            start_time=now,
            end_time=now,
            progress=100,
            seed_devices=[SeedDevice(**SEED_DEVICE_DEFAULTS)],
            expansion_settings=ExpansionSettings(max_devices=len(devices)),
            credential_settings=CredentialSettings(),
            scan_options=ScanOptions(),
            results=results,
            created_at=now,
            updated_at=now,
            report=report,
        )


def assemble_topology(
    payload: Union[Dict[str, Any], TopologyPayload],
    name: str = DEFAULT_SCAN_NAME,
    strict: bool = False,
) -> DiscoveryResult:
    """
    Собирает топологию одним вызовом.

    Args:
        payload: Снимок NetBox
        name: Имя скана
        strict: Интерфейсы без устройства — ошибка

    Returns:
        DiscoveryResult
    """
    return TopologyAssembler(strict=strict).assemble(payload, name)
