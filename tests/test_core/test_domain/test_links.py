"""
Tests for link inference.

Pass A — кабели NetBox, Pass B — LLDP-отчёты.
"""

import pytest

from netbox_topology.core.domain import (
    AdaptationReport,
    adapt_cable,
    adapt_device,
    adapt_interface,
    endpoint_index,
    infer_cable_links,
    infer_lldp_links,
)
from netbox_topology.core.exceptions import MalformedInputError
from netbox_topology.core.models import NeighborReport


@pytest.fixture
def devices(make_device, make_interface):
    """core-sw-01 (Gi1/0/1) и access-sw-01 (Gi0/1) с привязанными интерфейсами."""
    core = adapt_device(make_device(1, "core-sw-01"))
    access = adapt_device(make_device(2, "access-sw-01", primary_ip4={"address": "10.0.0.2/24"}))
    core.interfaces = [adapt_interface(make_interface(10, 1, "Gi1/0/1"))]
    access.interfaces = [adapt_interface(make_interface(20, 2, "Gi0/1"))]
    return [core, access]


def neighbor(**overrides):
    data = {
        "local_device": "core-sw-01",
        "local_interface": "Gi1/0/1",
        "remote_device": "access-sw-01",
        "remote_interface": "Gi0/1",
        "remote_platform": "Cisco IOS",
        "remote_port_description": "Uplink to Core",
    }
    data.update(overrides)
    return data


@pytest.mark.unit
class TestCableLinks:
    """Pass A."""

    def test_resolved_cable(self, make_cable):
        link = adapt_cable(make_cable(100, (10, 1), (20, 2)))

        assert link.id == "link-100"
        assert link.source_device_id == "device-1"
        assert link.source_interface_id == "interface-10"
        assert link.target_device_id == "device-2"
        assert link.target_interface_id == "interface-20"
        assert link.discovery_source == "snmp"
        assert link.is_up is True
        assert link.confidence == 1.0
        assert link.protocol_info is None

    def test_not_connected_cable(self, make_cable):
        link = adapt_cable(make_cable(100, (10, 1), (20, 2), status="planned"))

        assert link.is_up is False
        assert link.confidence == 0.5

    def test_dangling_cable_dropped(self, make_cable):
        """A-терминация без object.device: линка нет, исключения нет."""
        report = AdaptationReport()

        links = infer_cable_links([make_cable(100, (10, None), (20, 2))], report)

        assert links == []
        assert report.dropped_cables == 1
        assert report.details[0].ref == "link-100"
        assert "a-side" in report.details[0].reason

    def test_empty_termination_side_dropped(self, make_cable):
        cable = make_cable(100, (10, 1), (20, 2))
        cable["b_terminations"] = []
        report = AdaptationReport()

        assert adapt_cable(cable, report) is None
        assert report.dropped_cables == 1

    def test_only_first_termination_used(self, make_cable):
        cable = make_cable(100, (10, 1), (20, 2))
        cable["a_terminations"].append(
            {"object": {"id": 11, "device": {"id": 1}}}
        )

        link = adapt_cable(cable)

        assert link.source_interface_id == "interface-10"

    def test_cable_without_report(self, make_cable):
        """report не обязателен."""
        assert adapt_cable(make_cable(1, (10, None), (20, 2))) is None

    def test_terminations_not_a_list(self, make_cable):
        cable = make_cable(100, (10, 1), (20, 2))
        cable["a_terminations"] = {"object": {}}

        with pytest.raises(MalformedInputError):
            adapt_cable(cable)

    def test_order_preserved(self, make_cable):
        cables = [make_cable(i, (i * 10, 1), (i * 10 + 1, 2)) for i in (3, 1, 2)]

        links = infer_cable_links(cables)

        assert [link.id for link in links] == ["link-3", "link-1", "link-2"]

    def test_known_endpoints_resolved(self, make_cable, devices):
        link = adapt_cable(make_cable(100, (10, 1), (20, 2)), known=endpoint_index(devices))
        assert link.target_device_id == "device-2"

    def test_unknown_device_dropped(self, make_cable, devices):
        """Кабель к устройству вне снимка не даёт линка."""
        report = AdaptationReport()

        links = infer_cable_links([make_cable(555, (10, 1), (99, 42))], report, devices)

        assert links == []
        assert report.dropped_cables == 1
        assert report.details[0].ref == "link-555"
        assert "device-42" in report.details[0].reason

    def test_unknown_interface_dropped(self, make_cable, devices):
        """Устройство известно, но интерфейса у него нет."""
        report = AdaptationReport()

        links = infer_cable_links([make_cable(556, (11, 1), (20, 2))], report, devices)

        assert links == []
        assert "interface-11" in report.details[0].reason

    def test_interface_on_other_device_dropped(self, make_cable, devices):
        """interface-20 есть, но принадлежит device-2, а не device-1."""
        links = infer_cable_links([make_cable(557, (20, 1), (10, 2))], devices=devices)
        assert links == []


@pytest.mark.unit
class TestLLDPLinks:
    """Pass B."""

    def test_name_matching(self, devices):
        links = infer_lldp_links([neighbor()], devices)

        assert len(links) == 1
        link = links[0]
        assert link.id == "lldp-link-0"
        assert link.discovery_source == "lldp"
        assert link.confidence == 0.9
        assert link.is_up is True
        assert link.source_device_id == "device-1"
        assert link.source_interface_id == "interface-10"
        assert link.target_device_id == "device-2"
        assert link.target_interface_id == "interface-20"

    def test_lldp_info(self, devices):
        lldp = infer_lldp_links([neighbor()], devices)[0].protocol_info.lldp

        assert lldp.chassis_id == "device-2"
        assert lldp.port_id == "Gi0/1"
        assert lldp.ttl == 120
        assert lldp.system_name == "access-sw-01"
        assert lldp.system_description == "Cisco IOS"
        assert lldp.port_description == "Uplink to Core"
        assert lldp.management_addresses == ["10.0.0.2"]

    def test_case_sensitive(self, devices):
        """"Core-SW-01" не совпадает с "core-sw-01"."""
        report = AdaptationReport()

        links = infer_lldp_links([neighbor(local_device="Core-SW-01")], devices, report)

        assert links == []
        assert report.dropped_neighbors == 1

    def test_short_interface_name_not_expanded(self, devices):
        """Имена интерфейсов не нормализуются (Gi0/1 != GigabitEthernet0/1)."""
        links = infer_lldp_links([neighbor(remote_interface="GigabitEthernet0/1")], devices)
        assert links == []

    def test_unknown_remote_device(self, devices):
        report = AdaptationReport()

        infer_lldp_links([neighbor(remote_device="ghost")], devices, report)

        assert "ghost" in report.details[0].reason

    def test_index_counts_dropped_reports(self, devices):
        """id линка — позиция отчёта во входном списке, включая отброшенные."""
        reports = [neighbor(local_device="ghost"), neighbor()]

        links = infer_lldp_links(reports, devices)

        assert [link.id for link in links] == ["lldp-link-1"]

    def test_accepts_neighbor_report_objects(self, devices):
        links = infer_lldp_links([NeighborReport.from_dict(neighbor())], devices)
        assert len(links) == 1

    def test_empty_neighbors(self, devices):
        assert infer_lldp_links([], devices) == []

    def test_missing_name_dropped(self, devices):
        """Отчёт без remote_interface отбрасывается, индексы не сдвигаются."""
        incomplete = neighbor(remote_interface=None)
        no_local = neighbor()
        del no_local["local_device"]
        report = AdaptationReport()

        links = infer_lldp_links([incomplete, no_local, neighbor()], devices, report)

        assert [link.id for link in links] == ["lldp-link-2"]
        assert report.dropped_neighbors == 2
        assert [d.ref for d in report.details] == ["lldp-link-0", "lldp-link-1"]
        assert "remote_interface" in report.details[0].reason
        assert "local_device" in report.details[1].reason

    def test_non_dict_report_fatal(self, devices):
        with pytest.raises(MalformedInputError):
            infer_lldp_links(["core-sw-01"], devices)
