"""
Tests for TopologyAssembler.

Сквозная сборка из снимка NetBox: 5 устройств, 7 интерфейсов,
4 кабеля и 4 LLDP-отчёта об этих же соединениях.
"""

import copy

import pytest

from netbox_topology.core.domain import TopologyAssembler, assemble_topology
from netbox_topology.core.exceptions import MalformedInputError
from netbox_topology.core.models import DiscoveryResult, TopologyPayload


@pytest.mark.integration
class TestAssembleFixture:
    """Сборка полного снимка."""

    @pytest.fixture
    def result(self, topology_payload):
        return assemble_topology(topology_payload, "Main Office")

    def test_counts(self, result):
        assert isinstance(result, DiscoveryResult)
        assert result.results.total_devices == 5
        assert result.results.new_devices == 5
        assert result.results.updated_devices == 0
        assert result.results.failed_devices == 0
        assert len(result.results.links) == 8

    def test_no_dedup(self, result):
        """Кабель и LLDP-отчёт об одном соединении дают два линка."""
        links = result.results.links
        by_source = [link.discovery_source for link in links]

        assert by_source == ["snmp"] * 4 + ["lldp"] * 4
        pairs = {(l.source_interface_id, l.target_interface_id) for l in links}
        assert len(pairs) == 4

    def test_link_ids(self, result):
        ids = [link.id for link in result.results.links]
        assert ids == [
            "link-1", "link-2", "link-3", "link-4",
            "lldp-link-0", "lldp-link-1", "lldp-link-2", "lldp-link-3",
        ]

    def test_interfaces_attached(self, result):
        interfaces = {d.hostname: [i.name for i in d.interfaces] for d in result.results.devices}

        assert interfaces["core-sw-01"] == [
            "GigabitEthernet1/0/1", "GigabitEthernet1/0/2", "GigabitEthernet1/0/24",
        ]
        assert interfaces["server-01"] == ["eth0"]

    def test_links_reference_known_entities(self, result):
        devices = {d.id: d for d in result.results.devices}
        for link in result.results.links:
            source_intfs = {i.id for i in devices[link.source_device_id].interfaces}
            target_intfs = {i.id for i in devices[link.target_device_id].interfaces}
            assert link.source_interface_id in source_intfs
            assert link.target_interface_id in target_intfs

    def test_summary(self, result):
        summary = result.results.summary

        assert summary.top_vendors == [
            {"vendor": "Cisco", "count": 3},
            {"vendor": "Fortinet", "count": 1},
            {"vendor": "Dell", "count": 1},
        ]
        assert summary.top_roles[0] == {"role": "Access Switch", "count": 2}
        assert summary.top_os[0] == {"os": "Cisco IOS", "count": 3}

    def test_scan_metadata(self, result):
        assert result.id.startswith("scan-netbox-")
        assert result.name == "Main Office"
        assert result.status == "completed"
        assert result.progress == 100
        assert result.start_time == result.end_time
        assert result.seed_devices[0].value == "NetBox API"
        assert result.expansion_settings.max_devices == 5

    def test_sites(self, result):
        assert len(result.sites) == 1
        assert result.sites[0].id == "site-1"

    def test_not_partial(self, result):
        assert result.is_partial is False
        assert result.report.total_dropped == 0


@pytest.mark.unit
class TestAssemblerEdgeCases:
    """Граничные случаи."""

    def test_minimal_payload(self, minimal_payload):
        result = assemble_topology(minimal_payload)

        assert result.name == "NetBox Import"
        assert [link.discovery_source for link in result.results.links] == ["snmp", "lldp"]

    def test_missing_lldp_key(self, minimal_payload):
        """Без lldp_neighbors Pass B не даёт линков."""
        del minimal_payload["lldp_neighbors"]

        result = assemble_topology(minimal_payload)

        assert [link.id for link in result.results.links] == ["link-100"]

    def test_empty_payload(self):
        result = assemble_topology({"devices": [], "interfaces": [], "cables": []})

        assert result.results.total_devices == 0
        assert result.results.links == []
        assert result.results.summary.top_vendors == []

    def test_link_count_invariant(self, minimal_payload, make_cable):
        """Линков = разрешённые кабели + разрешённые соседи."""
        minimal_payload["cables"].append(make_cable(101, (10, None), (20, 2)))
        minimal_payload["lldp_neighbors"].append({
            "local_device": "ghost",
            "local_interface": "Gi0/0",
            "remote_device": "core-sw-01",
            "remote_interface": "Gi1/0/1",
        })

        result = assemble_topology(minimal_payload)

        assert len(result.results.links) == 2
        assert result.report.dropped_cables == 1
        assert result.report.dropped_neighbors == 1
        assert result.is_partial is True

    def test_cable_to_unknown_device_dropped(self, minimal_payload, make_cable):
        """Все концы линков ссылаются на устройства результата."""
        minimal_payload["cables"].append(make_cable(555, (10, 1), (99, 42)))

        result = assemble_topology(minimal_payload)

        device_ids = {d.id for d in result.results.devices}
        for link in result.results.links:
            assert link.source_device_id in device_ids
            assert link.target_device_id in device_ids
        assert [link.id for link in result.results.links] == ["link-100", "lldp-link-0"]
        assert result.report.dropped_cables == 1
        assert result.report.by_kind("cable")[0].ref == "link-555"

    def test_cable_to_orphan_interface_dropped(self, minimal_payload, make_interface, make_cable):
        """Интерфейс без устройства отброшен, кабель к нему тоже."""
        minimal_payload["interfaces"].append(make_interface(99, 42, "eth9"))
        minimal_payload["cables"].append(make_cable(555, (10, 1), (99, 42)))

        result = assemble_topology(minimal_payload)

        assert result.report.orphan_interfaces == 1
        assert result.report.dropped_cables == 1
        assert "link-555" not in [link.id for link in result.results.links]

    def test_incomplete_neighbor_dropped(self, minimal_payload):
        """Отчёт с remote_interface=None не прерывает сборку."""
        minimal_payload["lldp_neighbors"].append({
            "local_device": "core-sw-01",
            "local_interface": "Gi1/0/1",
            "remote_device": "access-sw-01",
            "remote_interface": None,
        })

        result = assemble_topology(minimal_payload)

        assert [link.id for link in result.results.links] == ["link-100", "lldp-link-0"]
        assert result.report.dropped_neighbors == 1
        assert result.report.by_kind("neighbor")[0].ref == "lldp-link-1"

    def test_orphan_interface_reported(self, minimal_payload, make_interface):
        minimal_payload["interfaces"].append(make_interface(99, 42, "eth9"))

        result = assemble_topology(minimal_payload)

        assert result.report.orphan_interfaces == 1
        assert result.report.by_kind("interface")[0].ref == "interface-99"
        all_intfs = [i.id for d in result.results.devices for i in d.interfaces]
        assert "interface-99" not in all_intfs

    def test_orphan_interface_strict(self, minimal_payload, make_interface):
        minimal_payload["interfaces"].append(make_interface(99, 42, "eth9"))

        with pytest.raises(MalformedInputError) as exc_info:
            TopologyAssembler(strict=True).assemble(minimal_payload)

        assert exc_info.value.entity == "interface"

    @pytest.mark.parametrize("key", ["devices", "interfaces", "cables"])
    def test_required_key_missing(self, minimal_payload, key):
        del minimal_payload[key]

        with pytest.raises(MalformedInputError) as exc_info:
            assemble_topology(minimal_payload)

        assert exc_info.value.field == key

    def test_required_key_not_list(self, minimal_payload):
        minimal_payload["cables"] = {"results": []}

        with pytest.raises(MalformedInputError):
            assemble_topology(minimal_payload)

    def test_payload_not_dict(self):
        with pytest.raises(MalformedInputError):
            assemble_topology([])

    def test_malformed_device_is_fatal(self, minimal_payload):
        del minimal_payload["devices"][0]["device_type"]

        with pytest.raises(MalformedInputError):
            assemble_topology(minimal_payload)

    def test_accepts_topology_payload(self, minimal_payload):
        payload = TopologyPayload.from_dict(minimal_payload)

        result = TopologyAssembler().assemble(payload, "typed")

        assert result.name == "typed"
        assert len(result.results.links) == 2

    def test_input_not_mutated(self, minimal_payload):
        before = copy.deepcopy(minimal_payload)

        assemble_topology(minimal_payload)

        assert minimal_payload == before
