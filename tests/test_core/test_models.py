"""
Tests for data models.

Проверяет сериализацию в camelCase и разбор upstream-обёрток.
"""

from datetime import datetime, timezone

import pytest

from netbox_topology.core.domain import AdaptationReport, assemble_topology
from netbox_topology.core.exceptions import MalformedInputError
from netbox_topology.core.models import (
    DiscoverySummary,
    Link,
    NeighborReport,
    TopologyPayload,
    serialize,
)


NOW = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.mark.unit
class TestSerialization:
    """to_dict() / serialize()."""

    def test_camel_case_keys(self):
        link = Link(
            id="link-1",
            source_device_id="device-1",
            source_interface_id="interface-1",
            target_device_id="device-2",
            target_interface_id="interface-4",
            discovery_source="snmp",
            confidence=1.0,
            last_seen=NOW,
            is_up=True,
            created_at=NOW,
            updated_at=NOW,
        )

        data = link.to_dict()

        assert data["sourceDeviceId"] == "device-1"
        assert data["targetInterfaceId"] == "interface-4"
        assert data["discoverySource"] == "snmp"
        assert data["isUp"] is True
        assert data["lastSeen"] == "2025-01-15T10:30:00+00:00"

    def test_none_fields_omitted(self):
        link = Link(
            id="link-1", source_device_id="d1", source_interface_id="i1",
            target_device_id="d2", target_interface_id="i2",
            discovery_source="snmp", confidence=0.5, last_seen=NOW,
            is_up=False, created_at=NOW, updated_at=NOW,
        )

        data = link.to_dict()

        assert "protocolInfo" not in data
        assert "speed" not in data
        assert data["vlans"] == []

    def test_top_os_key(self):
        """top_os → topOS, а не topOs."""
        data = DiscoverySummary(top_os=[{"os": "Cisco IOS", "count": 1}]).to_dict()

        assert "topOS" in data
        assert "topOs" not in data

    def test_serialize_plain_values(self):
        assert serialize({"a": [NOW]}) == {"a": ["2025-01-15T10:30:00+00:00"]}
        assert serialize((1, 2)) == [1, 2]


@pytest.mark.unit
class TestDiscoveryResult:
    """DiscoveryResult.to_dict() и report."""

    def test_report_not_serialized_by_default(self, minimal_payload):
        result = assemble_topology(minimal_payload)

        data = result.to_dict()

        assert "report" not in data
        assert data["results"]["totalDevices"] == 2
        assert data["results"]["summary"]["protocolsUsed"] == ["netbox", "lldp", "snmp"]
        assert data["seedDevices"][0]["isActive"] is True

    def test_include_report(self, minimal_payload):
        result = assemble_topology(minimal_payload)

        data = result.to_dict(include_report=True)

        assert data["report"]["isPartial"] is False
        assert data["report"]["details"] == []

    def test_lldp_protocol_info(self, minimal_payload):
        data = assemble_topology(minimal_payload).to_dict()

        lldp_link = data["results"]["links"][1]
        assert lldp_link["protocolInfo"]["lldp"]["ttl"] == 120
        assert lldp_link["protocolInfo"]["lldp"]["chassisId"] == "device-2"

    def test_is_partial_without_report(self, minimal_payload):
        result = assemble_topology(minimal_payload)
        result.report = None

        assert result.is_partial is False


@pytest.mark.unit
class TestAdaptationReport:
    """AdaptationReport."""

    def test_counters(self):
        report = AdaptationReport()

        report.drop("cable", "link-4", "a-side termination has no device")
        report.drop("neighbor", "lldp-link-0", "device 'x' not found")
        report.drop("neighbor", "lldp-link-1", "device 'y' not found")

        assert report.dropped_cables == 1
        assert report.dropped_neighbors == 2
        assert report.orphan_interfaces == 0
        assert report.total_dropped == 3
        assert report.is_partial is True
        assert [e.ref for e in report.by_kind("neighbor")] == ["lldp-link-0", "lldp-link-1"]

    def test_unknown_kind(self):
        with pytest.raises(KeyError):
            AdaptationReport().drop("vlan", "vlan-1", "unknown")

    def test_to_dict(self):
        report = AdaptationReport()
        report.drop("interface", "interface-9", "owning device device-42 not in payload")

        assert report.to_dict() == {
            "droppedCables": 0,
            "droppedNeighbors": 0,
            "orphanInterfaces": 1,
            "isPartial": True,
            "details": [{
                "kind": "interface",
                "ref": "interface-9",
                "reason": "owning device device-42 not in payload",
            }],
        }


@pytest.mark.unit
class TestTopologyPayload:
    """TopologyPayload.from_dict()."""

    def test_optional_keys_default_empty(self):
        payload = TopologyPayload.from_dict({"devices": [], "interfaces": [], "cables": []})

        assert payload.ip_addresses == []
        assert payload.sites == []
        assert payload.lldp_neighbors == []

    def test_null_optional_key(self):
        payload = TopologyPayload.from_dict({
            "devices": [], "interfaces": [], "cables": [], "lldp_neighbors": None,
        })
        assert payload.lldp_neighbors == []

    def test_optional_key_wrong_type(self):
        with pytest.raises(MalformedInputError) as exc_info:
            TopologyPayload.from_dict({
                "devices": [], "interfaces": [], "cables": [], "sites": "main",
            })
        assert exc_info.value.field == "sites"

    def test_neighbors_parsed(self, minimal_payload):
        payload = TopologyPayload.from_dict(minimal_payload)

        assert isinstance(payload.lldp_neighbors[0], NeighborReport)
        assert payload.lldp_neighbors[0].remote_platform is None

    def test_passthrough(self, minimal_payload):
        payload = TopologyPayload.from_dict(minimal_payload)
        assert TopologyPayload.from_dict(payload) is payload
