"""
Тесты JSON экспортера.
"""

import json
from datetime import datetime, timezone

import pytest

from netbox_topology.core.domain import assemble_topology
from netbox_topology.exporters import EXPORTERS, JSONExporter


@pytest.fixture
def result(minimal_payload):
    return assemble_topology(minimal_payload, "Lab")


@pytest.mark.unit
class TestJSONExporter:
    """JSONExporter."""

    def test_metadata_wrapper(self, result):
        data = JSONExporter().build(result)

        assert set(data) == {"metadata", "data"}
        assert data["metadata"]["total_devices"] == 2
        assert data["metadata"]["total_links"] == 2
        assert data["metadata"]["is_partial"] is False
        assert data["data"]["name"] == "Lab"

    def test_without_metadata(self, result):
        data = JSONExporter(include_metadata=False).build(result)

        assert data["results"]["totalDevices"] == 2
        assert "report" not in data

    def test_include_report(self, result):
        data = JSONExporter(include_metadata=False, include_report=True).build(result)
        assert data["report"]["isPartial"] is False

    def test_dumps_compact(self, result):
        text = JSONExporter(indent=None, include_metadata=False).dumps(result)

        assert "\n" not in text
        assert json.loads(text)["status"] == "completed"

    def test_non_ascii_kept(self, minimal_payload):
        result = assemble_topology(minimal_payload, "Главный офис")

        text = JSONExporter(include_metadata=False).dumps(result)

        assert "Главный офис" in text

    def test_export_file(self, tmp_path, result):
        path = JSONExporter(output_folder=str(tmp_path)).export(result, "topology")

        assert path == tmp_path / "topology.json"
        assert json.loads(path.read_text(encoding="utf-8"))["data"]["progress"] == 100

    def test_generated_filename(self, tmp_path, result):
        path = JSONExporter(output_folder=str(tmp_path / "reports")).export(result)

        assert path.name.startswith("topology_")
        assert path.suffix == ".json"

    def test_export_none(self, tmp_path):
        assert JSONExporter(output_folder=str(tmp_path)).export(None) is None

    def test_write_error_returns_none(self, tmp_path, result):
        """Ошибка записи логируется, экспорт возвращает None."""
        folder = tmp_path / "out"
        folder.mkdir()
        (folder / "topology.json").mkdir()

        assert JSONExporter(output_folder=str(folder)).export(result, "topology.json") is None

    def test_serializer(self):
        moment = datetime(2025, 1, 15, tzinfo=timezone.utc)

        assert JSONExporter._json_serializer(moment) == "2025-01-15T00:00:00+00:00"
        assert JSONExporter._json_serializer({"a"}) == ["a"]
        with pytest.raises(TypeError):
            JSONExporter._json_serializer(object())

    def test_registry(self):
        assert EXPORTERS["json"] is JSONExporter
