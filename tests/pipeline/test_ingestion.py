"""
Test InstallationLoader
=======================

End-to-end tests: raw content in, records out.
"""

import json
from unittest.mock import patch

import pytest

from installrag.models import ChunkType
from installrag.pipeline.diagnostics import Diagnostics
from installrag.pipeline.ingestion import (
    InstallationLoader,
    load_installation,
    load_installation_file,
)
from installrag.pipeline.parsing import LoadError, LoadErrorKind


@pytest.fixture
def loader(test_config):
    return InstallationLoader(test_config)


class TestLoadSummary:
    """Test successful loads."""

    def test_single_summary_record(self, loader, sample_installation_json):
        result = loader.load(sample_installation_json)

        assert len(result.records) == 1
        record = result.records[0]
        assert record.chunk_type == ChunkType.SUMMARY
        assert record.is_valid
        assert not result.is_fallback
        assert result.summary is record

    def test_counts_match_input(self, loader, sample_installation, sample_installation_json):
        result = loader.load(sample_installation_json)
        metadata = result.records[0].metadata

        assert metadata.total_endpoints == len(sample_installation["endpoints"])
        assert metadata.total_areas == len(sample_installation["areas"])

    def test_result_carries_topology(self, loader, sample_installation_json):
        result = loader.load(sample_installation_json)

        assert len(result.partition_map) == 3
        assert len(result.area_maps) == 3
        assert result.relations["e1a2b3c4-0003"].area_name == "Living room"
        assert result.statistics.sensor_count == 2

    def test_minimal_example(self, loader, minimal_installation):
        result = loader.load(json.dumps(minimal_installation))

        assert list(result.relations) == ["e1"]
        assert result.relations["e1"].area_name == "Kitchen"
        assert result.relations["e1"].location == ["Partition_p1"]

    def test_without_areas(self, loader):
        result = loader.load(json.dumps({"endpoints": [{"uuid": "e1", "category": 18, "partitions": ["p1"]}]}))

        record = result.records[0]
        assert record.chunk_type == ChunkType.SUMMARY
        assert record.metadata.total_areas == 0
        assert record.metadata.has_partitions is False
        assert record.metadata.has_area_info is False
        assert result.relations == {}
        assert result.area_maps == []

    def test_areas_without_partitions(self, loader):
        document = {
            "endpoints": [{"uuid": "e1", "partitions": ["p1"]}],
            "areas": [{"uuid": "a1", "name": "Kitchen", "partitions": []}],
        }

        result = loader.load(json.dumps(document))

        assert result.partition_map == {}
        assert result.records[0].metadata.has_partitions is False

    def test_diagnostics_are_injected(self, loader, sample_installation_json):
        diagnostics = Diagnostics(forward=False)

        result = loader.load(sample_installation_json, diagnostics)

        assert result.diagnostics is diagnostics
        assert diagnostics.has_event("relation_conflict")

    def test_convenience_function(self, test_config, minimal_installation):
        result = load_installation(json.dumps(minimal_installation), config=test_config)
        assert result.records[0].chunk_type == ChunkType.SUMMARY


class TestLoadFallback:
    """Test loads that degrade to a fallback record."""

    @pytest.mark.parametrize("content", [
        '{"endpoints": []}',
        "{}",
        '{"endpoints": null, "areas": [{"uuid": "a1", "name": "Kitchen"}]}',
        '{"endpoints": "e1"}',
    ])
    def test_no_endpoints(self, loader, content):
        result = loader.load(content)

        assert len(result.records) == 1
        assert result.is_fallback
        assert result.records[0].metadata.is_valid is False
        assert result.relations == {}
        assert result.partition_map == {}

    def test_no_endpoints_is_recorded(self, loader):
        diagnostics = Diagnostics(forward=False)

        loader.load('{"endpoints": []}', diagnostics)

        assert diagnostics.has_event(LoadErrorKind.NO_USABLE_ENDPOINTS.value)
        assert diagnostics.has_event("fallback_generated")

    def test_mapping_failure_falls_back(self, loader, sample_installation_json):
        diagnostics = Diagnostics(forward=False)

        with patch(
            "installrag.pipeline.ingestion.build_endpoint_area_relations",
            side_effect=RuntimeError("unexpected"),
        ):
            result = loader.load(sample_installation_json, diagnostics)

        assert result.is_fallback
        assert result.records[0].payload()["message"] == "unexpected"
        assert diagnostics.has_event("mapping_failed")

    def test_malformed_entries_do_not_fall_back(self, loader):
        content = json.dumps({
            "endpoints": [
                {"uuid": "e1", "category": 18, "partitions": ["p1"]},
                {"uuid": {"bad": 1}, "partitions": ["p1"]},
            ],
            "areas": [{"uuid": "a1", "name": "Kitchen", "partitions": [{"uuid": ["x"], "name": "n"}, "p1"]}],
        })
        diagnostics = Diagnostics(forward=False)

        result = loader.load(content, diagnostics)

        assert not result.is_fallback
        assert result.relations["e1"].area_name == "Kitchen"
        assert result.partition_map == {"p1": "Partition_p1"}
        assert diagnostics.has_event("endpoint_invalid")
        assert diagnostics.has_event("partition_invalid")
        assert not diagnostics.has_event("mapping_failed")


class TestLoadErrors:
    """Test fatal errors: no record is produced."""

    @pytest.mark.parametrize("content,kind", [
        (None, LoadErrorKind.MISSING_SOURCE),
        ("", LoadErrorKind.EMPTY_INPUT),
        ("not json", LoadErrorKind.MALFORMED_INPUT),
        ("[]", LoadErrorKind.INVALID_ROOT),
    ])
    def test_fatal_kinds(self, loader, content, kind):
        with pytest.raises(LoadError) as exc_info:
            loader.load(content)

        assert exc_info.value.kind == kind


class TestLoadFile:
    """Test reading from disk."""

    def test_load_file(self, test_config, tmp_path, sample_installation_json):
        path = tmp_path / "installation-config.json"
        path.write_text(sample_installation_json, encoding="utf-8")

        result = load_installation_file(path, config=test_config)

        assert result.records[0].metadata.total_endpoints == 5

    def test_default_path_from_config(self, tmp_path, minimal_installation):
        from installrag.config import LoaderConfig

        (tmp_path / "villa.json").write_text(json.dumps(minimal_installation), encoding="utf-8")
        config = LoaderConfig.for_test(document_dir=tmp_path, target_file="villa.json")

        result = InstallationLoader(config).load_file()

        assert result.records[0].metadata.source == "villa.json"
        assert result.records[0].metadata.loc == str(tmp_path / "villa.json")

    def test_missing_file(self, loader, tmp_path):
        diagnostics = Diagnostics(forward=False)

        with pytest.raises(LoadError) as exc_info:
            loader.load_file(tmp_path / "absent.json", diagnostics)

        assert exc_info.value.kind == LoadErrorKind.MISSING_SOURCE
        assert diagnostics.has_event("missing_source")

    def test_empty_file(self, loader, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("  \n", encoding="utf-8")

        with pytest.raises(LoadError) as exc_info:
            loader.load_file(path)

        assert exc_info.value.kind == LoadErrorKind.EMPTY_INPUT
