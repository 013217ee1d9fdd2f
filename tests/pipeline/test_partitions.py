"""
Test Partition Mapping
======================

Unit tests for resolve_partition, build_global_partition_map and
build_area_partition_maps.
"""

import pytest

from installrag.models import PartitionRef
from installrag.pipeline.partitions import (
    build_area_partition_maps,
    build_global_partition_map,
    resolve_partition,
)


class TestResolvePartition:
    """Test resolution of a single partition entry."""

    def test_bare_identifier_gets_synthetic_name(self, test_config):
        ref = resolve_partition("9f1c2a7e-4b5d-4c3e-8f1a-2b3c4d5e6f70", test_config)
        assert ref == PartitionRef(
            uuid="9f1c2a7e-4b5d-4c3e-8f1a-2b3c4d5e6f70",
            name="Partition_9f1c2a7e",
        )

    def test_short_identifier(self, test_config):
        ref = resolve_partition("p1", test_config)
        assert ref.name == "Partition_p1"

    def test_object_uses_own_name(self, test_config):
        ref = resolve_partition({"uuid": "p1", "name": "Ground floor"}, test_config)
        assert ref == PartitionRef(uuid="p1", name="Ground floor")

    @pytest.mark.parametrize("entry", [
        {"uuid": "p1"},
        {"name": "Ground floor"},
        {"uuid": "", "name": "Ground floor"},
        {},
        "",
        42,
        None,
    ])
    def test_unresolvable(self, entry, test_config):
        assert resolve_partition(entry, test_config) is None

    @pytest.mark.parametrize("uuid", [["x"], {"bad": 1}])
    def test_non_scalar_uuid_raises(self, uuid, test_config):
        with pytest.raises(TypeError):
            resolve_partition({"uuid": uuid, "name": "n"}, test_config)

    def test_prefix_collision_keeps_identifiers(self, test_config):
        first = resolve_partition("abcdefgh-1111", test_config)
        second = resolve_partition("abcdefgh-2222", test_config)
        assert first.name == second.name
        assert first.uuid != second.uuid


class TestBuildGlobalPartitionMap:
    """Test the installation-wide partition map."""

    def test_sample_installation(self, sample_installation, diagnostics, test_config):
        partition_map = build_global_partition_map(sample_installation, diagnostics, test_config)

        assert partition_map == {
            "p1-kitchen-0001": "Partition_p1-kitch",
            # Declared by Living room and Hallway: last declaration wins
            "p2-living-00002": "Hall side",
            "p3-hall-000003": "Partition_p3-hall-",
        }

    def test_no_areas(self, diagnostics, test_config):
        assert build_global_partition_map({"endpoints": []}, diagnostics, test_config) == {}

    def test_areas_without_partitions(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "name": "Kitchen"}, {"uuid": "a2", "name": "Hall", "partitions": []}]}
        assert build_global_partition_map(document, diagnostics, test_config) == {}

    def test_includes_areas_missing_name(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "partitions": ["p1"]}]}
        assert build_global_partition_map(document, diagnostics, test_config) == {"p1": "Partition_p1"}

    def test_incomplete_object_is_skipped(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "name": "Kitchen", "partitions": [{"uuid": "p1"}, "p2"]}]}

        partition_map = build_global_partition_map(document, diagnostics, test_config)

        assert partition_map == {"p2": "Partition_p2"}
        assert len(diagnostics.events("partition_incomplete")) == 1

    def test_unhashable_uuid_is_skipped(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "name": "Kitchen", "partitions": [
            {"uuid": ["x"], "name": "n"},
            {"uuid": "p1", "name": "Ground floor"},
        ]}]}

        partition_map = build_global_partition_map(document, diagnostics, test_config)

        assert partition_map == {"p1": "Ground floor"}
        assert len(diagnostics.events("partition_invalid")) == 1


class TestBuildAreaPartitionMaps:
    """Test per-area partition maps."""

    def test_sample_installation(self, sample_installation, diagnostics, test_config):
        maps = build_area_partition_maps(sample_installation, diagnostics, test_config)

        assert [m.area_name for m in maps] == ["Kitchen", "Living room", "Hallway"]
        assert maps[0].partitions == [PartitionRef("p1-kitchen-0001", "Partition_p1-kitch")]
        assert maps[1].partitions == [PartitionRef("p2-living-00002", "Living zone")]
        # Names stay scoped to the declaring area
        assert maps[2].partitions == [
            PartitionRef("p3-hall-000003", "Partition_p3-hall-"),
            PartitionRef("p2-living-00002", "Hall side"),
        ]

    def test_missing_areas(self, diagnostics, test_config):
        assert build_area_partition_maps({}, diagnostics, test_config) == []
        assert diagnostics.has_event("no_areas")

    def test_invalid_areas_are_omitted(self, diagnostics, test_config):
        document = {"areas": [
            "not-an-area",
            None,
            {"uuid": "a1"},
            {"name": "Nameless uuid"},
            {"uuid": "a2", "name": "Garage", "partitions": ["p9"]},
        ]}

        maps = build_area_partition_maps(document, diagnostics, test_config)

        assert len(maps) == 1
        assert maps[0].area_uuid == "a2"
        assert len(diagnostics.events("area_invalid")) == 2
        assert len(diagnostics.events("area_incomplete")) == 2

    def test_null_partitions_are_skipped(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "name": "Kitchen", "partitions": [None, "p1", {"name": "x"}]}]}

        maps = build_area_partition_maps(document, diagnostics, test_config)

        assert maps[0].partition_uuids() == ["p1"]
        assert len(diagnostics.events("partition_null")) == 1
        assert len(diagnostics.events("partition_incomplete")) == 1

    def test_unhashable_partition_uuid_is_skipped(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "name": "Kitchen", "partitions": [{"uuid": {"bad": 1}, "name": "n"}, "p1"]}]}

        maps = build_area_partition_maps(document, diagnostics, test_config)

        assert maps[0].partition_uuids() == ["p1"]
        assert len(diagnostics.events("partition_invalid")) == 1

    def test_area_with_unhashable_uuid_is_invalid(self, diagnostics, test_config):
        document = {"areas": [
            {"uuid": ["a0"], "name": "Broken", "partitions": ["p0"]},
            {"uuid": "a1", "name": "Kitchen", "partitions": ["p1"]},
        ]}

        maps = build_area_partition_maps(document, diagnostics, test_config)

        assert [m.area_uuid for m in maps] == ["a1"]
        assert len(diagnostics.events("area_invalid")) == 1

    def test_area_without_partitions_is_kept(self, diagnostics, test_config):
        document = {"areas": [{"uuid": "a1", "name": "Attic"}]}

        maps = build_area_partition_maps(document, diagnostics, test_config)

        assert len(maps) == 1
        assert maps[0].partitions == []

    def test_to_dict(self, minimal_installation, test_config):
        maps = build_area_partition_maps(minimal_installation, config=test_config)
        assert maps[0].to_dict() == {
            "areaUuid": "a1",
            "areaName": "Kitchen",
            "partitions": [{"uuid": "p1", "name": "Partition_p1"}],
        }
