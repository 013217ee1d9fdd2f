"""
Partition Mapping
=================

Resolves the partitions declared by each area.

Areas list their partitions in two shapes, sometimes mixed in one file:

    "partitions": ["9f1c2a7e-...", "77ab01d4-..."]                 # bare ids
    "partitions": [{"uuid": "9f1c2a7e-...", "name": "Ground floor"}]  # objects

Bare identifiers get a synthetic name built from the first characters of
the identifier ("Partition_9f1c2a7e"). Synthetic names are for display
only: two identifiers with the same prefix get the same name.
"""

from typing import Any, Dict, List, Optional

from installrag.config import LoaderConfig, get_loader_config
from installrag.models import AreaPartitionMap, PartitionRef
from installrag.pipeline.diagnostics import Diagnostics, ensure_diagnostics


def synthetic_name(identifier: str, prefix: str, length: int = 8) -> str:
    """Display name derived from an identifier prefix."""
    return f"{prefix}{identifier[:length]}"


def resolve_partition(
    entry: Any,
    config: Optional[LoaderConfig] = None,
) -> Optional[PartitionRef]:
    """
    Resolve one partition entry to a PartitionRef.

    Args:
        entry: Bare identifier string or {"uuid", "name"} object
        config: Naming configuration (prefix and prefix length)

    Returns:
        PartitionRef, or None if the entry lacks an identifier or a name

    Raises:
        TypeError: If an object entry carries a list or object as uuid
    """
    config = config or get_loader_config()

    if isinstance(entry, str):
        if not entry:
            return None
        return PartitionRef(
            uuid=entry,
            name=synthetic_name(entry, config.partition_prefix, config.prefix_length),
        )

    if isinstance(entry, dict):
        uuid = entry.get("uuid")
        name = entry.get("name")
        if isinstance(uuid, (dict, list)):
            raise TypeError(f"Partition uuid must be a scalar, got {type(uuid).__name__}")
        if uuid and name:
            return PartitionRef(uuid=uuid, name=name)

    return None


def build_global_partition_map(
    document: Dict[str, Any],
    diagnostics: Optional[Diagnostics] = None,
    config: Optional[LoaderConfig] = None,
) -> Dict[str, str]:
    """
    Map every partition identifier in the installation to its name.

    Iterates all areas. When the same identifier is declared by several
    areas, the last declaration wins.

    Args:
        document: Parsed installation document
        diagnostics: Collector for skipped entries
        config: Naming configuration

    Returns:
        Dict partition uuid -> partition name (empty if no area declares
        a partition)
    """
    diagnostics = ensure_diagnostics(diagnostics)
    config = config or get_loader_config()
    partition_map: Dict[str, str] = {}

    areas = document.get("areas")
    if not isinstance(areas, list):
        return partition_map

    for area_index, area in enumerate(areas):
        if not isinstance(area, dict):
            continue
        partitions = area.get("partitions")
        if not isinstance(partitions, list):
            continue

        for part_index, entry in enumerate(partitions):
            if entry is None:
                continue
            try:
                ref = resolve_partition(entry, config)
            except (TypeError, ValueError) as e:
                diagnostics.warning(
                    "partition_invalid",
                    "Partition entry invalid",
                    area_index=area_index,
                    partition_index=part_index,
                    error=str(e),
                )
                continue
            if ref is None:
                diagnostics.warning(
                    "partition_incomplete",
                    "Partition entry missing uuid or name",
                    area_index=area_index,
                    partition_index=part_index,
                )
                continue
            partition_map[ref.uuid] = ref.name

    diagnostics.debug(
        "global_partition_map",
        f"Global partition map built: {len(partition_map)} partitions",
        partitions=len(partition_map),
    )
    return partition_map


def build_area_partition_maps(
    document: Dict[str, Any],
    diagnostics: Optional[Diagnostics] = None,
    config: Optional[LoaderConfig] = None,
) -> List[AreaPartitionMap]:
    """
    Build the partition map of each area.

    Invalid areas (not an object, or missing uuid or name) are skipped with
    a warning and do not appear in the output. Null partition entries and
    object entries missing uuid or name are skipped too.

    Args:
        document: Parsed installation document
        diagnostics: Collector for skipped entries
        config: Naming configuration

    Returns:
        One AreaPartitionMap per valid area, in input order
    """
    diagnostics = ensure_diagnostics(diagnostics)
    config = config or get_loader_config()
    maps: List[AreaPartitionMap] = []

    areas = document.get("areas")
    if not isinstance(areas, list):
        diagnostics.warning("no_areas", "No areas found in document")
        return maps

    for index, area in enumerate(areas):
        if not isinstance(area, dict) or isinstance(area.get("uuid"), (dict, list)):
            diagnostics.warning("area_invalid", f"Area {index} invalid", area_index=index)
            continue

        if not area.get("uuid") or not area.get("name"):
            diagnostics.warning(
                "area_incomplete",
                f"Area {index} missing UUID or name",
                area_index=index,
                uuid=area.get("uuid"),
                name=area.get("name"),
            )
            continue

        try:
            area_map = _map_area(area, diagnostics, config)
        except (TypeError, ValueError) as e:
            diagnostics.warning("area_invalid", f"Area {index} invalid", area_index=index, error=str(e))
            continue

        maps.append(area_map)
        diagnostics.debug(
            "area_mapped",
            f"Mapped area: {area_map.area_name} ({len(area_map.partitions)} partitions)",
            area=area_map.area_name,
            partitions=len(area_map.partitions),
        )

    diagnostics.info("area_maps_created", f"Area maps created: {len(maps)}", areas=len(maps))
    return maps


def _map_area(
    area: Dict[str, Any],
    diagnostics: Diagnostics,
    config: LoaderConfig,
) -> AreaPartitionMap:
    """Resolve the partitions of one area that has a uuid and a name."""
    area_map = AreaPartitionMap(area_uuid=area["uuid"], area_name=area["name"])

    partitions = area.get("partitions")
    if not isinstance(partitions, list):
        return area_map

    for part_index, entry in enumerate(partitions):
        if not entry:
            diagnostics.warning(
                "partition_null",
                f"Partition {part_index} in area {area['name']} is null",
                area=area["name"],
                partition_index=part_index,
            )
            continue

        try:
            ref = resolve_partition(entry, config)
        except (TypeError, ValueError) as e:
            diagnostics.warning(
                "partition_invalid",
                f"Partition {part_index} in area {area['name']} is invalid",
                area=area["name"],
                partition_index=part_index,
                error=str(e),
            )
            continue

        if ref is None:
            diagnostics.warning(
                "partition_incomplete",
                f"Partition {part_index} in area {area['name']} has incomplete data",
                area=area["name"],
                partition_index=part_index,
            )
            continue
        area_map.partitions.append(ref)

    return area_map


__all__ = [
    "build_area_partition_maps",
    "build_global_partition_map",
    "resolve_partition",
    "synthetic_name",
]
