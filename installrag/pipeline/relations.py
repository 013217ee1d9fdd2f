"""
Endpoint-Area Relations
=======================

Assigns each endpoint to an area by intersecting the endpoint's partitions
with the partitions of every area.

Tie-break: areas are scanned in the order of the area maps and the first
area sharing at least one partition wins. Later matches are recorded as
conflicts and discarded, so each endpoint keeps a single area even when
the source topology places it in several.

    Endpoint e1 (partitions: p1, p2)
        Kitchen  [p1]      -> relation e1 -> Kitchen, location [p1 name]
        Hallway  [p2, p3]  -> conflict, ignored
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from installrag.config import LoaderConfig, get_loader_config
from installrag.models import AreaPartitionMap, EndpointAreaRelation
from installrag.pipeline.diagnostics import Diagnostics, ensure_diagnostics
from installrag.pipeline.partitions import synthetic_name

# Relations echoed in the final report
_REPORT_SAMPLE_SIZE = 3


@dataclass
class RelationReport:
    """Counters collected while relating endpoints to areas."""
    endpoints_processed: int = 0
    endpoints_skipped: int = 0
    relations_created: int = 0
    conflicts: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "endpoints_processed": self.endpoints_processed,
            "endpoints_skipped": self.endpoints_skipped,
            "relations_created": self.relations_created,
            "conflicts": self.conflicts,
        }


def build_endpoint_area_relations(
    document: Dict[str, Any],
    area_maps: List[AreaPartitionMap],
    diagnostics: Optional[Diagnostics] = None,
    config: Optional[LoaderConfig] = None,
) -> Dict[str, EndpointAreaRelation]:
    """
    Relate every endpoint to the first area it shares a partition with.

    Args:
        document: Parsed installation document
        area_maps: Output of build_area_partition_maps
        diagnostics: Collector for skipped endpoints and conflicts
        config: Naming configuration for unnamed endpoints

    Returns:
        Dict endpoint uuid -> EndpointAreaRelation, in endpoint order.
        Empty when the installation has no areas or no area maps.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    config = config or get_loader_config()
    relations: Dict[str, EndpointAreaRelation] = {}

    if not isinstance(document.get("areas"), list):
        diagnostics.warning("no_areas", "No areas found to build relationships")
        return relations

    if not area_maps:
        diagnostics.warning("no_area_maps", "No partition maps available to build relationships")
        return relations

    endpoints = document.get("endpoints")
    if not isinstance(endpoints, list):
        return relations

    report = RelationReport()

    for index, endpoint in enumerate(endpoints):
        report.endpoints_processed += 1

        if (
            not isinstance(endpoint, dict)
            or not endpoint.get("uuid")
            or isinstance(endpoint["uuid"], (dict, list))
        ):
            diagnostics.warning(
                "endpoint_invalid",
                f"Endpoint {index} invalid or missing UUID",
                endpoint_index=index,
            )
            report.endpoints_skipped += 1
            continue

        try:
            _relate_endpoint(endpoint, area_maps, relations, report, diagnostics, config)
        except (TypeError, ValueError) as e:
            diagnostics.warning(
                "endpoint_invalid",
                f"Endpoint {index} invalid",
                endpoint_index=index,
                error=str(e),
            )
            report.endpoints_skipped += 1

    _log_report(report, relations, area_maps, diagnostics)
    return relations


def _relate_endpoint(
    endpoint: Dict[str, Any],
    area_maps: List[AreaPartitionMap],
    relations: Dict[str, EndpointAreaRelation],
    report: RelationReport,
    diagnostics: Diagnostics,
    config: LoaderConfig,
) -> None:
    declared = endpoint.get("partitions")
    if not isinstance(declared, list) or not declared:
        return

    endpoint_uuid = endpoint["uuid"]
    endpoint_name = endpoint.get("name") or synthetic_name(
        str(endpoint_uuid), config.device_prefix, config.prefix_length
    )
    declared_set = {p for p in declared if isinstance(p, str)}

    for area_map in area_maps:
        shared = [p for p in area_map.partitions if p.uuid in declared_set]
        if not shared:
            continue

        existing = relations.get(endpoint_uuid)
        if existing is not None:
            report.conflicts += 1
            diagnostics.info(
                "relation_conflict",
                f"Endpoint {endpoint_uuid} already mapped to {existing.area_name}, "
                f"also found in {area_map.area_name}",
                endpoint=endpoint_uuid,
                kept_area=existing.area_uuid,
                discarded_area=area_map.area_uuid,
            )
            continue

        relations[endpoint_uuid] = EndpointAreaRelation(
            endpoint_uuid=endpoint_uuid,
            endpoint_name=endpoint_name,
            area_uuid=area_map.area_uuid,
            area_name=area_map.area_name,
            partition_uuids=[p.uuid for p in shared],
            location=[p.name for p in shared],
        )
        report.relations_created += 1
        diagnostics.debug(
            "relation_created",
            f"Relationship created: {endpoint_name} -> {area_map.area_name} "
            f"({len(shared)} shared partitions)",
            endpoint=endpoint_uuid,
            area=area_map.area_uuid,
        )


def _log_report(
    report: RelationReport,
    relations: Dict[str, EndpointAreaRelation],
    area_maps: List[AreaPartitionMap],
    diagnostics: Diagnostics,
) -> None:
    """Summarize the relation build; list area partitions when nothing matched."""
    diagnostics.info(
        "relation_report",
        f"Endpoint-area relationships: {report.relations_created} created "
        f"from {report.endpoints_processed} endpoints",
        **report.to_dict(),
    )

    if relations:
        sample = list(relations.values())[:_REPORT_SAMPLE_SIZE]
        diagnostics.debug(
            "relation_sample",
            "First relationships created",
            relations=[f"{r.endpoint_name} -> {r.area_name}" for r in sample],
        )
        return

    diagnostics.warning(
        "no_relations",
        "No relationships created: verify that areas and endpoints share partitions",
        area_partitions={
            m.area_name: [p.name for p in m.partitions] for m in area_maps
        },
    )


__all__ = [
    "RelationReport",
    "build_endpoint_area_relations",
]
