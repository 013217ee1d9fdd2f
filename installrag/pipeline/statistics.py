"""
Installation Statistics
=======================

Counts endpoints, areas and partitions, and classifies endpoints by
category code into sensors, actuators and controllers.
"""

from typing import Any, Dict, Mapping, Optional

from installrag.config import CategoryCodes
from installrag.models import InstallationStatistics


def _sequence_length(value: Any) -> int:
    return len(value) if isinstance(value, list) else 0


def compute_statistics(
    document: Dict[str, Any],
    partition_map: Mapping[str, str],
    codes: Optional[CategoryCodes] = None,
) -> InstallationStatistics:
    """
    Compute installation-wide counts.

    Pure function: same document and partition map, same counts.

    Args:
        document: Parsed installation document
        partition_map: Output of build_global_partition_map
        codes: Category codes (defaults: sensor 18, actuators 11/12/15,
               controllers 0/1/2)

    Returns:
        InstallationStatistics
    """
    codes = codes or CategoryCodes()
    endpoints = document.get("endpoints")
    if not isinstance(endpoints, list):
        endpoints = []

    categories = [ep.get("category") for ep in endpoints if isinstance(ep, dict)]

    return InstallationStatistics(
        total_endpoints=len(endpoints),
        total_areas=_sequence_length(document.get("areas")),
        total_partitions=len(partition_map),
        sensor_count=sum(1 for c in categories if codes.is_sensor(c)),
        actuator_count=sum(1 for c in categories if codes.is_actuator(c)),
        controller_count=sum(1 for c in categories if codes.is_controller(c)),
    )
