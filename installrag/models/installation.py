"""
Installation Topology Models
============================

Dataclasses for the relationships reconstructed from an installation
document: areas own partitions, endpoints are wired into partitions,
and an endpoint belongs to the area it shares a partition with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class PartitionRef:
    """
    A partition resolved to an identifier and a display name.

    Partitions are never stored on their own; they only exist as
    references from areas and endpoints.
    """
    uuid: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"uuid": self.uuid, "name": self.name}


@dataclass
class AreaPartitionMap:
    """
    Partitions owned by one area.

    Attributes:
        area_uuid: Area identifier
        area_name: Area display name
        partitions: Resolved partitions, in declaration order
    """
    area_uuid: str
    area_name: str
    partitions: List[PartitionRef] = field(default_factory=list)

    def partition_uuids(self) -> List[str]:
        return [p.uuid for p in self.partitions]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "areaUuid": self.area_uuid,
            "areaName": self.area_name,
            "partitions": [p.to_dict() for p in self.partitions],
        }


@dataclass
class EndpointAreaRelation:
    """
    Association between one endpoint and the area it was assigned to.

    Attributes:
        endpoint_uuid: Endpoint identifier
        endpoint_name: Endpoint display name (synthetic when unnamed)
        area_uuid: Area identifier
        area_name: Area display name
        partition_uuids: Partitions shared by endpoint and area
        location: Names of the shared partitions
    """
    endpoint_uuid: str
    endpoint_name: str
    area_uuid: str
    area_name: str
    partition_uuids: List[str] = field(default_factory=list)
    location: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "endpointUuid": self.endpoint_uuid,
            "endpointName": self.endpoint_name,
            "areaUuid": self.area_uuid,
            "areaName": self.area_name,
            "partitionUuids": list(self.partition_uuids),
            "location": list(self.location),
        }


@dataclass(frozen=True)
class InstallationStatistics:
    """Installation-wide counts."""
    total_endpoints: int = 0
    total_areas: int = 0
    total_partitions: int = 0
    sensor_count: int = 0
    actuator_count: int = 0
    controller_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalEndpoints": self.total_endpoints,
            "totalAreas": self.total_areas,
            "totalPartitions": self.total_partitions,
            "sensorCount": self.sensor_count,
            "actuatorCount": self.actuator_count,
            "controllerCount": self.controller_count,
        }
