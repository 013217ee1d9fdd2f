"""
installrag Data Models
======================

Dataclasses shared across the package.

Kept in one place so pipeline and retriever modules do not import each
other.
"""

from installrag.models.installation import (
    AreaPartitionMap,
    EndpointAreaRelation,
    InstallationStatistics,
    PartitionRef,
)
from installrag.models.records import (
    ChunkType,
    DocumentType,
    LoadDocumentResult,
    OutputRecord,
    RecordMetadata,
)

__all__ = [
    "AreaPartitionMap",
    "EndpointAreaRelation",
    "InstallationStatistics",
    "PartitionRef",
    "ChunkType",
    "DocumentType",
    "LoadDocumentResult",
    "OutputRecord",
    "RecordMetadata",
]
