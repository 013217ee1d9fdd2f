"""
Output Record Models
====================

Records handed to the indexing/retrieval layer. Each record pairs a
serialized JSON payload (page_content) with a typed attribute set
(RecordMetadata) used for filtering at retrieval time.

Record metadata is serialized with camelCase keys, the format the
retrieval layer filters on:

```python
{
    "source": "installation-config.json",
    "type": "installation-config",
    "chunkType": "summary",
    "isValid": True,
    "totalEndpoints": 732,
    "totalAreas": 12,
    "hasPartitions": True,
    ...
}
```
"""

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID, uuid4

from installrag.models.installation import (
    AreaPartitionMap,
    EndpointAreaRelation,
    InstallationStatistics,
)

if TYPE_CHECKING:
    from installrag.pipeline.diagnostics import Diagnostics


class DocumentType(Enum):
    """Document type tags."""
    INSTALLATION_CONFIG = "installation-config"


class ChunkType(Enum):
    """Role of a record for the retrieval layer."""
    SUMMARY = "summary"
    DETAIL = "detail"
    AREA = "area"
    FALLBACK = "fallback"


# snake_case attribute -> serialized key, where camelCase differs
_KEY_ALIASES = {
    "is_valid": "isValid",
    "chunk_type": "chunkType",
    "device_type": "deviceType",
    "installation_name": "installationName",
    "total_endpoints": "totalEndpoints",
    "total_areas": "totalAreas",
    "has_partitions": "hasPartitions",
    "has_area_info": "hasAreaInfo",
    "category_name": "categoryName",
    "visualization_type": "visualizationType",
    "visualization_category": "visualizationCategory",
    "area_names": "areaNames",
    "area_uuids": "areaUuids",
    "parameters_count": "parametersCount",
    "default_parameter": "defaultParameter",
    "chunk_strategy": "chunkStrategy",
}


@dataclass
class RecordMetadata:
    """
    Attribute set attached to an OutputRecord.

    Every known facet is an explicit optional field; `extra` holds fields
    nobody anticipated. Unset facets are omitted from to_dict().

    Attributes:
        source: Source file name (or "fallback")
        loc: Full source path (or "internal")
        type: Document type tag
        is_valid: False only for fallback records
        timestamp: ISO-8601 creation time
        chunk_type: Record role (summary, detail, area, fallback)
        device_type: "installation" for summaries, "other" for fallbacks
        installation_name: Installation name, defaulted when unset
        total_endpoints: Endpoint count
        total_areas: Area count
        has_partitions: True iff the global partition map is non-empty
        has_area_info: True iff the document declares areas
        extra: Auxiliary fields, merged last without overriding known keys
    """

    # Universal fields
    source: str
    loc: str
    type: DocumentType = DocumentType.INSTALLATION_CONFIG
    is_valid: bool = True
    timestamp: str = ""
    chunk_type: ChunkType = ChunkType.SUMMARY
    device_type: Optional[str] = None

    # Installation facets
    name: Optional[str] = None
    installation_name: Optional[str] = None
    revision: Optional[Any] = None
    major: Optional[Any] = None
    minor: Optional[Any] = None
    total_endpoints: Optional[int] = None
    total_areas: Optional[int] = None
    has_partitions: Optional[bool] = None
    has_area_info: Optional[bool] = None

    # Device facets
    uuid: Optional[str] = None
    category: Optional[int] = None
    category_name: Optional[str] = None
    visualization_type: Optional[str] = None
    visualization_category: Optional[str] = None
    id: Optional[str] = None
    partitions: Optional[List[str]] = None
    location: Optional[List[str]] = None
    area_names: Optional[List[str]] = None
    area_uuids: Optional[List[str]] = None
    parameters_count: Optional[int] = None
    default_parameter: Optional[str] = None
    chunk_strategy: Optional[str] = None

    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary with camelCase keys."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            result[_KEY_ALIASES.get(f.name, f.name)] = value

        for key, value in self.extra.items():
            result.setdefault(key, value)
        return result


@dataclass(frozen=True)
class OutputRecord:
    """
    One record for the indexing/retrieval layer.

    Attributes:
        page_content: Serialized JSON payload
        metadata: Attribute set for filtering
        readable_text: Human-readable text (fallback records only)
        record_id: Unique UUID for this record
        token_count: Tokens in page_content
    """
    page_content: str
    metadata: RecordMetadata
    readable_text: Optional[str] = None
    record_id: UUID = field(default_factory=uuid4)
    token_count: int = 0

    @property
    def is_valid(self) -> bool:
        return self.metadata.is_valid

    @property
    def chunk_type(self) -> ChunkType:
        return self.metadata.chunk_type

    def payload(self) -> Dict[str, Any]:
        """Decode page_content."""
        return json.loads(self.page_content)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "id": str(self.record_id),
            "pageContent": self.page_content,
            "metadata": self.metadata.to_dict(),
            "tokenCount": self.token_count,
        }
        if self.readable_text is not None:
            result["readableText"] = self.readable_text
        return result


@dataclass
class LoadDocumentResult:
    """
    Result of loading one installation document.

    Always holds at least one record: the summary, or the fallback when
    the document had no usable endpoints.

    Attributes:
        records: Output records (one summary or one fallback)
        partition_map: Partition identifier -> resolved name
        relations: Endpoint identifier -> retained area relation
        area_maps: Per-area partition maps, in area order
        statistics: Installation counts (None for fallback results)
        diagnostics: Warnings and conflicts collected during the load
    """
    records: List["OutputRecord"]
    partition_map: Dict[str, str] = field(default_factory=dict)
    relations: Dict[str, EndpointAreaRelation] = field(default_factory=dict)
    area_maps: List[AreaPartitionMap] = field(default_factory=list)
    statistics: Optional[InstallationStatistics] = None
    diagnostics: Optional["Diagnostics"] = None

    @property
    def is_fallback(self) -> bool:
        return any(r.chunk_type == ChunkType.FALLBACK for r in self.records)

    @property
    def summary(self) -> Optional[OutputRecord]:
        for record in self.records:
            if record.chunk_type == ChunkType.SUMMARY:
                return record
        return None
