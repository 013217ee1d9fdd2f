"""
Document Synthesizer
====================

Builds the records handed to the retrieval layer.

Summary record (one per successful load). page_content:
```json
{
    "type": "installation-config",
    "metadata": {...},
    "statistics": {"totalEndpoints": 732, "totalAreas": 12, ...},
    "endpoints": [...],
    "areas": [...],
    "globalPartitionMap": {"9f1c2a7e-...": "Ground floor"}
}
```

Fallback record (when the document has no usable endpoints or a mapping
stage fails). page_content:
```json
{"error": "Failed to load document", "message": "...", "fallbackType": "empty_system"}
```
"""

import json
import random
import string
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from installrag.config import LoaderConfig, get_loader_config
from installrag.models import (
    ChunkType,
    DocumentType,
    InstallationStatistics,
    LoadDocumentResult,
    OutputRecord,
    RecordMetadata,
)
from installrag.pipeline.diagnostics import Diagnostics, ensure_diagnostics
from installrag.pipeline.parsing import count_tokens

FALLBACK_MESSAGE = "System temporarily unavailable. Please check the configuration and try again."
FALLBACK_SOURCE = "fallback"
FALLBACK_LOC = "internal"

_BASE36 = string.digits + string.ascii_lowercase


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def fallback_identifier(length: int = 7) -> str:
    """Random identifier for fallback records, e.g. "fallback-k3x9q2a"."""
    return "fallback-" + "".join(random.choices(_BASE36, k=length))


class DocumentSynthesizer:
    """
    Assembles summary and fallback OutputRecords.

    Usage:
        synthesizer = DocumentSynthesizer(config)
        record = synthesizer.build_summary(document, statistics, partition_map)
    """

    def __init__(self, config: Optional[LoaderConfig] = None):
        self.config = config or get_loader_config()

    def build_summary(
        self,
        document: Dict[str, Any],
        statistics: InstallationStatistics,
        partition_map: Mapping[str, str],
        has_area_info: bool = False,
    ) -> OutputRecord:
        """
        Build the single summary record of an installation.

        Endpoints and areas are copied verbatim into the payload; declared
        installation metadata (name, revision, major, minor) passes through
        unmodified.

        Args:
            document: Parsed installation document
            statistics: Output of compute_statistics
            partition_map: Output of build_global_partition_map
            has_area_info: Whether the document declares areas

        Returns:
            OutputRecord with chunk_type SUMMARY and is_valid True
        """
        declared = document.get("metadata")
        if not isinstance(declared, dict):
            declared = {}

        content = {
            "type": DocumentType.INSTALLATION_CONFIG.value,
            "metadata": declared,
            "statistics": statistics.to_dict(),
            "endpoints": document.get("endpoints"),
            "areas": document.get("areas"),
            "globalPartitionMap": dict(partition_map),
        }
        page_content = json.dumps(content, ensure_ascii=False)

        metadata = RecordMetadata(
            source=self.config.target_file,
            loc=str(self.config.file_path),
            type=DocumentType.INSTALLATION_CONFIG,
            is_valid=True,
            timestamp=_now_iso(),
            chunk_type=ChunkType.SUMMARY,
            device_type="installation",
            name=declared.get("name"),
            installation_name=declared.get("name") or self.config.default_installation_name,
            revision=declared.get("revision"),
            major=declared.get("major"),
            minor=declared.get("minor"),
            total_endpoints=statistics.total_endpoints,
            total_areas=statistics.total_areas,
            has_partitions=len(partition_map) > 0,
            has_area_info=has_area_info,
        )

        return OutputRecord(
            page_content=page_content,
            metadata=metadata,
            token_count=count_tokens(page_content),
        )

    def build_fallback(self, error: Any) -> OutputRecord:
        """
        Build the degraded record used when no summary can be produced.

        Args:
            error: Exception or message describing why loading failed

        Returns:
            OutputRecord with chunk_type FALLBACK and is_valid False
        """
        message = str(error) if error is not None else "Unknown error"
        page_content = json.dumps({
            "error": "Failed to load document",
            "message": message,
            "fallbackType": "empty_system",
        })

        metadata = RecordMetadata(
            source=FALLBACK_SOURCE,
            loc=FALLBACK_LOC,
            type=DocumentType.INSTALLATION_CONFIG,
            is_valid=False,
            timestamp=_now_iso(),
            chunk_type=ChunkType.FALLBACK,
            device_type="other",
            uuid=fallback_identifier(),
            name="Fallback Document",
            category=self.config.non_device_code,
            category_name="fallback",
            visualization_type="N/A",
            visualization_category="fallback",
            id="0",
            partitions=[],
            location=[],
            area_names=[],
            area_uuids=[],
            parameters_count=0,
            default_parameter="",
            chunk_strategy="standard",
            has_area_info=True,
        )

        return OutputRecord(
            page_content=page_content,
            metadata=metadata,
            readable_text=FALLBACK_MESSAGE,
            token_count=count_tokens(page_content),
        )


def build_fallback_result(
    error: Any,
    config: Optional[LoaderConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> LoadDocumentResult:
    """
    Wrap a fallback record in a LoadDocumentResult.

    The partition map and the relations are always empty.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    record = DocumentSynthesizer(config).build_fallback(error)
    diagnostics.warning(
        "fallback_generated",
        "Fallback document generated",
        reason=str(error),
        fallback_uuid=record.metadata.uuid,
    )
    return LoadDocumentResult(
        records=[record],
        partition_map={},
        relations={},
        area_maps=[],
        statistics=None,
        diagnostics=diagnostics,
    )


__all__ = [
    "DocumentSynthesizer",
    "FALLBACK_MESSAGE",
    "build_fallback_result",
    "fallback_identifier",
]
