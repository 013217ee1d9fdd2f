"""
Installation Loader
===================

Turns an installation document into records for the retrieval layer.

Flow:
    raw content
        ↓
    parse_installation_document      (fatal LoadError -> raised, no record)
        ↓
    endpoints present? ── no ──→ fallback record
        ↓ yes
    build_global_partition_map
    build_area_partition_maps        (only when areas are declared)
    build_endpoint_area_relations    (only when areas are declared)
        ↓
    compute_statistics
        ↓
    DocumentSynthesizer.build_summary ──→ LoadDocumentResult

Every non-fatal path yields at least one record.

Usage:
    loader = InstallationLoader()
    result = loader.load_file()               # reads config.file_path
    result = loader.load('{"endpoints": [...]}')
    for record in result.records:
        index.add(record.page_content, record.metadata.to_dict())
"""

from pathlib import Path
from typing import Optional, Union

import structlog

from installrag.config import LoaderConfig, get_loader_config
from installrag.models import LoadDocumentResult
from installrag.pipeline.diagnostics import Diagnostics
from installrag.pipeline.parsing import (
    LoadError,
    LoadErrorKind,
    has_areas,
    has_usable_endpoints,
    parse_installation_document,
)
from installrag.pipeline.partitions import (
    build_area_partition_maps,
    build_global_partition_map,
)
from installrag.pipeline.relations import build_endpoint_area_relations
from installrag.pipeline.statistics import compute_statistics
from installrag.pipeline.synthesis import DocumentSynthesizer, build_fallback_result

log = structlog.get_logger()


class InstallationLoader:
    """
    Loads one installation document per call.

    Calls are independent: each load gets its own Diagnostics unless one
    is passed in, and nothing is shared between loads except the config.

    Attributes:
        config: Loader configuration
        synthesizer: Record builder
    """

    def __init__(self, config: Optional[LoaderConfig] = None):
        self.config = config or get_loader_config()
        self.synthesizer = DocumentSynthesizer(self.config)

    def load(
        self,
        content: Optional[Union[str, bytes]],
        diagnostics: Optional[Diagnostics] = None,
    ) -> LoadDocumentResult:
        """
        Load an installation from already-read content.

        Args:
            content: Document text, or None if the source was unavailable
            diagnostics: Collector for warnings and conflicts

        Returns:
            LoadDocumentResult with one summary record, or one fallback
            record when the document has no usable endpoints

        Raises:
            LoadError: content missing, empty, not JSON, or not an object
        """
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        document = parse_installation_document(content, diagnostics)

        if not has_usable_endpoints(document):
            diagnostics.warning(
                LoadErrorKind.NO_USABLE_ENDPOINTS.value,
                "No valid endpoint found in document",
            )
            error = LoadError(
                LoadErrorKind.NO_USABLE_ENDPOINTS,
                "No valid endpoints in configuration",
            )
            return build_fallback_result(error, self.config, diagnostics)

        try:
            return self._build(document, diagnostics)
        except LoadError:
            raise
        except Exception as e:
            diagnostics.error(
                "mapping_failed",
                "Mapping failed, falling back",
                error=str(e),
                error_type=type(e).__name__,
            )
            log.exception("Installation mapping failed", error=str(e))
            return build_fallback_result(e, self.config, diagnostics)

    def _build(self, document: dict, diagnostics: Diagnostics) -> LoadDocumentResult:
        areas_declared = has_areas(document)
        diagnostics.info(
            "data_structure",
            f"Data structure: {len(document['endpoints'])} endpoints, "
            f"{len(document['areas']) if areas_declared else 0} areas",
            endpoints=len(document["endpoints"]),
            areas=len(document["areas"]) if areas_declared else 0,
        )

        partition_map = build_global_partition_map(document, diagnostics, self.config)

        if areas_declared:
            area_maps = build_area_partition_maps(document, diagnostics, self.config)
            relations = build_endpoint_area_relations(document, area_maps, diagnostics, self.config)
        else:
            area_maps = []
            relations = {}

        statistics = compute_statistics(document, partition_map, self.config.category_codes())
        record = self.synthesizer.build_summary(
            document,
            statistics,
            partition_map,
            has_area_info=areas_declared,
        )

        log.info(
            "Installation summary record created",
            endpoints=statistics.total_endpoints,
            areas=statistics.total_areas,
            partitions=statistics.total_partitions,
            relations=len(relations),
            tokens=record.token_count,
        )

        return LoadDocumentResult(
            records=[record],
            partition_map=partition_map,
            relations=relations,
            area_maps=area_maps,
            statistics=statistics,
            diagnostics=diagnostics,
        )

    def load_file(
        self,
        path: Optional[Union[str, Path]] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> LoadDocumentResult:
        """
        Read an installation file and load it.

        Args:
            path: File to read (default: config.file_path)
            diagnostics: Collector for warnings and conflicts

        Raises:
            LoadError: MISSING_SOURCE when the file cannot be read, plus the
                       kinds raised by load()
        """
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        file_path = Path(path) if path is not None else self.config.file_path

        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            diagnostics.error(
                "missing_source",
                "Document not found or not readable",
                path=str(file_path),
                error=str(e),
            )
            raise LoadError(
                LoadErrorKind.MISSING_SOURCE,
                f"Execution blocked: cannot read {file_path}",
            ) from e

        log.info("Installation document read", path=str(file_path), length=len(content))
        return self.load(content, diagnostics)


def load_installation(
    content: Optional[Union[str, bytes]],
    config: Optional[LoaderConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> LoadDocumentResult:
    """
    Convenience function to load installation content.

    Args:
        content: Document text
        config: Loader configuration
        diagnostics: Collector for warnings and conflicts

    Returns:
        LoadDocumentResult
    """
    return InstallationLoader(config).load(content, diagnostics)


def load_installation_file(
    path: Optional[Union[str, Path]] = None,
    config: Optional[LoaderConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> LoadDocumentResult:
    """
    Convenience function to load an installation file.
    """
    return InstallationLoader(config).load_file(path, diagnostics)


__all__ = [
    "InstallationLoader",
    "load_installation",
    "load_installation_file",
]
