"""
installrag Pipeline
===================

Processing pipeline for installation documents.

Components:
- parse_installation_document: Validation of raw content
- build_global_partition_map / build_area_partition_maps: Partition resolution
- build_endpoint_area_relations: Endpoint -> area assignment
- compute_statistics: Installation counts
- DocumentSynthesizer: Summary and fallback records
- InstallationLoader: End-to-end orchestration

Example:
    from installrag.pipeline import InstallationLoader

    loader = InstallationLoader()
    result = loader.load_file("data/installation-config.json")
"""

from installrag.pipeline.diagnostics import Diagnostics, DiagnosticEntry
from installrag.pipeline.parsing import (
    LoadError,
    LoadErrorKind,
    count_tokens,
    has_areas,
    has_usable_endpoints,
    parse_installation_document,
)
from installrag.pipeline.partitions import (
    build_area_partition_maps,
    build_global_partition_map,
    resolve_partition,
)
from installrag.pipeline.relations import RelationReport, build_endpoint_area_relations
from installrag.pipeline.statistics import compute_statistics
from installrag.pipeline.synthesis import DocumentSynthesizer, build_fallback_result
from installrag.pipeline.ingestion import (
    InstallationLoader,
    load_installation,
    load_installation_file,
)

__all__ = [
    "Diagnostics",
    "DiagnosticEntry",
    "LoadError",
    "LoadErrorKind",
    "count_tokens",
    "has_areas",
    "has_usable_endpoints",
    "parse_installation_document",
    "build_area_partition_maps",
    "build_global_partition_map",
    "resolve_partition",
    "RelationReport",
    "build_endpoint_area_relations",
    "compute_statistics",
    "DocumentSynthesizer",
    "build_fallback_result",
    "InstallationLoader",
    "load_installation",
    "load_installation_file",
]
