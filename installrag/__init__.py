"""
installrag: Installation Topology for Retrieval
===============================================

Loads the configuration document of a physical installation (endpoints,
areas, partitions), reconstructs which endpoint sits in which area, and
produces records ready to be indexed by a retrieval backend.

Quick Start:
    from installrag import InstallationLoader, RelevanceFilter

    loader = InstallationLoader()
    result = loader.load_file("data/installation-config.json")

    for record in result.records:
        vector_store.add(record.page_content, record.metadata.to_dict())

    # Query time
    retrieved = vector_store.search("kitchen sensors")
    kept = RelevanceFilter.for_ranking().filter(retrieved, "kitchen sensors")

Components:
- config: LoaderConfig, CategoryCodes
- models: OutputRecord, RecordMetadata, EndpointAreaRelation, ...
- pipeline: InstallationLoader, partition/relation builders, statistics
- retriever: RelevanceFilter
"""

__version__ = "0.1.0"

from installrag.config import CategoryCodes, LoaderConfig, get_loader_config
from installrag.models import (
    ChunkType,
    EndpointAreaRelation,
    LoadDocumentResult,
    OutputRecord,
    RecordMetadata,
)
from installrag.pipeline import (
    Diagnostics,
    InstallationLoader,
    LoadError,
    LoadErrorKind,
    load_installation,
    load_installation_file,
)
from installrag.retriever import RelevanceFilter, filter_by_content_relevance

__all__ = [
    # Config
    "CategoryCodes",
    "LoaderConfig",
    "get_loader_config",
    # Models
    "ChunkType",
    "EndpointAreaRelation",
    "LoadDocumentResult",
    "OutputRecord",
    "RecordMetadata",
    # Pipeline
    "Diagnostics",
    "InstallationLoader",
    "LoadError",
    "LoadErrorKind",
    "load_installation",
    "load_installation_file",
    # Retriever
    "RelevanceFilter",
    "filter_by_content_relevance",
]
