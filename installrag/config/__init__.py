"""
Configuration module for installrag.
"""

from .settings import (
    CategoryCodes,
    LoaderConfig,
    get_loader_config,
    set_loader_config,
    load_yaml_defaults,
)

__all__ = [
    "CategoryCodes",
    "LoaderConfig",
    "get_loader_config",
    "set_loader_config",
    "load_yaml_defaults",
]
