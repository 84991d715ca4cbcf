"""
Configuration domain module
"""
from .models import Mapping, ServerConfig, WWConfig
from .resolver import (
    MappingResolver,
    ServerSelection,
    MappingSelection,
    find_servers_for_path,
    find_mapping,
    parse_excludes,
)

__all__ = [
    "Mapping",
    "ServerConfig",
    "WWConfig",
    "MappingResolver",
    "ServerSelection",
    "MappingSelection",
    "find_servers_for_path",
    "find_mapping",
    "parse_excludes",
]
