"""Public configuration API for NoteSearch."""

from __future__ import annotations

from NoteSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from NoteSearch.config.output import OutputConfig
from NoteSearch.config.runtime import RuntimeConfig
from NoteSearch.config.search import SearchConfig
from NoteSearch.config.storage import StorageConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "SearchConfig",
    "StorageConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
