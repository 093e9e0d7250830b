"""Output domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from NoteSearch.config.common import expect_choice, get_optional_value, get_section

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration.

    Attributes:
        format: `console` for readable text, `json` for machine-readable output.
    """

    format: str


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load the optional `output` section; defaults to console output.

    Raises:
        TypeError: If `output.format` is not a string.
        ValueError: If `output.format` is unknown.
    """
    section = get_section(raw, "output", required=False)
    return OutputConfig(
        format=expect_choice(get_optional_value(section, "format", "console"), "output.format", _ALLOWED_FORMATS),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints."""
    if config.format not in _ALLOWED_FORMATS:
        raise ValueError(f"output.format must be one of {sorted(_ALLOWED_FORMATS)}")
