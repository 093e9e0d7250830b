"""Shared helpers for configuration loading and validation.

Type errors raise `TypeError`, missing or out-of-range values raise
`ValueError`; both name the full config key.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from the root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or an empty mapping for a missing optional section.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return `section[field]`, raising ValueError naming `config_key` if absent."""
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate an integer; booleans are rejected even though they subclass int."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings, reporting the index of a bad item."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{config_key}[{idx}] must be a string")
        out.append(item)
    return out


def expect_choice(value: Any, config_key: str, choices: Iterable[str]) -> str:
    """Validate a case-insensitive string choice and return it lowercased.

    Raises:
        TypeError: If value is not a string.
        ValueError: If value is not one of `choices`.
    """
    allowed = sorted(choices)
    normalized = expect_str(value, config_key).strip().lower()
    if normalized not in allowed:
        raise ValueError(f"{config_key} must be one of {allowed}")
    return normalized
