"""Configuration loader for jsonconv."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

INVALID_NAME_POLICIES = ("sanitize", "error")


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


@dataclass(slots=True)
class AppConfig:
    log_level: str = "WARNING"
    log_json: bool = False
    max_depth: int = 500
    xml_indent: int = 2
    json_indent: int = 4
    root_tag: str = "root"
    invalid_names: str = "sanitize"
    variable_name: str = "DATA"


def load_config() -> AppConfig:
    log_level = _get_env("JSONCONV_LOG_LEVEL", "WARNING").upper()
    log_json = _get_bool("JSONCONV_LOG_JSON", False)
    max_depth = max(1, _get_int("JSONCONV_MAX_DEPTH", 500))
    xml_indent = max(0, _get_int("JSONCONV_XML_INDENT", 2))
    json_indent = max(0, _get_int("JSONCONV_JSON_INDENT", 4))
    root_tag = _get_env("JSONCONV_ROOT_TAG", "root")

    invalid_names = _get_env("JSONCONV_INVALID_NAMES", "sanitize").lower()
    if invalid_names not in INVALID_NAME_POLICIES:
        raise ValueError(
            f"Environment variable JSONCONV_INVALID_NAMES must be one of {', '.join(INVALID_NAME_POLICIES)}"
        )

    variable_name = _get_env("JSONCONV_VARIABLE_NAME", "DATA")
    if not variable_name.isidentifier():
        raise ValueError("Environment variable JSONCONV_VARIABLE_NAME must be a valid identifier")

    return AppConfig(
        log_level=log_level,
        log_json=log_json,
        max_depth=max_depth,
        xml_indent=xml_indent,
        json_indent=json_indent,
        root_tag=root_tag,
        invalid_names=invalid_names,
        variable_name=variable_name,
    )
