"""Output format registry and the text converters behind it."""

from __future__ import annotations

import base64
import json
import pprint
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import quote

from .config import AppConfig
from .errors import ConversionError
from .xml_converter import XmlOptions, convert_to_xml


@dataclass(frozen=True, slots=True)
class OutputFormat:
    key: str
    label: str
    suffix: str
    extension: str
    render: Callable[[Any], Union[str, bytes]]


def _dumps(value: Any, format_key: str, **kwargs: Any) -> str:
    try:
        text = json.dumps(value, ensure_ascii=False, allow_nan=False, **kwargs)
        # Lone surrogates survive json.loads but cannot be written as UTF-8.
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ConversionError(f"Value contains text that is not valid Unicode: {exc.reason}", format_key) from exc
    except (TypeError, ValueError, RecursionError) as exc:
        raise ConversionError(f"Unable to serialize value: {exc}", format_key) from exc
    return text


def to_minified(value: Any) -> str:
    return _dumps(value, "minified", separators=(",", ":"))


def to_pretty(value: Any, indent: int = 4) -> str:
    return _dumps(value, "pretty", indent=indent) + "\n"


def to_escaped_string(value: Any) -> str:
    """Minified JSON wrapped as a JSON string literal, ready to paste into code."""
    return json.dumps(_dumps(value, "escaped", separators=(",", ":")), ensure_ascii=False)


def to_base64(value: Any) -> str:
    minified = _dumps(value, "base64", separators=(",", ":"))
    return base64.b64encode(minified.encode("utf-8")).decode("ascii")


def to_urlencoded(value: Any) -> str:
    return quote(_dumps(value, "urlencoded", separators=(",", ":")), safe="")


def to_python_literal(value: Any, variable_name: str = "DATA", width: int = 88) -> str:
    # Non-finite numbers are rejected the same way the JSON outputs reject them.
    _dumps(value, "python")
    try:
        body = pprint.pformat(value, width=max(20, width - len(variable_name) - 3), sort_dicts=False)
    except RecursionError as exc:
        raise ConversionError("Value is nested too deeply for a Python literal", "python") from exc
    return f"{variable_name} = {body}\n"


def to_javascript_literal(value: Any, variable_name: str = "DATA", indent: int = 4) -> str:
    body = _dumps(value, "javascript", indent=indent)
    return f"const {variable_name} = {body};\n\nexport default {variable_name};\n"


def build_registry(config: Optional[AppConfig] = None) -> Dict[str, OutputFormat]:
    """Build the ordered format registry, binding config-driven options."""
    cfg = config or AppConfig()
    xml_options = XmlOptions(
        root_tag=cfg.root_tag,
        max_depth=cfg.max_depth,
        indent=cfg.xml_indent,
        invalid_names=cfg.invalid_names,
    )

    formats: List[OutputFormat] = [
        OutputFormat("escaped", "Escaped string literal", "escaped", "txt", to_escaped_string),
        OutputFormat("minified", "Minified JSON", "minified", "json", to_minified),
        OutputFormat(
            "pretty",
            "Pretty-printed JSON",
            "pretty",
            "json",
            lambda value: to_pretty(value, indent=cfg.json_indent),
        ),
        OutputFormat("base64", "Base64", "base64", "txt", to_base64),
        OutputFormat("urlencoded", "URL-encoded", "urlencoded", "txt", to_urlencoded),
        OutputFormat(
            "python",
            "Python literal",
            "python",
            "py",
            lambda value: to_python_literal(value, cfg.variable_name),
        ),
        OutputFormat(
            "javascript",
            "JavaScript literal",
            "javascript",
            "js",
            lambda value: to_javascript_literal(value, cfg.variable_name, cfg.json_indent),
        ),
        OutputFormat("xml", "XML", "converted", "xml", lambda value: convert_to_xml(value, xml_options)),
    ]
    return {fmt.key: fmt for fmt in formats}


def output_path_for(input_path: Union[str, Path], fmt: OutputFormat) -> Path:
    """Sibling output path: ``<stem>_<suffix>.<extension>``."""
    source = Path(input_path)
    return source.with_name(f"{source.stem}_{fmt.suffix}.{fmt.extension}")
