"""Core JSON to XML conversion logic.

A parsed JSON value is walked with an explicit work stack and mapped onto an
lxml element tree below a synthetic root:

- object members become children named after their keys, in insertion order
- array elements become ``<item index="N">`` children
- scalars become the text of the current element (``null`` leaves it empty)
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from lxml import etree

from .errors import ConversionError
from .logging import get_logger

logger = get_logger(__name__)

ITEM_TAG = "item"
INDEX_ATTRIBUTE = "index"
ORIGINAL_KEY_ATTRIBUTE = "key"

# XML 1.0 (5th edition) name characters, minus ':' which lxml reserves for namespaces.
_NAME_START_CHARS = (
    "A-Z_a-z"
    "\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D\u037F-\u1FFF"
    "\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF"
    "\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_NAME_CHARS = _NAME_START_CHARS + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"

_VALID_NAME = re.compile(f"[{_NAME_START_CHARS}][{_NAME_CHARS}]*")
_INVALID_NAME_CHAR = re.compile(f"[^{_NAME_CHARS}]")
_VALID_START = re.compile(f"^[{_NAME_START_CHARS}]")


class JsonKind(enum.Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def classify(value: Any) -> JsonKind:
    """Return the JSON kind of a parsed value."""
    if value is None:
        return JsonKind.NULL
    # bool must be checked before int
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise ConversionError(f"Unsupported value of type {type(value).__name__}", "xml")


@dataclass(slots=True)
class XmlOptions:
    root_tag: str = "root"
    max_depth: int = 500
    indent: int = 2
    invalid_names: str = "sanitize"
    xml_declaration: bool = True


def is_valid_name(name: str) -> bool:
    """Check whether ``name`` can be used as an element name as is."""
    if not _VALID_NAME.fullmatch(name):
        return False
    return not name.lower().startswith("xml")


def sanitize_name(name: str) -> str:
    """Turn an arbitrary object key into a usable element name."""
    if is_valid_name(name):
        return name
    if not name:
        return "_"
    cleaned = _INVALID_NAME_CHAR.sub("_", name)
    if not _VALID_START.match(cleaned) or cleaned.lower().startswith("xml"):
        cleaned = "_" + cleaned
    return cleaned


def scalar_text(value: Any, kind: JsonKind) -> Optional[str]:
    """Text form of a scalar; ``None`` means the element stays empty."""
    if kind is JsonKind.NULL:
        return None
    if kind is JsonKind.BOOL:
        return "true" if value else "false"
    if kind is JsonKind.NUMBER:
        try:
            return json.dumps(value, allow_nan=False)
        except ValueError as exc:
            raise ConversionError(f"Non-finite number {value!r} cannot be written", "xml") from exc
    if kind is JsonKind.STRING:
        return value
    raise ConversionError(f"{kind.value} is not a scalar", "xml")


def _child_for_key(parent: etree._Element, key: str, options: XmlOptions) -> etree._Element:
    if is_valid_name(key):
        return etree.SubElement(parent, key)
    if options.invalid_names == "error":
        raise ConversionError(f"Object key {key!r} is not a valid XML element name", "xml")
    child = etree.SubElement(parent, sanitize_name(key))
    child.set(ORIGINAL_KEY_ATTRIBUTE, key)
    return child


def build_xml_tree(value: Any, options: Optional[XmlOptions] = None) -> etree._Element:
    """Map a parsed JSON value onto an element tree rooted at ``options.root_tag``."""
    options = options or XmlOptions()

    try:
        root = etree.Element(options.root_tag)
    except ValueError as exc:
        raise ConversionError(f"Invalid root tag {options.root_tag!r}: {exc}", "xml") from exc

    stack: List[Tuple[etree._Element, Any, int]] = [(root, value, 0)]
    while stack:
        element, current, depth = stack.pop()
        kind = classify(current)
        try:
            if kind is JsonKind.OBJECT:
                if current and depth >= options.max_depth:
                    raise ConversionError(f"Nesting deeper than {options.max_depth} levels", "xml")
                for key, item in current.items():
                    stack.append((_child_for_key(element, key, options), item, depth + 1))
            elif kind is JsonKind.ARRAY:
                if current and depth >= options.max_depth:
                    raise ConversionError(f"Nesting deeper than {options.max_depth} levels", "xml")
                for index, item in enumerate(current):
                    child = etree.SubElement(element, ITEM_TAG)
                    child.set(INDEX_ATTRIBUTE, str(index))
                    stack.append((child, item, depth + 1))
            else:
                element.text = scalar_text(current, kind)
        except ValueError as exc:
            # lxml rejects control characters and malformed names with ValueError
            raise ConversionError(f"Cannot build element under <{element.tag}>: {exc}", "xml") from exc

    return root


def convert_to_xml(value: Any, options: Optional[XmlOptions] = None) -> bytes:
    """Convert a parsed JSON value into indented UTF-8 XML."""
    options = options or XmlOptions()
    root = build_xml_tree(value, options)

    etree.indent(root, space=" " * options.indent)
    xml_bytes = etree.tostring(
        root,
        encoding="utf-8",
        xml_declaration=options.xml_declaration,
        pretty_print=True,
    )
    logger.debug("xml_built", root_tag=options.root_tag, size=len(xml_bytes))
    return xml_bytes
