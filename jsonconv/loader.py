"""Input file loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from .errors import ParseError
from .logging import get_logger

logger = get_logger(__name__)


def load_json_file(path: Union[str, Path]) -> Any:
    """Read a UTF-8 JSON document from disk and return the parsed value."""
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ParseError(f"Input file not found: {file_path}", path=str(file_path)) from exc
    except IsADirectoryError as exc:
        raise ParseError(f"Input path is a directory: {file_path}", path=str(file_path)) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Input file is not valid UTF-8: {file_path}", path=str(file_path)) from exc
    except OSError as exc:
        raise ParseError(f"Unable to read {file_path}: {exc}", path=str(file_path)) from exc

    # Tolerate a UTF-8 byte order mark
    if content.startswith("\ufeff"):
        content = content[1:]

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON in {file_path}: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            path=str(file_path),
            line=exc.lineno,
            column=exc.colno,
        ) from exc
    except RecursionError as exc:
        raise ParseError(f"JSON in {file_path} is nested too deeply to parse", path=str(file_path)) from exc

    logger.info("input_loaded", path=str(file_path), size=len(content))
    return data
