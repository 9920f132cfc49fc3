"""Render a format and write it next to the input file."""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from .errors import ConversionError
from .formats import OutputFormat, output_path_for
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class ConversionResult:
    format_key: str
    output_path: Path
    size: int


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write(target: Path, payload: bytes) -> None:
    # Keep an existing target's mode, otherwise match a plain write under the umask.
    mode = stat.S_IMODE(target.stat().st_mode) if target.exists() else _default_mode()
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_conversion(value: Any, fmt: OutputFormat, input_path: Union[str, Path]) -> ConversionResult:
    """Render ``value`` with ``fmt`` and store it as a sibling of ``input_path``.

    Rendering happens fully in memory first; the output file is only created
    once the conversion succeeded.
    """
    try:
        rendered = fmt.render(value)
    except ConversionError as exc:
        if exc.format_key is None:
            exc.format_key = fmt.key
        raise

    target = output_path_for(input_path, fmt)
    try:
        payload = rendered if isinstance(rendered, bytes) else rendered.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ConversionError(f"{fmt.label} output is not valid UTF-8 text: {exc.reason}", fmt.key) from exc
    try:
        _atomic_write(target, payload)
    except OSError as exc:
        raise ConversionError(f"Unable to write {target}: {exc}", fmt.key) from exc

    logger.info("conversion_written", format=fmt.key, path=str(target), size=len(payload))
    return ConversionResult(format_key=fmt.key, output_path=target, size=len(payload))
