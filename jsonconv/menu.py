"""Interactive conversion menu."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer

from .errors import ConversionError
from .formats import OutputFormat, output_path_for
from .logging import get_logger
from .runtime import Runtime
from .writer import write_conversion

logger = get_logger(__name__)

EXIT_CHOICES = {"0", "q", "quit", "exit"}


def render_menu(formats: List[OutputFormat], input_path: Path) -> str:
    lines = [f"Converting: {input_path.name}"]
    for number, fmt in enumerate(formats, start=1):
        target = output_path_for(input_path, fmt).name
        lines.append(f"  {number}) {fmt.label:<24} -> {target}")
    lines.append("  0) Exit")
    return "\n".join(lines)


def resolve_choice(choice: str, formats: List[OutputFormat]) -> Optional[OutputFormat]:
    """Map a menu answer (number or format key) to a format, ``None`` if unknown."""
    choice = choice.strip().lower()
    if choice.isdigit():
        index = int(choice) - 1
        if 0 <= index < len(formats):
            return formats[index]
        return None
    for fmt in formats:
        if fmt.key == choice:
            return fmt
    return None


def run_menu(runtime: Runtime, input_path: Path, data: Any) -> int:
    """Loop until the user exits; return the number of files written."""
    formats = list(runtime.formats.values())
    written = 0

    while True:
        typer.echo("")
        typer.echo(render_menu(formats, input_path))
        try:
            choice = typer.prompt("Select an option")
        except typer.Abort:
            # End of input behaves like choosing Exit
            typer.echo("")
            break

        if choice.strip().lower() in EXIT_CHOICES:
            break

        fmt = resolve_choice(choice, formats)
        if fmt is None:
            typer.echo(f"Invalid selection: {choice}", err=True)
            continue

        try:
            result = write_conversion(data, fmt, input_path)
        except ConversionError as exc:
            logger.info("conversion_failed", format=fmt.key, error=str(exc))
            typer.echo(f"Error: {fmt.label} conversion failed: {exc}", err=True)
            continue

        written += 1
        typer.echo(f"✓ {fmt.label} written to {result.output_path}")

    typer.echo("Bye.")
    return written
