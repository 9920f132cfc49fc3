"""Command-line interface for jsonconv."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer

from .errors import ConversionError, ParseError
from .formats import output_path_for
from .loader import load_json_file
from .logging import get_logger
from .menu import run_menu
from .runtime import build_runtime
from .writer import write_conversion

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="Convert a JSON file into other textual representations")


def _load_or_exit(input_path: Path) -> Any:
    try:
        return load_json_file(input_path)
    except ParseError as exc:
        logger.info("input_invalid", path=exc.path, line=exc.line, column=exc.column)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("menu")
def menu_command(
    input_file: Path = typer.Argument(..., help="JSON file to convert"),
) -> None:
    """Pick conversions interactively for one JSON file."""
    runtime = build_runtime()
    data = _load_or_exit(input_file)
    typer.echo(f"Loaded valid JSON from {input_file}")
    run_menu(runtime, input_file, data)


@app.command("convert")
def convert_command(
    input_file: Path = typer.Argument(..., help="JSON file to convert"),
    targets: Optional[List[str]] = typer.Option(
        None,
        "--to",
        "-t",
        help="Format key to produce (repeatable)",
    ),
    all_formats: bool = typer.Option(False, "--all", help="Produce every available format"),
) -> None:
    """Run conversions without prompting."""
    runtime = build_runtime()

    if all_formats and targets:
        raise typer.BadParameter("--to and --all cannot be used together")
    if all_formats:
        keys = list(runtime.formats)
    elif targets:
        keys = [key.strip().lower() for key in targets]
    else:
        raise typer.BadParameter("Provide at least one --to format or --all")

    unknown = [key for key in keys if key not in runtime.formats]
    if unknown:
        raise typer.BadParameter(
            f"Unknown format(s): {', '.join(unknown)}. Available: {', '.join(runtime.formats)}"
        )

    data = _load_or_exit(input_file)

    failures = 0
    for key in keys:
        fmt = runtime.formats[key]
        try:
            result = write_conversion(data, fmt, input_file)
        except ConversionError as exc:
            failures += 1
            logger.info("conversion_failed", format=key, error=str(exc))
            typer.echo(f"Error: {fmt.label} conversion failed: {exc}", err=True)
            continue
        typer.echo(f"✓ {fmt.label} written to {result.output_path}")

    if failures:
        raise typer.Exit(code=1)


@app.command("formats")
def formats_command() -> None:
    """List the available output formats."""
    runtime = build_runtime()
    for fmt in runtime.formats.values():
        example = output_path_for(Path("input.json"), fmt).name
        typer.echo(f"{fmt.key:<12} {fmt.label:<24} {example}")


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
