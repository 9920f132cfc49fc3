"""Runtime wiring for CLI entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .config import AppConfig, load_config
from .formats import OutputFormat, build_registry
from .logging import configure_logging


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    formats: Dict[str, OutputFormat]


def build_runtime(config: AppConfig | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level, cfg.log_json)
    return Runtime(config=cfg, formats=build_registry(cfg))
