"""Engine configuration: reveal timings and notice text.

Settings live in a small YAML file. Shared by the engine, the CLI
commands, and the tests (which usually construct ``EngineSettings``
directly).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BRIEFING_CANVAS_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".briefing-canvas" / "config.yaml"


class EngineSettings(BaseModel):
    """Timings are in seconds."""
    reveal_tick: float = Field(default=0.020, ge=0.0)
    settle_delay: float = Field(default=0.400, ge=0.0)
    chat_tick: float = Field(default=0.015, ge=0.0)
    thinking_delay: float = Field(default=0.600, ge=0.0)
    reveal_start_delay: float = Field(default=0.100, ge=0.0)
    module_delay: float = Field(default=0.500, ge=0.0)
    inventory_delay: float = Field(default=1.200, ge=0.0)
    lookup_delay: float = Field(default=0.800, ge=0.0)
    planning_notice: str = "Planning..."


def resolve_config_path(path: Optional[Path] = None) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Path] = None) -> EngineSettings:
    """Load engine settings, falling back to defaults.

    A missing or unparseable file gives the defaults. A file that parses
    but carries invalid values raises ``ValueError``.
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return EngineSettings()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as exc:
        logger.warning("Failed to read config %s: %s", config_path, exc)
        return EngineSettings()

    if raw is None:
        return EngineSettings()
    if not isinstance(raw, dict):
        logger.warning("Config %s is not a mapping, using defaults", config_path)
        return EngineSettings()

    try:
        return EngineSettings(**raw)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ValueError(f"Invalid settings in {config_path}: {fields}") from exc


def save_settings(settings: EngineSettings, path: Optional[Path] = None) -> Path:
    """Write settings to disk and return the path written."""
    config_path = resolve_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.safe_dump(settings.model_dump(), sort_keys=False),
        encoding="utf-8",
    )
    return config_path
