"""Configuration loading for stylerun (.stylerun.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import FileFilter

CONFIG_FILENAME = ".stylerun.yml"

DEFAULT_ENGINE = "command"
DEFAULT_ENGINE_COMMAND = ("flake8",)
DEFAULT_SETTINGS_OPTION = "--config"
# path:line[:column]: RULE message
DEFAULT_VIOLATION_PATTERN = (
    r"^(?P<path>.+?):(?P<line>\d+):(?:\d+:)?\s*(?P<rule>[A-Za-z]+\d+)\s+(?P<message>.*)$"
)
DEFAULT_TIMEOUT = 60.0


@dataclass
class EngineConfig:
    """Selection and invocation settings for the analysis engine."""

    name: str = DEFAULT_ENGINE
    command: List[str] = field(default_factory=lambda: list(DEFAULT_ENGINE_COMMAND))
    settings_option: Optional[str] = DEFAULT_SETTINGS_OPTION
    pattern: str = DEFAULT_VIOLATION_PATTERN
    timeout: Optional[float] = None


@dataclass
class SvnConfig:
    """svnlook discovery and staging behaviour."""

    svnlook_candidates: List[str] = field(default_factory=list)
    timeout: Optional[float] = DEFAULT_TIMEOUT
    keep_staged: bool = False


@dataclass
class ToolConfig:
    """Represents the settings defined in .stylerun.yml."""

    path: Optional[Path] = None
    engine: EngineConfig = field(default_factory=EngineConfig)
    svn: SvnConfig = field(default_factory=SvnConfig)
    filters: FileFilter = field(default_factory=FileFilter)
    temp_dir: Optional[Path] = None


def load_config(config_path: Path | None = None) -> ToolConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return ToolConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    engine = EngineConfig()
    engine_data = _as_dict(data.get("engine"))
    if engine_data:
        engine.name = _as_str(engine_data.get("name")) or engine.name
        command = _as_str_list(engine_data.get("command"))
        if command:
            engine.command = command
        if "settings_option" in engine_data:
            engine.settings_option = _as_str(engine_data.get("settings_option")) or None
        engine.pattern = _as_str(engine_data.get("pattern")) or engine.pattern
        engine.timeout = _as_float(engine_data.get("timeout"))

    svn = SvnConfig()
    svn_data = _as_dict(data.get("svn"))
    if svn_data:
        svn.svnlook_candidates = _as_str_list(svn_data.get("svnlook_candidates"))
        if "timeout" in svn_data:
            svn.timeout = _as_float(svn_data.get("timeout"))
        svn.keep_staged = _as_bool(svn_data.get("keep_staged")) or False

    filter_data = _as_dict(data.get("filters"))
    filters = FileFilter.from_lists(
        _as_str_list(filter_data.get("include")),
        _as_str_list(filter_data.get("exclude")),
    )

    temp_dir_str = _as_str(data.get("temp_dir"))
    temp_dir = (config_file.parent / temp_dir_str).resolve() if temp_dir_str else None

    return ToolConfig(
        path=config_file,
        engine=engine,
        svn=svn,
        filters=filters,
        temp_dir=temp_dir,
    )


def _resolve_config_path(config_path: Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / CONFIG_FILENAME).resolve()
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
