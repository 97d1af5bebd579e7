"""Analysis engine implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Callable, Dict, Iterable, List

from ..config import EngineConfig
from ..errors import ArgumentError
from .base import (
    AnalysisEngine,
    CodeProject,
    Importance,
    OutputEvent,
    ViolationEvent,
)
from .command import CommandEngine

_ENTRY_POINT_GROUP = "stylerun.engines"

_BUILTIN_FACTORIES: Dict[str, Callable[[Path | None, EngineConfig], AnalysisEngine]] = {
    "command": lambda settings_path, config: CommandEngine(settings_path, config),
}


def available_engines() -> List[str]:
    """Return built-in engine names followed by installed plugin names."""
    names = list(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        if entry.name not in names:
            names.append(entry.name)
    return names


def load_engine(
    name: str,
    settings_path: Path | None = None,
    config: EngineConfig | None = None,
) -> AnalysisEngine:
    """Instantiate the engine registered under ``name``."""
    config = config or EngineConfig()
    key = name.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is not None:
        return factory(settings_path, config)

    for entry in _iter_entry_points():
        if entry.name.lower() != key:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise ArgumentError(f"Failed to load engine entry point '{name}': {exc}") from exc
        return _coerce_engine(loaded, settings_path)

    known = ", ".join(available_engines())
    raise ArgumentError(f"Unknown engine '{name}'. Available engines: {known}")


def _coerce_engine(obj: object, settings_path: Path | None) -> AnalysisEngine:
    if isinstance(obj, AnalysisEngine):
        return obj
    if callable(obj):
        instance = obj(settings_path)
        if isinstance(instance, AnalysisEngine):
            return instance
    raise TypeError("Engine entry point must be an AnalysisEngine subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "AnalysisEngine",
    "CodeProject",
    "CommandEngine",
    "Importance",
    "OutputEvent",
    "ViolationEvent",
    "available_engines",
    "load_engine",
]
