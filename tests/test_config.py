"""Tests for stylerun.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from stylerun.config import (
    DEFAULT_VIOLATION_PATTERN,
    EngineConfig,
    SvnConfig,
    ToolConfig,
    load_config,
)
from stylerun.errors import ConfigError
from stylerun.models import FileFilter


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ToolConfig)
    assert config.path is None
    assert config.engine == EngineConfig()
    assert config.engine.command == ["flake8"]
    assert config.engine.pattern == DEFAULT_VIOLATION_PATTERN
    assert config.svn == SvnConfig()
    assert config.filters == FileFilter()
    assert config.temp_dir is None


def test_load_config_uses_current_directory(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".stylerun.yml").write_text("engine:\n  name: stylecop\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config().engine.name == "stylecop"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".stylerun.yml"
    config_file.write_text(
        r"""
engine:
  name: command
  command: [pylint, --output-format=parseable]
  settings_option: --rcfile
  pattern: '^(?P<path>[^:]+):(?P<line>\d+): \[(?P<rule>\w+)[^\]]*\] (?P<message>.*)$'
  timeout: 90
svn:
  svnlook_candidates:
    - /opt/svn/bin/svnlook
  timeout: 15
  keep_staged: yes
filters:
  include: ['\.py$']
  exclude:
    - migrations/
temp_dir: staging
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.path == config_file.resolve()
    assert config.engine.command == ["pylint", "--output-format=parseable"]
    assert config.engine.settings_option == "--rcfile"
    assert config.engine.pattern.startswith("^(?P<path>")
    assert config.engine.timeout == 90.0
    assert config.svn.svnlook_candidates == ["/opt/svn/bin/svnlook"]
    assert config.svn.timeout == 15.0
    assert config.svn.keep_staged is True
    assert config.filters == FileFilter(includes=(r"\.py$",), excludes=("migrations/",))
    assert config.temp_dir == (tmp_path / "staging").resolve()


def test_settings_option_can_be_disabled(tmp_path: Path) -> None:
    (tmp_path / ".stylerun.yml").write_text("engine:\n  settings_option: ''\n", encoding="utf-8")

    assert load_config(tmp_path).engine.settings_option is None


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".stylerun.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".stylerun.yml").write_text("engine: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert ".stylerun.yml" in str(excinfo.value)


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".stylerun.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.engine == EngineConfig()
    assert config.path == (tmp_path / ".stylerun.yml").resolve()
