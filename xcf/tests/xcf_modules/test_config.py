"""Tests for xcf configuration."""
from __future__ import annotations

from pathlib import Path

from xcf.xcf_modules.config import (
    DEFAULT_STATE_DIR,
    TOOL_NAME,
    XcfConfig,
    load_config,
)


def test_default_config() -> None:
    """Defaults use the xcf tool name and ~/.config/xcf."""
    config = load_config()
    assert config.tool_name == TOOL_NAME == "xcf"
    assert config.state_dir == DEFAULT_STATE_DIR
    assert DEFAULT_STATE_DIR == str(Path.home() / ".config" / "xcf")


def test_state_dir_override(tmp_path: Path) -> None:
    """An explicit state dir replaces the default."""
    config = load_config(state_dir=str(tmp_path))
    assert config.state_dir == str(tmp_path)


def test_state_dir_override_expands_user() -> None:
    """A ~ in the override is expanded."""
    config = load_config(state_dir="~/xcf-state")
    assert config.state_dir == str(Path.home() / "xcf-state")


def test_empty_override_uses_default() -> None:
    """An empty override string means no override."""
    assert load_config(state_dir="") == XcfConfig()


def test_derived_paths(tmp_path: Path) -> None:
    """state_path and log_path live under state_dir."""
    config = XcfConfig(state_dir=str(tmp_path))
    assert config.state_path == tmp_path / "session.json"
    assert config.log_path == tmp_path / "xcf.log"
