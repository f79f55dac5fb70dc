"""Shared test fixtures for the xcf test suite."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from xcf.xcf_modules.config import XcfConfig
from xcf.xcf_modules.types import ProjectEntry, SessionState

if TYPE_CHECKING:
    from collections.abc import Callable


def _home_project(name: str, ext: str = ".xcodeproj") -> ProjectEntry:
    path = str(Path.home() / "Developer" / name / f"{name}{ext}")
    return ProjectEntry(display_name=name, path=path)


@pytest.fixture
def home_project() -> Callable[..., ProjectEntry]:
    """Return a factory for ProjectEntry values under the home directory."""
    return _home_project


@pytest.fixture
def xcf_config(tmp_path: Path) -> XcfConfig:
    """Return an XcfConfig whose state lives in tmp_path."""
    return XcfConfig(state_dir=str(tmp_path / "state"))


@pytest.fixture
def abc_catalog() -> list[ProjectEntry]:
    """Return a three-entry catalog: A, B, C."""
    return [_home_project("A"), _home_project("B"), _home_project("C")]


@pytest.fixture
def granted_state() -> SessionState:
    """Return a session with permission granted and nothing selected."""
    return SessionState(permission_granted=True)
