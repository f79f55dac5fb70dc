"""Action type definitions for the xcf command layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xcf.xcf_modules.config import XcfConfig
    from xcf.xcf_modules.types import ProjectEntry, SessionState


class Action(Enum):
    """Every verb the CLI recognizes."""

    HELP = "help"
    LIST = "list"
    SELECT = "select"
    RUN = "run"
    BUILD = "build"
    GRANT = "grant"
    USE_MODE = "use_mode"
    CURRENT = "current"
    ENV = "env"


@dataclass(frozen=True)
class ActionSpec:
    """Metadata for a registered action.

    keyword is what the user types; usage is how help shows
    it (e.g. "select #"). The flags are preconditions the
    dispatcher enforces before calling the handler.
    """

    action: Action
    keyword: str
    usage: str
    description: str
    requires_permission: bool = False
    requires_selection: bool = False
    resolves_selection: bool = False


@dataclass(frozen=True)
class ActionContext:
    """Everything a handler may read. Handlers never mutate it."""

    config: XcfConfig
    state: SessionState
    args: tuple[str, ...] = ()
    selected: ProjectEntry | None = None


@dataclass(frozen=True)
class ActionOutcome:
    """Successful handler result.

    state is the session state after the action; the
    dispatcher persists it when it differs from the loaded
    state. warnings go to stderr without failing the action.
    """

    state: SessionState
    lines: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
