"""Shared type definitions for xcf."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, ConfigDict

SESSION_STATE_VERSION = 1

PROJECT_EXTENSIONS: tuple[str, ...] = (".xcodeproj", ".xcworkspace")

AutomationMode = Literal["build", "run"]


class SessionState(BaseModel):
    """Selection and permission persisted between invocations.

    Unknown fields in a stored file are ignored so older
    releases can read state written by newer ones.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: int = SESSION_STATE_VERSION
    selected_project: str | None = None
    permission_granted: bool = False

    def with_selection(self, path: str | None) -> SessionState:
        """Return new state with selected_project replaced."""
        return self.model_copy(update={"selected_project": path})

    def with_permission(self) -> SessionState:
        """Return new state with permission_granted set."""
        return self.model_copy(update={"permission_granted": True})


@dataclass(frozen=True)
class ProjectEntry:
    """An Xcode project or workspace visible to the catalog."""

    display_name: str
    path: str

    @classmethod
    def from_path(cls, path: str) -> ProjectEntry:
        """Build an entry named after the bundle, without extension."""
        return cls(display_name=PurePosixPath(path).stem, path=path)


@dataclass(frozen=True)
class ShellResult:
    """Result of a subprocess execution."""

    return_code: int
    stdout: str
    stderr: str
    command: str


@dataclass(frozen=True)
class BuildIssue:
    """One issue reported by an Xcode scheme action."""

    kind: str
    message: str
    file_path: str | None = None
    line: int | None = None
    column: int | None = None

    def format(self) -> str:
        """Render as `path:line:col [kind] message` when located."""
        if self.file_path and self.line is not None:
            col = self.column if self.column is not None else 0
            return (
                f"{self.file_path}:{self.line}:{col}"
                f" [{self.kind}] {self.message}"
            )
        return f"[{self.kind}] {self.message}"


@dataclass(frozen=True)
class AutomationResult:
    """Outcome of a build or run request against Xcode."""

    success: bool
    message: str
    issues: list[BuildIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """True when any issue is an error."""
        return any(i.kind == "Error" for i in self.issues)

    def with_message(self, message: str) -> AutomationResult:
        """Return new result with message replaced."""
        return replace(self, message=message)
