"""Runtime configuration for xcf.

The tool name is defined once here and injected into the
action registry (help text and the `use` phrase).
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TOOL_NAME = "xcf"
DEFAULT_STATE_DIR = str(Path("~/.config/xcf").expanduser())
STATE_FILE_NAME = "session.json"
LOG_FILE_NAME = "xcf.log"


@dataclass(frozen=True)
class XcfConfig:
    """Settings for one invocation."""

    tool_name: str = TOOL_NAME
    state_dir: str = DEFAULT_STATE_DIR
    catalog_timeout: int = 10
    automation_timeout: int = 600

    @property
    def state_path(self) -> Path:
        """Location of the persisted session state."""
        return Path(self.state_dir) / STATE_FILE_NAME

    @property
    def log_path(self) -> Path:
        """Location of the debug log."""
        return Path(self.state_dir) / LOG_FILE_NAME


def load_config(
    *,
    state_dir: str | None = None,
) -> XcfConfig:
    """Build an XcfConfig, applying a state dir override if given.

    The CLI resolves the XCF_STATE_DIR environment variable
    into state_dir before calling this.
    """
    if state_dir:
        return XcfConfig(state_dir=str(Path(state_dir).expanduser()))
    return XcfConfig()
