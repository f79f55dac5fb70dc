"""Persisted session state: load at start, save at end.

read_session() never fails. A missing file means a fresh
session; an unreadable or corrupt file is logged, discarded
and reported back as a warning line for the caller to show.
save_session() replaces the file atomically and reports
failure as an IOResult.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError
from returns.io import IOFailure, IOResult
from returns.unsafe import unsafe_perform_io

from xcf.xcf_modules import io_ops
from xcf.xcf_modules.errors import ErrorType, XcfError
from xcf.xcf_modules.log import get_logger
from xcf.xcf_modules.types import SessionState

if TYPE_CHECKING:
    from pathlib import Path

_logger = get_logger()


def _discard(path: Path, reason: str) -> tuple[SessionState, str]:
    """Log an unusable state file and return defaults plus a warning."""
    _logger.warning("Discarding session state %s: %s", path, reason)
    warning = (
        f"Warning: ignoring unreadable session state at {path} ({reason})"
    )
    return SessionState(), warning


def read_session(path: Path) -> tuple[SessionState, str | None]:
    """Load session state from path, falling back to defaults.

    The second element is a warning line when the stored state
    was unusable and has been replaced by defaults.
    """
    read_result = io_ops.read_file(path)
    if isinstance(read_result, IOFailure):
        err = unsafe_perform_io(read_result.failure())
        if err.error_type == "FileNotFoundError":
            _logger.debug("No session state at %s", path)
            return SessionState(), None
        return _discard(path, err.message)

    raw = unsafe_perform_io(read_result.unwrap())
    try:
        state = SessionState.model_validate_json(raw)
    except ValidationError as exc:
        return _discard(path, f"{exc.error_count()} validation error(s)")
    _logger.debug("Loaded session state from %s: %s", path, state)
    return state, None


def load_session(path: Path) -> SessionState:
    """Load session state, discarding any warning."""
    state, _ = read_session(path)
    return state


def save_session(
    path: Path,
    state: SessionState,
) -> IOResult[None, XcfError]:
    """Persist session state with an atomic replace."""
    content = state.model_dump_json(indent=2) + "\n"

    def _on_failure(
        error: XcfError,
    ) -> IOResult[None, XcfError]:
        _logger.error("Failed to save session state: %s", error)
        return IOFailure(
            XcfError(
                step_name="session.save_session",
                error_type=ErrorType.STATE_PERSISTENCE,
                message=error.message,
                context=error.context,
            ),
        )

    return io_ops.write_file_atomic(path, content).lash(_on_failure)
