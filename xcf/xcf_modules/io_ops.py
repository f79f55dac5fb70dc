"""I/O boundary module -- ALL external I/O goes through here.

This is the single mock point for the test suite. Action
handlers never touch the filesystem, environment or
subprocesses directly; they call io_ops functions.
"""
from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from pathlib import Path

from returns.io import IOFailure, IOResult, IOSuccess

from xcf.xcf_modules.errors import XcfError
from xcf.xcf_modules.types import ShellResult

OSASCRIPT_PATH = "/usr/bin/osascript"


def read_file(path: Path) -> IOResult[str, XcfError]:
    """Read file contents. Returns IOResult, never raises."""
    try:
        return IOSuccess(path.read_text())
    except FileNotFoundError:
        return IOFailure(
            XcfError(
                step_name="io_ops.read_file",
                error_type="FileNotFoundError",
                message=f"File not found: {path}",
                context={"path": str(path)},
            ),
        )
    except PermissionError:
        return IOFailure(
            XcfError(
                step_name="io_ops.read_file",
                error_type="PermissionError",
                message=f"Permission denied: {path}",
                context={"path": str(path)},
            ),
        )
    except (OSError, UnicodeDecodeError) as exc:
        return IOFailure(
            XcfError(
                step_name="io_ops.read_file",
                error_type=type(exc).__name__,
                message=f"Error reading {path}: {exc}",
                context={"path": str(path)},
            ),
        )


def write_file_atomic(
    path: Path,
    content: str,
) -> IOResult[None, XcfError]:
    """Replace a file's contents atomically.

    Writes to a temporary file in the target directory,
    fsyncs it and renames it over the target, so an
    interrupted write never leaves a half-written file.
    Returns IOSuccess(None) on success.
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        return IOFailure(
            XcfError(
                step_name="io_ops.write_file_atomic",
                error_type="StatePersistenceError",
                message=f"Failed to write {path}: {exc}",
                context={"path": str(path)},
            ),
        )
    return IOSuccess(None)


def run_osascript(
    script: str,
    *,
    timeout: int | None = None,
) -> IOResult[ShellResult, XcfError]:
    """Run a JavaScript for Automation script via osascript.

    Nonzero exit codes are valid results, not errors. The
    caller decides the policy for them. IOFailure means the
    script could not be run at all.
    """
    cmd = [OSASCRIPT_PATH, "-l", "JavaScript", "-e", script]
    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return IOFailure(
            XcfError(
                step_name="io_ops.run_osascript",
                error_type="TimeoutError",
                message=f"osascript timed out after {timeout}s",
                context={"timeout": timeout},
            ),
        )
    except FileNotFoundError:
        return IOFailure(
            XcfError(
                step_name="io_ops.run_osascript",
                error_type="FileNotFoundError",
                message=f"osascript not found at {OSASCRIPT_PATH}",
                context={"path": OSASCRIPT_PATH},
            ),
        )
    except OSError as exc:
        return IOFailure(
            XcfError(
                step_name="io_ops.run_osascript",
                error_type=type(exc).__name__,
                message=f"OS error running osascript: {exc}",
                context={},
            ),
        )
    return IOSuccess(
        ShellResult(
            return_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=OSASCRIPT_PATH,
        ),
    )


def home_directory() -> str:
    """Return the current user's home directory. Mockable seam."""
    return str(Path.home())


def read_environment() -> dict[str, str]:
    """Return a snapshot of the process environment. Mockable seam."""
    return dict(os.environ)


def write_stdout(message: str) -> None:
    """Print a line to stdout. Mockable seam."""
    print(message)  # noqa: T201


def write_stderr(
    message: str,
) -> IOResult[None, XcfError]:
    """Write message to stderr (fail-open diagnostics).

    Returns IOSuccess(None) or IOFailure on error.
    """
    try:
        sys.stderr.write(message)
    except OSError as exc:
        return IOFailure(
            XcfError(
                step_name="io_ops.write_stderr",
                error_type="StderrWriteError",
                message=f"Failed to write to stderr: {exc}",
                context={"original_message": message},
            ),
        )
    return IOSuccess(None)
