"""Automation backend: build and run projects through Xcode.

Each request opens the project in Xcode via osascript -l
JavaScript, triggers the scheme action and reports back a
JSON summary. `run` builds first and only runs a clean
build.
"""
from __future__ import annotations

import json

from returns.io import IOFailure, IOResult, IOSuccess
from returns.unsafe import unsafe_perform_io

from xcf.xcf_modules import io_ops
from xcf.xcf_modules.errors import ErrorType, XcfError
from xcf.xcf_modules.log import get_logger
from xcf.xcf_modules.types import (
    AutomationMode,
    AutomationResult,
    BuildIssue,
)

_logger = get_logger()

BUILD_SUCCESS_MESSAGE = "Built successfully"
RUN_SUCCESS_MESSAGE = "Ran successfully"
PERMISSION_GRANTED_MESSAGE = "Permission Granted"

# JXA accessor name -> issue kind reported to the user
_ISSUE_COLLECTIONS: tuple[tuple[str, str], ...] = (
    ("buildErrors", "Error"),
    ("buildWarnings", "Warning"),
    ("analyzerIssues", "Analyzer Issue"),
    ("testFailures", "Test Failure"),
)

_PERMISSION_PROBE_SCRIPT = (
    'var app = Application("Xcode");'
    "JSON.stringify({documents: app.documents().length});"
)


def build_build_script(project_path: str) -> str:
    """Build the JXA script that builds a project and collects issues."""
    collect = "".join(
        f'collect(result.{accessor}(), "{kind}");'
        for accessor, kind in _ISSUE_COLLECTIONS
    )
    return (
        'var app = Application("Xcode");'
        f"var doc = app.open({json.dumps(project_path)});"
        "var result = doc.build();"
        "while (!result.completed()) { delay(0.5); }"
        "var issues = [];"
        "function collect(items, kind) {"
        "  for (var i = 0; i < items.length; i++) {"
        "    var it = items[i];"
        "    issues.push({kind: kind, message: it.message(),"
        "      filePath: it.filePath(),"
        "      line: it.startingLineNumber(),"
        "      column: it.startingColumnNumber()});"
        "  }"
        "}"
        f"{collect}"
        "JSON.stringify({status: result.status(), issues: issues});"
    )


def build_run_script(project_path: str) -> str:
    """Build the JXA script that stops and re-runs a project."""
    return (
        'var app = Application("Xcode");'
        f"var doc = app.open({json.dumps(project_path)});"
        "doc.stop();"
        "delay(1);"
        "doc.run();"
        'JSON.stringify({status: "running", issues: []});'
    )


def _parse_issue(raw: object) -> BuildIssue | None:
    if not isinstance(raw, dict):
        return None
    message = raw.get("message")
    if not isinstance(message, str) or not message:
        return None
    file_path = raw.get("filePath")
    line = raw.get("line")
    column = raw.get("column")
    return BuildIssue(
        kind=str(raw.get("kind", "Error")),
        message=message,
        file_path=file_path if isinstance(file_path, str) else None,
        line=line if isinstance(line, int) else None,
        column=column if isinstance(column, int) else None,
    )


def parse_automation_output(
    raw: str,
    mode: AutomationMode,
) -> AutomationResult:
    """Parse the JSON summary printed by a build or run script.

    Success means no Error issues. The message is the
    success line for the mode, or one line per issue.
    """
    try:
        data = json.loads(raw.strip())
    except (json.JSONDecodeError, TypeError, AttributeError):
        return AutomationResult(
            success=False,
            message=f"Unexpected response from Xcode: {raw.strip()!r}",
        )
    raw_issues = data.get("issues", []) if isinstance(data, dict) else []
    if not isinstance(raw_issues, list):
        raw_issues = []
    issues = [
        issue
        for issue in (_parse_issue(r) for r in raw_issues)
        if issue is not None
    ]
    result = AutomationResult(success=True, message="", issues=issues)
    if result.has_errors:
        return AutomationResult(
            success=False,
            message="\n".join(i.format() for i in issues),
            issues=issues,
        )
    if issues:
        return result.with_message(
            "\n".join(i.format() for i in issues),
        )
    return result.with_message(
        RUN_SUCCESS_MESSAGE if mode == "run" else BUILD_SUCCESS_MESSAGE,
    )


def _execute(
    script: str,
    mode: AutomationMode,
    timeout: int,
) -> IOResult[AutomationResult, XcfError]:
    result = io_ops.run_osascript(script, timeout=timeout)

    def _on_failure(
        error: XcfError,
    ) -> IOResult[AutomationResult, XcfError]:
        return IOFailure(
            XcfError(
                step_name=f"automation.{mode}",
                error_type=ErrorType.AUTOMATION_FAILED,
                message=error.message,
                context=error.context,
            ),
        )

    if isinstance(result, IOFailure):
        return result.lash(_on_failure)

    shell = unsafe_perform_io(result.unwrap())
    if shell.return_code != 0:
        return IOFailure(
            XcfError(
                step_name=f"automation.{mode}",
                error_type=ErrorType.AUTOMATION_FAILED,
                message=(
                    "Could not talk to Xcode. Is it running?"
                    f" ({shell.stderr.strip()})"
                ),
                context={"return_code": shell.return_code},
            ),
        )
    return IOSuccess(parse_automation_output(shell.stdout, mode))


def run_or_build(
    project_path: str,
    mode: AutomationMode,
    *,
    timeout: int = 600,
) -> IOResult[AutomationResult, XcfError]:
    """Build, or build then run, the project at project_path.

    IOFailure is reserved for the backend being unreachable.
    A failed build is IOSuccess(AutomationResult(success=False)).
    """
    _logger.info("Automation %s requested for %s", mode, project_path)
    build = _execute(build_build_script(project_path), "build", timeout)
    if mode == "build":
        return build

    def _run_if_clean(
        built: AutomationResult,
    ) -> IOResult[AutomationResult, XcfError]:
        if not built.success:
            return IOSuccess(built)
        return _execute(build_run_script(project_path), "run", timeout)

    return build.bind(_run_if_clean)


def request_automation_permission(
    *,
    timeout: int = 30,
) -> IOResult[AutomationResult, XcfError]:
    """Touch Xcode via Apple Events so macOS shows its consent prompt."""
    result = io_ops.run_osascript(_PERMISSION_PROBE_SCRIPT, timeout=timeout)
    if isinstance(result, IOFailure):
        return result
    shell = unsafe_perform_io(result.unwrap())
    if shell.return_code != 0:
        return IOFailure(
            XcfError(
                step_name="automation.request_automation_permission",
                error_type=ErrorType.AUTOMATION_FAILED,
                message=(
                    "Xcode automation is not permitted yet:"
                    f" {shell.stderr.strip()}"
                ),
                context={"return_code": shell.return_code},
            ),
        )
    return IOSuccess(
        AutomationResult(success=True, message=PERMISSION_GRANTED_MESSAGE),
    )
