"""Tests for the Xcode automation backend."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING

from returns.io import IOFailure, IOSuccess
from returns.unsafe import unsafe_perform_io

from xcf.xcf_modules.automation import (
    BUILD_SUCCESS_MESSAGE,
    PERMISSION_GRANTED_MESSAGE,
    RUN_SUCCESS_MESSAGE,
    build_build_script,
    build_run_script,
    parse_automation_output,
    request_automation_permission,
    run_or_build,
)
from xcf.xcf_modules.errors import XcfError
from xcf.xcf_modules.types import ShellResult

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

PROJECT = "/Users/me/Apps/Demo/Demo.xcodeproj"


def _ok(payload: dict[str, object]) -> IOSuccess[ShellResult]:
    return IOSuccess(
        ShellResult(
            return_code=0,
            stdout=json.dumps(payload),
            stderr="",
            command="osascript",
        ),
    )


_CLEAN_BUILD = {"status": "succeeded", "issues": []}
_FAILED_BUILD = {
    "status": "failed",
    "issues": [
        {
            "kind": "Error",
            "message": "cannot find 'foo' in scope",
            "filePath": "/Users/me/Apps/Demo/main.swift",
            "line": 3,
            "column": 9,
        },
    ],
}


class TestScripts:
    """Tests for JXA script construction."""

    def test_build_script_opens_project(self) -> None:
        """Build script opens the JSON-quoted project path and builds."""
        script = build_build_script(PROJECT)
        assert f"app.open({json.dumps(PROJECT)})" in script
        assert "doc.build()" in script
        assert "buildErrors" in script
        assert "buildWarnings" in script

    def test_build_script_quotes_special_characters(self) -> None:
        """Quotes in paths cannot break out of the string literal."""
        path = '/Users/me/We"ird/App.xcodeproj'
        script = build_build_script(path)
        assert json.dumps(path) in script

    def test_run_script_stops_then_runs(self) -> None:
        """Run script stops any previous run before running."""
        script = build_run_script(PROJECT)
        assert script.index("doc.stop()") < script.index("doc.run()")


class TestParseAutomationOutput:
    """Tests for parsing automation summaries."""

    def test_clean_build(self) -> None:
        """No issues means success with the build message."""
        result = parse_automation_output(json.dumps(_CLEAN_BUILD), "build")
        assert result.success is True
        assert result.message == BUILD_SUCCESS_MESSAGE

    def test_clean_run(self) -> None:
        """A clean run reports the run message."""
        result = parse_automation_output(json.dumps(_CLEAN_BUILD), "run")
        assert result.message == RUN_SUCCESS_MESSAGE

    def test_errors_fail(self) -> None:
        """Error issues fail the action and are formatted."""
        result = parse_automation_output(json.dumps(_FAILED_BUILD), "build")
        assert result.success is False
        assert result.message == (
            "/Users/me/Apps/Demo/main.swift:3:9"
            " [Error] cannot find 'foo' in scope"
        )
        assert len(result.issues) == 1

    def test_warnings_only_succeed(self) -> None:
        """Warnings are reported but do not fail the build."""
        payload = {
            "issues": [{"kind": "Warning", "message": "unused variable"}],
        }
        result = parse_automation_output(json.dumps(payload), "build")
        assert result.success is True
        assert result.message == "[Warning] unused variable"

    def test_issues_without_message_are_dropped(self) -> None:
        """Malformed issues are ignored."""
        payload = {"issues": [{"kind": "Error"}, "junk"]}
        result = parse_automation_output(json.dumps(payload), "build")
        assert result.success is True
        assert result.issues == []

    def test_unparseable_output_fails(self) -> None:
        """Non-JSON output is a failure with the raw text."""
        result = parse_automation_output("execution error", "build")
        assert result.success is False
        assert "execution error" in result.message


class TestRunOrBuild:
    """Tests for run_or_build."""

    def test_build_runs_build_script_only(
        self, mocker: MockerFixture,
    ) -> None:
        """build mode runs exactly one script."""
        mock_run = mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            return_value=_ok(_CLEAN_BUILD),
        )
        result = run_or_build(PROJECT, "build", timeout=42)
        assert isinstance(result, IOSuccess)
        assert unsafe_perform_io(result.unwrap()).message == (
            BUILD_SUCCESS_MESSAGE
        )
        mock_run.assert_called_once_with(
            build_build_script(PROJECT), timeout=42,
        )

    def test_run_builds_then_runs(self, mocker: MockerFixture) -> None:
        """run mode builds first, then runs a clean build."""
        mock_run = mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            side_effect=[_ok(_CLEAN_BUILD), _ok(_CLEAN_BUILD)],
        )
        result = run_or_build(PROJECT, "run")
        assert isinstance(result, IOSuccess)
        assert unsafe_perform_io(result.unwrap()).message == (
            RUN_SUCCESS_MESSAGE
        )
        scripts = [c.args[0] for c in mock_run.call_args_list]
        assert scripts == [
            build_build_script(PROJECT),
            build_run_script(PROJECT),
        ]

    def test_run_skips_run_after_failed_build(
        self, mocker: MockerFixture,
    ) -> None:
        """A failed build is reported and nothing is run."""
        mock_run = mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            return_value=_ok(_FAILED_BUILD),
        )
        result = run_or_build(PROJECT, "run")
        assert isinstance(result, IOSuccess)
        assert unsafe_perform_io(result.unwrap()).success is False
        mock_run.assert_called_once()

    def test_osascript_failure_is_automation_failed(
        self, mocker: MockerFixture,
    ) -> None:
        """An unreachable backend is IOFailure(AutomationFailed)."""
        mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            return_value=IOFailure(
                XcfError(
                    step_name="io_ops.run_osascript",
                    error_type="TimeoutError",
                    message="osascript timed out after 600s",
                ),
            ),
        )
        result = run_or_build(PROJECT, "build")
        assert isinstance(result, IOFailure)
        err = unsafe_perform_io(result.failure())
        assert err.error_type == "AutomationFailed"
        assert "timed out" in err.message

    def test_nonzero_exit_is_automation_failed(
        self, mocker: MockerFixture,
    ) -> None:
        """osascript errors (Xcode not running) fail the action."""
        mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            return_value=IOSuccess(
                ShellResult(
                    return_code=1,
                    stdout="",
                    stderr="Application isn't running.",
                    command="osascript",
                ),
            ),
        )
        result = run_or_build(PROJECT, "build")
        assert isinstance(result, IOFailure)
        err = unsafe_perform_io(result.failure())
        assert err.error_type == "AutomationFailed"
        assert "Is it running?" in err.message


class TestRequestAutomationPermission:
    """Tests for the permission probe."""

    def test_probe_success(self, mocker: MockerFixture) -> None:
        """A successful probe reports permission granted."""
        mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            return_value=_ok({"documents": 2}),
        )
        result = request_automation_permission()
        assert isinstance(result, IOSuccess)
        assert unsafe_perform_io(result.unwrap()).message == (
            PERMISSION_GRANTED_MESSAGE
        )

    def test_probe_denied(self, mocker: MockerFixture) -> None:
        """A refused Apple Event is an IOFailure."""
        mocker.patch(
            "xcf.xcf_modules.io_ops.run_osascript",
            return_value=IOSuccess(
                ShellResult(
                    return_code=1,
                    stdout="",
                    stderr="Not authorized to send Apple events",
                    command="osascript",
                ),
            ),
        )
        result = request_automation_permission()
        assert isinstance(result, IOFailure)
        err = unsafe_perform_io(result.failure())
        assert "Not authorized" in err.message
