"""Xcode automation actions: grant, build, run."""
from __future__ import annotations

from returns.io import IOFailure, IOResult, IOSuccess
from returns.unsafe import unsafe_perform_io

from xcf.xcf_modules import automation
from xcf.xcf_modules.actions.types import ActionContext, ActionOutcome
from xcf.xcf_modules.errors import ErrorType, XcfError
from xcf.xcf_modules.log import get_logger
from xcf.xcf_modules.types import AutomationMode, AutomationResult

_logger = get_logger()


def handle_grant(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Record automation permission.

    Also probes Xcode so macOS can show its consent prompt.
    A failed probe is reported as a warning; the permission
    flag is set either way.
    """
    warnings: list[str] = []
    probe = automation.request_automation_permission()
    if isinstance(probe, IOFailure):
        err = unsafe_perform_io(probe.failure())
        _logger.warning("Permission probe failed: %s", err)
        warnings.append(f"Warning: {err.message}")

    return IOSuccess(
        ActionOutcome(
            state=ctx.state.with_permission(),
            lines=[automation.PERMISSION_GRANTED_MESSAGE],
            warnings=warnings,
        ),
    )


def _run_automation(
    ctx: ActionContext,
    mode: AutomationMode,
) -> IOResult[ActionOutcome, XcfError]:
    if ctx.selected is None:
        # dispatcher enforces the selection precondition
        return IOFailure(
            XcfError(
                step_name=f"actions.{mode}",
                error_type=ErrorType.NO_PROJECT_SELECTED,
                message="No project selected yet.",
            ),
        )

    result = automation.run_or_build(
        ctx.selected.path,
        mode,
        timeout=ctx.config.automation_timeout,
    )

    def _to_outcome(
        ar: AutomationResult,
    ) -> IOResult[ActionOutcome, XcfError]:
        if not ar.success:
            return IOFailure(
                XcfError(
                    step_name=f"actions.{mode}",
                    error_type=ErrorType.AUTOMATION_FAILED,
                    message=ar.message,
                    context={
                        "path": ctx.selected.path if ctx.selected else None,
                        "issues": len(ar.issues),
                    },
                ),
            )
        return IOSuccess(ActionOutcome(state=ctx.state, lines=[ar.message]))

    return result.bind(_to_outcome)


def handle_build(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Build the selected project."""
    return _run_automation(ctx, "build")


def handle_run(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Build then run the selected project."""
    return _run_automation(ctx, "run")
