"""Informational actions: help, use <tool>, env."""
from __future__ import annotations

from typing import TYPE_CHECKING

from returns.io import IOResult, IOSuccess

from xcf.xcf_modules import io_ops
from xcf.xcf_modules.actions.registry import build_registry, help_text
from xcf.xcf_modules.actions.types import ActionContext, ActionOutcome

if TYPE_CHECKING:
    from xcf.xcf_modules.errors import XcfError


def render_help(tool_name: str) -> str:
    """Help text for the configured tool name."""
    return help_text(tool_name, build_registry(tool_name))


def handle_help(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Print the help text. No state change."""
    return IOSuccess(
        ActionOutcome(
            state=ctx.state,
            lines=[render_help(ctx.config.tool_name)],
        ),
    )


def handle_use_mode(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Activate interactive mode for this invocation."""
    return IOSuccess(
        ActionOutcome(
            state=ctx.state,
            lines=[f"All {ctx.config.tool_name} systems go!"],
        ),
    )


def format_environment(environment: dict[str, str]) -> list[str]:
    """Render `KEY: value` lines sorted by key."""
    return [f"{key}: {environment[key]}" for key in sorted(environment)]


def handle_env(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Print every environment variable. Read-only."""
    lines = ["Environment Variables:"]
    lines.extend(format_environment(io_ops.read_environment()))
    return IOSuccess(ActionOutcome(state=ctx.state, lines=lines))
