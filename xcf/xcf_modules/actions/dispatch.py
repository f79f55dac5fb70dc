"""Action dispatch -- central entry point for every invocation.

Resolves the keyword through the registry, loads session
state, enforces preconditions, runs the handler and
persists the resulting state. Every outcome, including
errors, becomes output lines plus an exit code: nothing
raised below this module escapes it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from returns.io import IOFailure
from returns.unsafe import unsafe_perform_io

from xcf.xcf_modules import catalog
from xcf.xcf_modules.actions.info import (
    handle_env,
    handle_help,
    handle_use_mode,
    render_help,
)
from xcf.xcf_modules.actions.project import (
    handle_current,
    handle_list,
    handle_select,
)
from xcf.xcf_modules.actions.registry import (
    build_registry,
    parse_invocation,
    resolve,
)
from xcf.xcf_modules.actions.types import Action, ActionContext
from xcf.xcf_modules.actions.xcode import (
    handle_build,
    handle_grant,
    handle_run,
)
from xcf.xcf_modules.errors import ErrorType, ExitCode, XcfError
from xcf.xcf_modules.log import get_logger
from xcf.xcf_modules.session import read_session, save_session

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from returns.io import IOResult

    from xcf.xcf_modules.actions.types import ActionOutcome, ActionSpec
    from xcf.xcf_modules.config import XcfConfig
    from xcf.xcf_modules.types import ProjectEntry, SessionState

    Handler = Callable[[ActionContext], IOResult[ActionOutcome, XcfError]]

_logger = get_logger()

_HANDLERS: MappingProxyType[Action, Handler] = MappingProxyType(
    {
        Action.HELP: handle_help,
        Action.USE_MODE: handle_use_mode,
        Action.GRANT: handle_grant,
        Action.LIST: handle_list,
        Action.SELECT: handle_select,
        Action.RUN: handle_run,
        Action.BUILD: handle_build,
        Action.CURRENT: handle_current,
        Action.ENV: handle_env,
    },
)


@dataclass(frozen=True)
class DispatchResult:
    """What the CLI prints and how it exits.

    output lines go to stdout, errors lines to stderr.
    state is the session state after the action, or None
    when the action was not recognized.
    """

    exit_code: ExitCode
    output: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    action: Action | None = None
    state: SessionState | None = None


def _check_permission(
    spec: ActionSpec,
    state: SessionState,
    tool_name: str,
) -> XcfError | None:
    if spec.requires_permission and not state.permission_granted:
        return XcfError(
            step_name="actions.dispatch",
            error_type=ErrorType.PERMISSION_REQUIRED,
            message=(
                f"Permission required to {spec.keyword}."
                f" Run '{tool_name} grant' first."
            ),
            context={"action": spec.keyword},
        )
    return None


def _no_project_selected(
    spec: ActionSpec,
    tool_name: str,
) -> XcfError:
    return XcfError(
        step_name="actions.dispatch",
        error_type=ErrorType.NO_PROJECT_SELECTED,
        message=(
            f"No project selected yet. Run '{tool_name} list'"
            f" then '{tool_name} select #' first."
        ),
        context={"action": spec.keyword},
    )


def _resolve_selection(
    state: SessionState,
    config: XcfConfig,
) -> tuple[SessionState, ProjectEntry | None, list[str]]:
    """Revalidate the stored selection against the catalog.

    A selection that is no longer listed is cleared; the
    returned state reflects that and a warning is returned.
    """
    if state.selected_project is None:
        return state, None, []
    entries = catalog.list_projects(timeout=config.catalog_timeout)
    entry = catalog.find_entry(entries, state.selected_project)
    if entry is not None:
        return state, entry, []
    _logger.info("Clearing stale selection %s", state.selected_project)
    warning = (
        f"Previously selected project {state.selected_project}"
        " is no longer open; selection cleared."
    )
    return state.with_selection(None), None, [warning]


def _run_handler(
    spec: ActionSpec,
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError] | XcfError:
    """Call the handler, turning unexpected exceptions into errors."""
    try:
        return _HANDLERS[spec.action](ctx)
    except Exception as exc:  # noqa: BLE001
        _logger.exception("Unhandled error in %s", spec.keyword)
        return XcfError(
            step_name=f"actions.{spec.action.value}",
            error_type=ErrorType.AUTOMATION_FAILED,
            message=f"Unexpected error running {spec.keyword}: {exc}",
        )


def _unrecognized(
    words: Sequence[str],
    tool_name: str,
) -> DispatchResult:
    text = " ".join(words)
    err = XcfError(
        step_name="actions.dispatch",
        error_type=ErrorType.UNRECOGNIZED_ACTION,
        message=(
            f"I don't understand '{text}'."
            f" Try '{tool_name} help' to see what I can do."
        ),
        context={"words": list(words)},
    )
    _logger.info("%s", err)
    return DispatchResult(
        exit_code=err.exit_code,
        output=[render_help(tool_name)],
        errors=[err.message],
    )


def dispatch(
    words: Sequence[str],
    config: XcfConfig,
) -> DispatchResult:
    """Run one action from raw CLI words."""
    tool_name = config.tool_name
    keyword, args = parse_invocation(words)
    spec = resolve(keyword, build_registry(tool_name))
    if spec is None:
        return _unrecognized(words, tool_name)

    _logger.info("Dispatching %s args=%s", spec.keyword, list(args))
    loaded, load_warning = read_session(config.state_path)
    state = loaded
    selected: ProjectEntry | None = None
    output: list[str] = []
    errors: list[str] = [load_warning] if load_warning else []

    failure = _check_permission(spec, state, tool_name)
    if failure is None and spec.resolves_selection:
        state, selected, stale = _resolve_selection(state, config)
        errors.extend(stale)
    if failure is None and spec.requires_selection and selected is None:
        failure = _no_project_selected(spec, tool_name)

    if failure is None:
        ctx = ActionContext(
            config=config, state=state, args=args, selected=selected,
        )
        result = _run_handler(spec, ctx)
        if isinstance(result, XcfError):
            failure = result
        elif isinstance(result, IOFailure):
            failure = unsafe_perform_io(result.failure())
        else:
            outcome = unsafe_perform_io(result.unwrap())
            state = outcome.state
            output.extend(outcome.lines)
            errors.extend(outcome.warnings)

    if failure is not None:
        _logger.info("%s", failure)
        errors.append(failure.message)

    if state != loaded:
        saved = save_session(config.state_path, state)
        if isinstance(saved, IOFailure):
            err = unsafe_perform_io(saved.failure())
            errors.append(
                f"Warning: could not save session state: {err.message}",
            )

    return DispatchResult(
        exit_code=failure.exit_code if failure else ExitCode.SUCCESS,
        output=output,
        errors=errors,
        action=spec.action,
        state=state,
    )
