"""Project actions: list, select #, current.

Indices are 1-based in everything the user sees and
0-based internally. Invalid indices are rejected, never
clamped.
"""
from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from returns.io import IOFailure, IOResult, IOSuccess

from xcf.xcf_modules import catalog, io_ops
from xcf.xcf_modules.actions.types import ActionContext, ActionOutcome
from xcf.xcf_modules.errors import ErrorType, XcfError
from xcf.xcf_modules.log import get_logger

if TYPE_CHECKING:
    from xcf.xcf_modules.types import ProjectEntry

_logger = get_logger()

_INDEX_PATTERN = re.compile(r"-?[0-9]+")

NO_PROJECTS_FOUND = (
    "No projects found. Open an Xcode project or workspace first."
)


def format_entry(entry: ProjectEntry) -> str:
    """Render an entry as `name (path)`."""
    return f"{entry.display_name} ({entry.path})"


def format_listing(entries: list[ProjectEntry]) -> list[str]:
    """Render numbered lines for later `select #` use."""
    return [
        f"{index}. {format_entry(entry)}"
        for index, entry in enumerate(entries, start=1)
    ]


def handle_list(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Print the catalog with 1-based indices."""
    entries = catalog.list_projects(timeout=ctx.config.catalog_timeout)
    if not entries:
        return IOSuccess(
            ActionOutcome(state=ctx.state, lines=[NO_PROJECTS_FOUND]),
        )
    return IOSuccess(
        ActionOutcome(state=ctx.state, lines=format_listing(entries)),
    )


def _invalid_argument(
    message: str,
    args: tuple[str, ...],
) -> IOResult[ActionOutcome, XcfError]:
    return IOFailure(
        XcfError(
            step_name="actions.select",
            error_type=ErrorType.INVALID_ARGUMENT,
            message=message,
            context={"args": list(args)},
        ),
    )


def parse_index(args: tuple[str, ...]) -> int | None:
    """Return the single integer argument, or None if malformed.

    Only ASCII decimal digits with an optional leading minus are
    accepted; whitespace, underscores and non-ASCII digits are not.
    """
    if len(args) != 1 or not _INDEX_PATTERN.fullmatch(args[0]):
        return None
    return int(args[0])


def is_within_home(path: str, home: str) -> bool:
    """True when path is inside the home directory."""
    home = home.rstrip(os.sep)
    return path.startswith(home + os.sep)


def handle_select(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Select catalog entry n (1-based) as the current project."""
    number = parse_index(ctx.args)
    if number is None:
        return _invalid_argument(
            "That's not a valid selection. Use 'select #',"
            " e.g. 'select 1' for the first project in 'list'.",
            ctx.args,
        )

    entries = catalog.list_projects(timeout=ctx.config.catalog_timeout)
    if not 1 <= number <= len(entries):
        found = (
            f"I only found {len(entries)} project(s)."
            if entries
            else NO_PROJECTS_FOUND
        )
        return _invalid_argument(
            f"Project {number} doesn't exist. {found}"
            " Run 'list' to see the choices.",
            ctx.args,
        )

    entry = entries[number - 1]
    if not is_within_home(entry.path, io_ops.home_directory()):
        return IOFailure(
            XcfError(
                step_name="actions.select",
                error_type=ErrorType.SELECTION_REJECTED,
                message=(
                    "Security: project must be within your home"
                    " directory. Current project remains unchanged."
                ),
                context={"path": entry.path},
            ),
        )

    _logger.info("Selected project %d: %s", number, entry.path)
    return IOSuccess(
        ActionOutcome(
            state=ctx.state.with_selection(entry.path),
            lines=[f"Selected project {number}: {format_entry(entry)}"],
        ),
    )


def handle_current(
    ctx: ActionContext,
) -> IOResult[ActionOutcome, XcfError]:
    """Print the selected project, revalidated by the dispatcher."""
    if ctx.selected is None:
        return IOSuccess(
            ActionOutcome(
                state=ctx.state,
                lines=[
                    "No project selected. Run 'list' then 'select #'.",
                ],
            ),
        )
    return IOSuccess(
        ActionOutcome(
            state=ctx.state,
            lines=[f"Current project: {format_entry(ctx.selected)}"],
        ),
    )
