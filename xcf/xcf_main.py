"""xcf command-line entry point.

Runs exactly one action per process and exits with the
action's exit code.

Usage:
    xcf help                 # Show all actions
    xcf use xcf              # Activate xcf mode
    xcf grant                # Allow Xcode automation
    xcf list                 # Number the open projects and workspaces
    xcf select 2             # Select project 2 from `list`
    xcf build                # Build the selected project
    xcf run                  # Build, then run the selected project
    xcf current              # Show the selected project
    xcf env                  # Show environment variables

Exit codes:
    0  success
    1  automation failed (Xcode unreachable or build errors)
    2  unrecognized action
    3  invalid argument (bad `select` index)
    4  permission required (run `xcf grant`)
    5  no project selected (run `xcf select #`)
    6  selection refused (project outside home directory)
"""
from __future__ import annotations

import sys

import click

from xcf.xcf_modules import io_ops
from xcf.xcf_modules.actions.dispatch import dispatch
from xcf.xcf_modules.config import load_config
from xcf.xcf_modules.log import setup_logging


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": ["--help"],
    },
    epilog=(
        "Exit codes: 0 success, 1 automation failed,"
        " 2 unrecognized action, 3 invalid argument,"
        " 4 permission required, 5 no project selected,"
        " 6 selection refused."
    ),
)
@click.option(
    "--state-dir",
    envvar="XCF_STATE_DIR",
    default=None,
    help="Directory for session state and logs (default: ~/.config/xcf)",
)
@click.argument("words", nargs=-1, type=click.UNPROCESSED)
def main(
    *,
    state_dir: str | None,
    words: tuple[str, ...],
) -> None:
    """Drive Xcode projects from the command line."""
    config = load_config(state_dir=state_dir)
    setup_logging(config.log_path)

    result = dispatch(words, config)
    for line in result.output:
        io_ops.write_stdout(line)
    for line in result.errors:
        io_ops.write_stderr(line + "\n")
    sys.exit(int(result.exit_code))


if __name__ == "__main__":  # pragma: no cover
    main()
