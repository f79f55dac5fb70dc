"""Action registry, keyword resolution and help text.

The registry is built once from a single table with the
tool name injected, so the `use` phrase, the resolver and
the help text cannot drift apart.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from xcf.xcf_modules.actions.types import Action, ActionSpec
from xcf.xcf_modules.config import TOOL_NAME

if TYPE_CHECKING:
    from collections.abc import Sequence

USE_KEYWORD = "use"


def build_registry(
    tool_name: str,
) -> MappingProxyType[str, ActionSpec]:
    """Build the keyword -> ActionSpec table in help order."""
    use_phrase = f"{USE_KEYWORD} {tool_name}"
    specs = (
        ActionSpec(
            action=Action.USE_MODE,
            keyword=use_phrase,
            usage=use_phrase,
            description=f"Activate {tool_name} mode",
        ),
        ActionSpec(
            action=Action.GRANT,
            keyword="grant",
            usage="grant",
            description="permission to use xcode automation",
        ),
        ActionSpec(
            action=Action.LIST,
            keyword="list",
            usage="list",
            description="[open xc projects and workspaces]",
        ),
        ActionSpec(
            action=Action.SELECT,
            keyword="select",
            usage="select #",
            description="[open xc project or workspace]",
        ),
        ActionSpec(
            action=Action.RUN,
            keyword="run",
            usage="run",
            description=f"Execute the current {tool_name} project",
            requires_permission=True,
            requires_selection=True,
            resolves_selection=True,
        ),
        ActionSpec(
            action=Action.BUILD,
            keyword="build",
            usage="build",
            description=f"Build the current {tool_name} project",
            requires_permission=True,
            requires_selection=True,
            resolves_selection=True,
        ),
        ActionSpec(
            action=Action.CURRENT,
            keyword="current",
            usage="current",
            description="Display the currently selected project",
            resolves_selection=True,
        ),
        ActionSpec(
            action=Action.ENV,
            keyword="env",
            usage="env",
            description="Show all environment variables",
        ),
        ActionSpec(
            action=Action.HELP,
            keyword="help",
            usage="help",
            description="Show this help information",
        ),
    )
    return MappingProxyType({spec.keyword: spec for spec in specs})


ACTION_REGISTRY: MappingProxyType[str, ActionSpec] = build_registry(
    TOOL_NAME,
)


def resolve(
    keyword: str,
    registry: MappingProxyType[str, ActionSpec] = ACTION_REGISTRY,
) -> ActionSpec | None:
    """Look up an action by exact keyword. Returns None if not found."""
    return registry.get(keyword)


def list_actions(
    registry: MappingProxyType[str, ActionSpec] = ACTION_REGISTRY,
) -> list[ActionSpec]:
    """Return all registered actions in help order."""
    return list(registry.values())


def parse_invocation(
    words: Sequence[str],
) -> tuple[str, tuple[str, ...]]:
    """Split CLI words into (keyword, args).

    `use <name>` is a two-word phrase, so its second word is
    part of the keyword. No words at all means help.
    """
    if not words:
        return "help", ()
    if words[0] == USE_KEYWORD and len(words) > 1:
        return f"{words[0]} {words[1]}", tuple(words[2:])
    return words[0], tuple(words[1:])


def help_text(
    tool_name: str = TOOL_NAME,
    registry: MappingProxyType[str, ActionSpec] = ACTION_REGISTRY,
) -> str:
    """Render the help text from the registry rows."""
    lines = [f"{tool_name} actions:"]
    lines.extend(
        f"- {spec.usage}: {spec.description}"
        for spec in registry.values()
    )
    return "\n".join(lines)
