"""Actions package -- registry, handlers and dispatch.

Public API for the command layer: action types, the
registry and its help text, and dispatch().
"""
from __future__ import annotations

from xcf.xcf_modules.actions.dispatch import DispatchResult, dispatch
from xcf.xcf_modules.actions.registry import (
    ACTION_REGISTRY,
    build_registry,
    help_text,
    list_actions,
    parse_invocation,
    resolve,
)
from xcf.xcf_modules.actions.types import (
    Action,
    ActionContext,
    ActionOutcome,
    ActionSpec,
)

__all__ = [
    "ACTION_REGISTRY",
    "Action",
    "ActionContext",
    "ActionOutcome",
    "ActionSpec",
    "DispatchResult",
    "build_registry",
    "dispatch",
    "help_text",
    "list_actions",
    "parse_invocation",
    "resolve",
]
