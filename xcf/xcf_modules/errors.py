"""Error types and exit codes for xcf actions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType


class ExitCode(IntEnum):
    """Process exit codes. Values are stable; scripts branch on them."""

    SUCCESS = 0
    AUTOMATION_FAILED = 1
    UNRECOGNIZED_ACTION = 2
    INVALID_ARGUMENT = 3
    PERMISSION_REQUIRED = 4
    NO_PROJECT_SELECTED = 5
    SELECTION_REJECTED = 6


class ErrorType:
    """Known error_type values for XcfError."""

    UNRECOGNIZED_ACTION = "UnrecognizedAction"
    INVALID_ARGUMENT = "InvalidArgument"
    PERMISSION_REQUIRED = "PermissionRequired"
    NO_PROJECT_SELECTED = "NoProjectSelected"
    SELECTION_REJECTED = "SelectionRejected"
    AUTOMATION_FAILED = "AutomationFailed"
    CATALOG_UNAVAILABLE = "CatalogUnavailable"
    STATE_PERSISTENCE = "StatePersistenceError"


EXIT_CODES: MappingProxyType[str, ExitCode] = MappingProxyType(
    {
        ErrorType.UNRECOGNIZED_ACTION: ExitCode.UNRECOGNIZED_ACTION,
        ErrorType.INVALID_ARGUMENT: ExitCode.INVALID_ARGUMENT,
        ErrorType.PERMISSION_REQUIRED: ExitCode.PERMISSION_REQUIRED,
        ErrorType.NO_PROJECT_SELECTED: ExitCode.NO_PROJECT_SELECTED,
        ErrorType.SELECTION_REJECTED: ExitCode.SELECTION_REJECTED,
        ErrorType.AUTOMATION_FAILED: ExitCode.AUTOMATION_FAILED,
    },
)


@dataclass(frozen=True)
class XcfError:
    """Structured error for action and I/O failures."""

    step_name: str
    error_type: str
    message: str
    context: dict[str, object] = field(default_factory=dict)

    @property
    def exit_code(self) -> ExitCode:
        """Exit code for this error. Unmapped types are automation failures."""
        return EXIT_CODES.get(
            self.error_type, ExitCode.AUTOMATION_FAILED,
        )

    def __str__(self) -> str:
        """Human-readable error representation for logging."""
        max_len = 500
        base = f"XcfError[{self.step_name}] {self.error_type}: {self.message}"
        if self.context:
            ctx_str = str(self.context)
            if len(ctx_str) > max_len:
                ctx_str = ctx_str[: max_len - 3] + "..."
            base += f" | context={ctx_str}"
        return base
