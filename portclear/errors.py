from __future__ import annotations

import errno
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ExecOutcome


class PortClearError(Exception):
    """Base class for everything ``resolve`` can raise."""


class InvalidInput(PortClearError, ValueError):
    pass


class NotFound(PortClearError):
    def __init__(self, port: int, message: str | None = None):
        self.port = port
        super().__init__(message or f"No process running on port {port}")


class PermissionDenied(PortClearError, PermissionError):
    def __init__(self, port: int, suggestion: str):
        self.port = port
        self.suggestion = suggestion
        super().__init__(f"Permission denied for port {port}. {suggestion}")


class ExecutionFailure(PortClearError):
    def __init__(self, port: int, detail: str):
        self.port = port
        self.detail = detail
        super().__init__(f"Failed to kill process on port {port}: {detail}")


class CommandError(PortClearError):
    """An external command exited non-zero."""

    def __init__(self, outcome: ExecOutcome):
        self.outcome = outcome
        detail = outcome.stderr.strip() or outcome.stdout.strip()
        msg = f"Command failed ({outcome.returncode}): {outcome.command}"
        super().__init__(f"{msg}\n{detail}" if detail else msg)


PERMISSION_MARKERS = (
    "operation not permitted",
    "permission denied",
    "access is denied",
)


def is_permission_error(exc: BaseException) -> bool:
    if isinstance(exc, PermissionError):
        return True
    if isinstance(exc, OSError):
        return exc.errno in (errno.EACCES, errno.EPERM)
    if isinstance(exc, CommandError):
        text = f"{exc.outcome.stderr}\n{exc.outcome.stdout}".lower()
        return any(marker in text for marker in PERMISSION_MARKERS)
    return False
