"""Find and kill the process listening on a network port."""

from .core import port_clear, resolve
from .errors import (
    ExecutionFailure,
    InvalidInput,
    NotFound,
    PermissionDenied,
    PortClearError,
)
from .models import Options, PortSpec, ProcessMatch, Result
from .platforms import UnixBackend, WindowsBackend, select_backend

__version__ = "1.0.0"

__all__ = [
    "ExecutionFailure",
    "InvalidInput",
    "NotFound",
    "Options",
    "PermissionDenied",
    "PortClearError",
    "PortSpec",
    "ProcessMatch",
    "Result",
    "UnixBackend",
    "WindowsBackend",
    "port_clear",
    "resolve",
    "select_backend",
]
