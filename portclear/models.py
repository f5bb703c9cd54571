from __future__ import annotations

import dataclasses as dc
from collections.abc import Mapping
from typing import Any, Optional

from .errors import InvalidInput

METHODS = ("tcp", "udp")
MIN_PORT, MAX_PORT = 1, 65535


# --------------------------- Input ---------------------------


@dc.dataclass(frozen=True, slots=True)
class PortSpec:
    port: int
    method: str = "tcp"

    @classmethod
    def parse(cls, port: Any, method: Any = "tcp") -> PortSpec:
        return cls(port=parse_port(port), method=parse_method(method))


def parse_port(raw: Any) -> int:
    # bool is an int subclass; True is not port 1
    if isinstance(raw, bool):
        raise InvalidInput(f"Invalid port number: {raw}. Port must be between 1 and 65535.")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
    else:
        raise InvalidInput(f"Invalid port number: {raw}. Port must be between 1 and 65535.")
    if not MIN_PORT <= value <= MAX_PORT:
        raise InvalidInput(f"Invalid port number: {raw}. Port must be between 1 and 65535.")
    return value


def parse_method(raw: Any) -> str:
    if raw not in METHODS:
        raise InvalidInput(f"Invalid method: {raw}. Use 'tcp' or 'udp'.")
    return raw


@dc.dataclass(frozen=True, slots=True)
class Options:
    method: str = "tcp"
    list: bool = False
    tree: bool = False
    strict: bool = False

    @classmethod
    def coerce(cls, value: Options | Mapping[str, Any] | str | None) -> Options:
        """Accept the shorthand forms callers pass to ``resolve``.

        A bare string is the transport method, a mapping is keyword options.
        """
        if value is None:
            opts = cls()
        elif isinstance(value, Options):
            opts = value
        elif isinstance(value, str):
            opts = cls(method=value)
        elif isinstance(value, Mapping):
            known = {f.name for f in dc.fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                raise InvalidInput(f"Unknown option(s): {', '.join(map(str, unknown))}")
            opts = cls(**value)
        else:
            raise InvalidInput(f"Invalid options: {value!r}")
        parse_method(opts.method)
        not_bool = [n for n in ("list", "tree", "strict") if not isinstance(getattr(opts, n), bool)]
        if not_bool:
            raise InvalidInput(f"Option(s) must be true or false: {', '.join(not_bool)}")
        return opts


# --------------------------- Lookup / execution ---------------------------


@dc.dataclass(frozen=True, slots=True)
class ProcessMatch:
    pid: int
    pids: tuple[int, ...]
    name: Optional[str] = None

    @classmethod
    def from_pids(cls, pids, name: Optional[str] = None) -> Optional[ProcessMatch]:
        ordered = tuple(dict.fromkeys(pids))  # dedupe while preserving order
        if not ordered:
            return None
        return cls(pid=ordered[0], pids=ordered, name=name)


@dc.dataclass(frozen=True, slots=True)
class ExecOutcome:
    command: str
    returncode: int
    stdout: str = ""
    stderr: str = ""


# --------------------------- Output ---------------------------


@dc.dataclass(slots=True)
class Result:
    port: int
    killed: bool
    platform: str
    pid: Optional[int] = None
    pids: Optional[list[int]] = None
    name: Optional[str] = None
    already_free: Optional[bool] = None
    listing: Optional[bool] = None
    message: Optional[str] = None
    stdout: Optional[str] = None
    stderr: Optional[str] = None

    @classmethod
    def from_match(cls, port: int, platform: str, match: ProcessMatch, **extra) -> Result:
        return cls(
            port=port,
            platform=platform,
            pid=match.pid,
            pids=[*match.pids],
            name=match.name,
            **extra,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in dc.fields(self)
            if getattr(self, f.name) is not None
        }
