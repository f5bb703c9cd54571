"""
Platform backends: which tools to run, and how to read what they print.

``WindowsBackend`` drives ``netstat``/``taskkill``; ``UnixBackend`` drives
``lsof``/``ps``/``kill``. ``select_backend`` is the only place the running OS
is consulted.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from . import shell
from .errors import CommandError, NotFound, is_permission_error
from .models import ExecOutcome, PortSpec, ProcessMatch
from .parsers import parse_lsof, parse_lsof_pids, parse_netstat, parse_ps_name
from .shell import Runner

logger = logging.getLogger(__name__)


class Backend:
    platform: str

    def __init__(self, platform: str, runner: Optional[Runner] = None):
        self.platform = platform
        self._runner = runner

    async def run(self, command: str) -> ExecOutcome:
        runner = self._runner or shell.run
        return await runner(command)

    def permission_hint(self, port: int) -> str:
        raise NotImplementedError

    async def lookup(self, spec: PortSpec) -> ProcessMatch:
        """Process currently bound to the port, for listing."""
        raise NotImplementedError

    async def locate(self, spec: PortSpec) -> ProcessMatch:
        """Every process bound to the port, for killing."""
        raise NotImplementedError

    async def describe(self, pid: int) -> Optional[str]:
        return None

    def kill_command(self, match: ProcessMatch, tree: bool) -> str:
        raise NotImplementedError

    async def terminate(self, match: ProcessMatch, tree: bool = False) -> ExecOutcome:
        return await self.run(self.kill_command(match, tree))


# --------------------------- Windows ---------------------------


class WindowsBackend(Backend):
    def permission_hint(self, port: int) -> str:
        return "Try running as Administrator"

    async def lookup(self, spec: PortSpec) -> ProcessMatch:
        outcome = await self.run("netstat -ano")
        match = parse_netstat(outcome.stdout, spec.port, spec.method)
        if match is None:
            raise NotFound(spec.port)
        return match

    async def locate(self, spec: PortSpec) -> ProcessMatch:
        return await self.lookup(spec)

    def kill_command(self, match: ProcessMatch, tree: bool) -> str:
        # /T takes each pid's whole descendant tree down with it
        flags = "/F /T" if tree else "/F"
        targets = " ".join(f"/PID {pid}" for pid in match.pids)
        return f"taskkill {flags} {targets}"


# --------------------------- Unix ---------------------------


class UnixBackend(Backend):
    def permission_hint(self, port: int) -> str:
        return f"Try running with sudo: sudo portclear {port}"

    async def _listing(self, spec: PortSpec) -> ExecOutcome:
        # lsof exits 1 when nothing matches
        try:
            return await self.run(f"lsof -i :{spec.port}")
        except CommandError as exc:
            if is_permission_error(exc):
                raise
            raise NotFound(spec.port) from exc

    async def lookup(self, spec: PortSpec) -> ProcessMatch:
        outcome = await self._listing(spec)
        match = parse_lsof(outcome.stdout)
        if match is None:
            raise NotFound(spec.port)
        return match

    async def locate(self, spec: PortSpec) -> ProcessMatch:
        await self._listing(spec)
        outcome = await self.run(f"lsof -ti :{spec.port}")
        match = parse_lsof_pids(outcome.stdout)
        if match is None:
            raise NotFound(spec.port)
        return ProcessMatch(pid=match.pid, pids=match.pids, name=await self.describe(match.pid))

    async def describe(self, pid: int) -> Optional[str]:
        """Best-effort command name of ``pid``."""
        try:
            outcome = await self.run(f"ps -p {pid} -o comm=")
        except (CommandError, OSError) as exc:
            logger.debug("could not read name of pid %s: %s", pid, exc)
            return None
        return parse_ps_name(outcome.stdout)

    def kill_command(self, match: ProcessMatch, tree: bool) -> str:
        if tree:
            # children first, then the parent; a child forked in between survives
            return "; ".join(f"pkill -9 -P {pid}; kill -9 {pid}" for pid in match.pids)
        return "kill -9 " + " ".join(str(pid) for pid in match.pids)


def select_backend(platform: Optional[str] = None, runner: Optional[Runner] = None) -> Backend:
    platform = platform or sys.platform
    if platform == "win32":
        return WindowsBackend(platform, runner)
    return UnixBackend(platform, runner)
