"""
Parsers for the text the platform tools print.

Each function takes raw stdout and returns a ``ProcessMatch`` (or ``None``
when the output names no process). They never spawn anything, so they can be
exercised with captured output from any machine.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import ProcessMatch


def netstat_pattern(port: int, method: str) -> re.Pattern[str]:
    # Proto column, then the local address: 0.0.0.0:3000, [::]:3000, ...
    return re.compile(rf"^\s*{re.escape(method)}\s+\S*:{port}\s", re.IGNORECASE)


def parse_netstat(output: str, port: int, method: str) -> Optional[ProcessMatch]:
    """Owning pids of ``netstat -ano`` rows bound locally to ``port``.

    The trailing token of each row is the pid. Rows owned by pid 0, the idle
    pseudo-process left holding TIME_WAIT connections, are skipped: there is
    nothing to kill and ``taskkill /PID 0`` always fails.
    """
    pattern = netstat_pattern(port, method)
    pids: list[int] = []
    for line in output.splitlines():
        if not pattern.match(line):
            continue
        parts = line.split()
        token = parts[-1] if parts else ""
        if not token.isdecimal():
            continue
        pid = int(token)
        if pid:
            pids.append(pid)
    return ProcessMatch.from_pids(pids)


def parse_lsof(output: str) -> Optional[ProcessMatch]:
    """First data row of ``lsof -i :PORT``.

    lsof output columns: COMMAND PID USER FD TYPE DEVICE SIZE/OFF NODE NAME
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if len(lines) <= 1:  # header only
        return None
    fields = lines[1].split()
    if len(fields) < 2 or not fields[1].isdecimal():
        return None
    return ProcessMatch.from_pids([int(fields[1])], name=fields[0])


def parse_lsof_pids(output: str) -> Optional[ProcessMatch]:
    """Every pid printed by ``lsof -ti :PORT``, one per line."""
    pids = [int(s) for s in (line.strip() for line in output.splitlines()) if s.isdecimal()]
    return ProcessMatch.from_pids(pids)


def parse_ps_name(output: str) -> Optional[str]:
    return output.strip() or None
