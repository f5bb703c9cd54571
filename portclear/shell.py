from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from .errors import CommandError
from .models import ExecOutcome

logger = logging.getLogger(__name__)

Runner = Callable[[str], Awaitable[ExecOutcome]]


async def run(command: str) -> ExecOutcome:
    """Run ``command`` through the system shell and wait for it to exit.

    Raises ``CommandError`` on a non-zero exit status. There is no timeout:
    a tool that never exits blocks the caller.
    """
    logger.debug("spawn: %s", command)
    proc = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    out, err = await proc.communicate()
    outcome = ExecOutcome(
        command=command,
        returncode=proc.returncode,
        stdout=out.decode(errors="replace"),
        stderr=err.decode(errors="replace"),
    )
    logger.debug("exit %s: %s", outcome.returncode, command)
    if outcome.returncode != 0:
        raise CommandError(outcome)
    return outcome
