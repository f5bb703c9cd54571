from __future__ import annotations

import pytest

from portclear.errors import CommandError
from portclear.models import ExecOutcome
from portclear.platforms import UnixBackend, WindowsBackend


def failed(command: str, code: int = 1, stdout: str = "", stderr: str = "") -> ExecOutcome:
    return ExecOutcome(command=command, returncode=code, stdout=stdout, stderr=stderr)


class FakeShell:
    """Records commands and answers them from ``replies``.

    A reply is stdout text, an ``ExecOutcome`` (raised as ``CommandError`` when
    its return code is non-zero) or an exception to raise. Commands without a
    reply succeed with no output.
    """

    def __init__(self):
        self.replies: dict = {}
        self.commands: list[str] = []

    async def __call__(self, command: str) -> ExecOutcome:
        self.commands.append(command)
        reply = self.replies.get(command, "")
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, ExecOutcome):
            if reply.returncode:
                raise CommandError(reply)
            return reply
        return ExecOutcome(command=command, returncode=0, stdout=reply)


@pytest.fixture
def shell():
    return FakeShell()


@pytest.fixture
def unix(shell):
    return UnixBackend("linux", shell)


@pytest.fixture
def windows(shell):
    return WindowsBackend("win32", shell)
