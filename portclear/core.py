from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from .errors import (
    CommandError,
    ExecutionFailure,
    NotFound,
    PermissionDenied,
    is_permission_error,
)
from .models import Options, PortSpec, Result
from .platforms import Backend, select_backend

logger = logging.getLogger(__name__)

OptionsLike = Union[Options, Mapping[str, Any], str, None]


async def resolve(
    port: int | str,
    options: OptionsLike = None,
    *,
    backend: Optional[Backend] = None,
) -> Result:
    """
    List or kill whatever is bound to ``port``.

    ``options`` may be an ``Options``, a mapping of its fields, or a bare
    method string ("tcp"/"udp"). Input is validated before any command runs.
    A free port is reported as a successful ``Result`` unless ``strict`` is
    set, in which case ``NotFound`` is raised.
    """
    opts = Options.coerce(options)
    spec = PortSpec.parse(port, opts.method)
    backend = backend or select_backend()

    try:
        if opts.list:
            match = await backend.lookup(spec)
            return Result.from_match(
                spec.port, backend.platform, match, killed=False, listing=True
            )

        match = await backend.locate(spec)
        outcome = await backend.terminate(match, tree=opts.tree)
        logger.info("killed %s on port %s", ", ".join(map(str, match.pids)), spec.port)
        return Result.from_match(
            spec.port,
            backend.platform,
            match,
            killed=True,
            stdout=outcome.stdout,
            stderr=outcome.stderr,
        )
    except NotFound:
        if opts.strict:
            raise
        logger.debug("nothing bound to port %s", spec.port)
        if opts.list:
            return Result(
                port=spec.port,
                killed=False,
                platform=backend.platform,
                listing=True,
                already_free=True,
                message="No process running on port",
            )
        return Result(
            port=spec.port,
            killed=False,
            platform=backend.platform,
            already_free=True,
            message="Port already free",
        )
    except (CommandError, OSError) as exc:
        if is_permission_error(exc):
            raise PermissionDenied(spec.port, backend.permission_hint(spec.port)) from exc
        raise ExecutionFailure(spec.port, str(exc)) from exc


def port_clear(
    port: int | str,
    options: OptionsLike = None,
    *,
    backend: Optional[Backend] = None,
) -> Result:
    """Blocking form of ``resolve``."""
    return asyncio.run(resolve(port, options, backend=backend))
