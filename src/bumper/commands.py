"""External command execution for pipeline actions."""

import asyncio
import logging
import os
import typing

from bumper import errors

LOGGER = logging.getLogger(__name__)

CommandRunner = typing.Callable[..., typing.Awaitable[bytes]]


async def run_command(
    cwd: str | os.PathLike[str], command: str, *args: str
) -> bytes:
    """Run a command in the given directory and return its stdout.

    Raises:
        errors.CommandError: If the command can not be started or exits
            with a non-zero status

    """
    LOGGER.debug('Running "%s" in %s', ' '.join((command, *args)), cwd)
    try:
        process = await asyncio.create_subprocess_exec(
            command,
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise errors.CommandError(command, args, None, str(exc)) from exc

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        raise errors.CommandError(
            command,
            args,
            process.returncode,
            stderr.decode('utf-8', errors='replace'),
        )
    return stdout
