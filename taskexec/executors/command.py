"""Subprocess invocation shapes and the default asyncio launcher."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import os
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class Invocation:
    """A fully prepared command line, ready to hand to a launcher."""

    program: str
    args: tuple[str, ...] = ()
    working_dir: str | None = None
    env: dict[str, str] = field(default_factory=dict)
    stdin: str | None = None

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def to_dict(self) -> dict[str, Any]:
        return {
            "program": self.program,
            "args": list(self.args),
            "working_dir": self.working_dir,
            "env": dict(self.env),
            "stdin": self.stdin,
        }


@dataclass(slots=True)
class CommandProcess:
    """Handle to a started agent process."""

    invocation: Invocation
    process: asyncio.subprocess.Process

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def returncode(self) -> int | None:
        return self.process.returncode

    async def wait(self) -> int:
        return await self.process.wait()

    async def communicate(self) -> tuple[str, str]:
        """Wait for exit and return decoded ``(stdout, stderr)``."""
        stdout, stderr = await self.process.communicate()
        return (
            (stdout or b"").decode("utf-8", errors="replace"),
            (stderr or b"").decode("utf-8", errors="replace"),
        )


class ProcessLauncher(Protocol):
    """Starts an invocation; raises OSError (or UnicodeEncodeError for stdin) when it cannot start."""

    async def start(self, invocation: Invocation) -> CommandProcess:
        """Start ``invocation`` and return a handle to the running process."""


class AsyncioProcessLauncher:
    """Launch invocations with ``asyncio.create_subprocess_exec``.

    Environment overrides are layered on top of the current environment.
    Stdin text, when present, is encoded before the process starts (so an
    unencodable prompt raises ``UnicodeEncodeError`` without starting
    anything), then written up front and the pipe closed. A failed write kills
    and reaps the child before the ``OSError`` propagates.
    """

    async def start(self, invocation: Invocation) -> CommandProcess:
        stdin_bytes = invocation.stdin.encode("utf-8") if invocation.stdin is not None else None
        env = {**os.environ, **invocation.env}
        process = await asyncio.create_subprocess_exec(
            invocation.program,
            *invocation.args,
            cwd=invocation.working_dir,
            env=env,
            stdin=(
                asyncio.subprocess.PIPE
                if stdin_bytes is not None
                else asyncio.subprocess.DEVNULL
            ),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        if stdin_bytes is not None and process.stdin is not None:
            try:
                process.stdin.write(stdin_bytes)
                await process.stdin.drain()
                process.stdin.close()
            except OSError:
                await _kill_and_reap(process)
                raise
        return CommandProcess(invocation=invocation, process=process)


async def _kill_and_reap(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()
