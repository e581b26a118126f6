"""Run the external password-store command and parse its listing."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from ironpass.ansi import strip_escape_sequences
from ironpass.config import IronPassConfig
from ironpass.constants import NO_MATCHES_EXIT_CODE
from ironpass.listing import parse_listing

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


class PassError(Exception):
    """Base class for failures of the password-store command."""


class PassNotFoundError(PassError):
    """Raised when the configured executable cannot be found."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Password store command not found: {command}")
        self.command = command


class PassCommandError(PassError):
    """Raised when the command fails for any reason other than 'no matches'."""

    def __init__(self, command: Sequence[str], returncode: int | None, stderr: str) -> None:
        detail = stderr or (
            f"exited with code {returncode}" if returncode is not None else "could not be started"
        )
        super().__init__(f"{' '.join(command)}: {detail}")
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class PassTimeoutError(PassError):
    """Raised when the command does not finish within the configured timeout."""

    def __init__(self, command: Sequence[str], timeout: float) -> None:
        super().__init__(f"{' '.join(command)}: timed out after {timeout:g}s")
        self.command = list(command)
        self.timeout = timeout


class ListingStatus(StrEnum):
    """Outcome of a listing command that did not fail."""

    MATCHES = "matches"
    NO_MATCHES = "no_matches"


@dataclass
class ListingResult:
    """Entries produced by one listing command."""

    status: ListingStatus
    entries: list[str] = field(default_factory=list)
    command: list[str] = field(default_factory=list)


class PassStore:
    """Lists entries of a password store through the ``pass`` executable."""

    def __init__(self, config: IronPassConfig | None = None) -> None:
        self.config = config or IronPassConfig()

    async def find(self, *terms: str) -> ListingResult:
        """Run ``pass find TERMS...`` and flatten the matching entries."""
        return await self._list("find", *terms)

    async def ls(self, subfolder: str | None = None) -> ListingResult:
        """Run ``pass ls [SUBFOLDER]`` and flatten the whole tree."""
        if subfolder:
            return await self._list("ls", subfolder)
        return await self._list("ls")

    async def _list(self, *args: str) -> ListingResult:
        command = [self.config.store.command, *args]
        returncode, stdout, stderr = await self._run(command)

        if returncode == NO_MATCHES_EXIT_CODE:
            log.debug("%s reported no matches", " ".join(command))
            return ListingResult(status=ListingStatus.NO_MATCHES, command=command)
        if returncode != 0:
            raise PassCommandError(command, returncode, stderr)

        entries = parse_listing(
            strip_escape_sequences(stdout),
            header_prefixes=self.config.listing.header_prefixes,
        )
        return ListingResult(status=ListingStatus.MATCHES, entries=entries, command=command)

    async def _run(self, command: list[str]) -> tuple[int, str, str]:
        """Run the command and return (returncode, stdout, stderr)."""
        store = self.config.store
        log.debug("Running %s", " ".join(command))
        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=store.build_env(),
            )
        except FileNotFoundError as exc:
            raise PassNotFoundError(command[0]) from exc
        except OSError as exc:
            raise PassCommandError(command, None, str(exc)) from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=store.timeout_seconds
            )
        except TimeoutError as exc:
            raise PassTimeoutError(command, store.timeout_seconds) from exc
        finally:
            # Reached on timeout and on cancellation; never leave the child running
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        returncode = proc.returncode if proc.returncode is not None else -1
        return (
            returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace").strip(),
        )


def find_entries(terms: Sequence[str], config: IronPassConfig | None = None) -> ListingResult:
    """Blocking wrapper around :meth:`PassStore.find`."""
    return asyncio.run(PassStore(config).find(*terms))
