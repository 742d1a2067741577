"""Tracking, signalling and reaping the child processes of a pipeline."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

_SIGNAL_MESSAGES: dict[int, str] = {
    signal.SIGQUIT: "Quit (core dumped)",
    signal.SIGSEGV: "Segmentation fault (core dumped)",
    signal.SIGINT: "",
}


def status_to_exit_code(status: int, stderr: TextIO | None = None) -> int:
    """Convert a raw wait status into a shell exit code.

    A process killed by a signal gives 128 plus the signal number; for a few
    signals a message is written on stderr as well.
    """
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status) & 0xFF
    if os.WIFSIGNALED(status):
        sig = os.WTERMSIG(status)
        message = _SIGNAL_MESSAGES.get(sig)
        if message is not None:
            out = sys.stderr if stderr is None else stderr
            out.write(message + "\n")
        return (128 + sig) & 0xFF
    if os.WIFSTOPPED(status):
        return os.WSTOPSIG(status) & 0xFF
    return status & 0xFF


class ProcessGroup:
    """An ordered collection of child process ids."""

    def __init__(self, pids: Iterable[int] | None = None) -> None:
        self._pids: list[int] = list(pids or ())

    def add(self, pid: int) -> int:
        """Append a process id and return it."""
        self._pids.append(pid)
        return pid

    def add_front(self, pid: int) -> int:
        """Insert a process id at the beginning and return it."""
        self._pids.insert(0, pid)
        return pid

    def remove(self, pid: int) -> None:
        """Forget a process id. Raises ValueError if it is not tracked."""
        self._pids.remove(pid)

    def clear(self) -> None:
        """Forget every process id without signalling or waiting."""
        self._pids.clear()

    def __len__(self) -> int:
        return len(self._pids)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._pids))

    def kill(self, sig: int = signal.SIGTERM) -> None:
        """Send a signal to every process, forgetting each one once signalled.

        An OSError from the first failing kill propagates; the processes not
        yet signalled stay in the group.
        """
        while self._pids:
            os.kill(self._pids[0], sig)
            self._pids.pop(0)

    def wait(self, stderr: TextIO | None = None) -> int:
        """Wait for every process in order and return the last one's exit code.

        Raises ValueError when there is nothing to wait for; an OSError from
        waitpid propagates.
        """
        if not self._pids:
            raise ValueError("no processes to wait for")
        status = 0
        while self._pids:
            _, status = os.waitpid(self._pids[0], 0)
            self._pids.pop(0)
        return status_to_exit_code(status, stderr)