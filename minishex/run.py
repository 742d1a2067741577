"""Resolving and running one command or builtin."""

from __future__ import annotations

import errno
import os
import subprocess
import sys
from collections.abc import Sequence
from typing import TextIO

from minishex.builtins import is_builtin, run_builtin
from minishex.env import Environment
from minishex.processes import status_to_exit_code
from minishex.tokens import Token, TokenType

NOT_FOUND_EXIT_CODE = 127
NOT_EXECUTABLE_EXIT_CODE = 126


class CommandError(Exception):
    """Raised when a command cannot be found or executed."""

    def __init__(self, command: str, reason: str, exit_code: int) -> None:
        super().__init__(f"{command}: {reason}")
        self.command = command
        self.reason = reason
        self.exit_code = exit_code


def search_in_path(command: str, env: Environment) -> str:
    """Return the first existing PATH entry joined with command, else command."""
    variable = env.get("PATH")
    if variable is None or variable.value is None:
        return command
    for directory in filter(None, variable.value.split(":")):
        candidate = f"{directory}/{command}"
        if os.access(candidate, os.F_OK):
            return candidate
    return command


def search_from_cwd(command: str) -> str:
    """Return the working directory joined with command if that exists, else command."""
    candidate = f"{os.getcwd()}/{command}"
    return candidate if os.access(candidate, os.F_OK) else command


def resolve_command(command: str, env: Environment) -> str:
    """Return the absolute path of an executable command.

    Raises CommandError when it cannot be found, is a directory, or is not
    executable.
    """
    if not command:
        raise CommandError(command, "command not found", NOT_FOUND_EXIT_CODE)
    if "/" in command:
        path = search_from_cwd(command)
    else:
        path = search_in_path(command, env)
    if not path.startswith("/"):
        raise CommandError(path, "command not found", NOT_FOUND_EXIT_CODE)
    if not os.access(path, os.F_OK):
        raise CommandError(path, os.strerror(errno.ENOENT), NOT_FOUND_EXIT_CODE)
    if os.path.isdir(path):
        raise CommandError(path, os.strerror(errno.EISDIR), NOT_EXECUTABLE_EXIT_CODE)
    if not os.access(path, os.X_OK):
        raise CommandError(path, os.strerror(errno.EACCES), NOT_EXECUTABLE_EXIT_CODE)
    return path


def _child_environment(env: Environment) -> dict[str, str]:
    return {v.name: v.value for v in env if v.value is not None}


def _run_command(argv: list[str], env: Environment, err: TextIO) -> int:
    try:
        completed = subprocess.run(argv, env=_child_environment(env), check=False)
    except OSError as exc:
        err.write(f"execve(): {exc.strerror}\n")
        return 1
    if completed.returncode < 0:
        return status_to_exit_code(-completed.returncode, err)
    return completed.returncode


def run(
    tokens: Sequence[Token],
    env: Environment,
    status: int = 0,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the command or builtin described by tokens and return its exit status.

    Builtins are run in place with QUIET_EXIT set; commands run as child
    processes inheriting the standard file descriptors. Errors are reported
    on stderr.
    """
    err = sys.stderr if stderr is None else stderr
    head = tokens[0]
    name = head.text
    if name and "/" not in name and head.type is TokenType.BUILTIN and is_builtin(name):
        env.append("QUIET_EXIT")
        args = [token.text for token in tokens[1:]]
        return run_builtin(name, env, args, status, stdout, err)
    try:
        path = resolve_command(name, env)
    except CommandError as exc:
        err.write(f"{exc}\n")
        return exc.exit_code
    except OSError as exc:
        err.write(f"getcwd(): {exc.strerror}\n")
        return 1
    return _run_command([path, *(token.text for token in tokens[1:])], env, err)