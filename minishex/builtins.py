"""The env, exit, pwd and export helpers, plus builtin dispatch."""

from __future__ import annotations

import os
import string
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from minishex.cd import builtin_cd
from minishex.env import Environment

_SPACES = " \t\n\v\f\r"
_DIGITS = frozenset(string.digits)
_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_IDENTIFIER_BODY = frozenset(string.ascii_letters + string.digits + "_")

_SURPRISE = (
    "           .-.\n"
    "          |   |\n"
    "          |   |\n"
    "       ,-'|   |)\n"
    "      /,-.|   |,-. __\n"
    "     /|   |   |   |  ;\n"
    "    | |   |   |   |  ;\n"
    "    | |   |   |      |\n"
    "     \\|             ,/\n"
    "      '-.________.-'\n"
)


class ShellExit(Exception):
    """Raised by the exit builtin to end the shell with the given status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _out(stream: TextIO | None) -> TextIO:
    return sys.stdout if stream is None else stream


def _err(stream: TextIO | None) -> TextIO:
    return sys.stderr if stream is None else stream


def _first_option(args: Sequence[str]) -> str | None:
    """Return the leading option argument, if any; no options are supported."""
    if args and args[0].startswith("-"):
        return args[0]
    return None


def builtin_env(
    env: Environment,
    args: Sequence[str],
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Print every assigned variable; options and arguments are rejected."""
    err = _err(stderr)
    option = _first_option(args)
    if option is not None:
        err.write(f"env: {option}: invalid option\n")
        return 125
    if args:
        err.write("env: too many arguments\n")
        return 1
    env.print_assigned(_out(stdout))
    return 0


def _is_positive(text: str) -> bool:
    rest = text.lstrip(_SPACES)
    if rest.startswith("+"):
        rest = rest[1:]
    return all(char in _DIGITS for char in rest)


def _to_status(text: str) -> int:
    rest = text.lstrip(_SPACES)
    if rest.startswith("+"):
        rest = rest[1:]
    return int(rest) & 0xFF if rest else 0


def builtin_exit(
    env: Environment,
    args: Sequence[str],
    status: int = 0,
    stderr: TextIO | None = None,
) -> int:
    """Leave the shell by raising ShellExit.

    Without argument the given status is used. A non-numeric argument exits
    with 2. With more than one argument the shell is not left and 1 is
    returned.
    """
    err = _err(stderr)
    if "QUIET_EXIT" not in env:
        err.write("exit\n")
    if not args:
        raise ShellExit(status)
    first = args[0]
    if not _is_positive(first):
        err.write(f"exit: {first}: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 1:
        err.write("exit: too many arguments\n")
        return 1
    raise ShellExit(_to_status(first))


def builtin_pwd(
    env: Environment,
    args: Sequence[str],
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Print the current working directory; options are rejected."""
    err = _err(stderr)
    option = _first_option(args)
    if option is not None:
        err.write(f"pwd: {option}: invalid option\n")
        return 2
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"pwd: getcwd(): {exc.strerror}\n")
        return 1
    _out(stdout).write(cwd + "\n")
    return 0


def _identifier_end(text: str) -> int | None:
    """Index where a valid identifier ends in text, or None if invalid."""
    if not text or text[0] not in _IDENTIFIER_START:
        return None
    end = text.find("=")
    if end == -1:
        end = len(text)
    if all(char in _IDENTIFIER_BODY for char in text[1:end]):
        return end
    return None


def export_one(
    env: Environment,
    text: str,
    stderr: TextIO | None = None,
) -> int:
    """Add or modify one variable given as NAME or NAME=value.

    Returns 0, or 1 after reporting an invalid identifier on stderr. Naming
    an existing variable without a value leaves it unchanged.
    """
    end = _identifier_end(text)
    if end is None:
        _err(stderr).write(f"export: `{text}': not a valid identifier\n")
        return 1
    name = text[:end]
    value = text[end + 1 :] if end < len(text) else None
    variable = env.get(name)
    if variable is not None:
        if value is not None:
            variable.value = value
        return 0
    env.append(name, value)
    return 0


def surprise(stdout: TextIO | None = None) -> None:
    """Write the drawing shown by export when given no argument."""
    _out(stdout).write(_SURPRISE)


Builtin = Callable[
    [Environment, Sequence[str], int, TextIO | None, TextIO | None], int
]

_BUILTINS: dict[str, Builtin] = {
    "cd": lambda env, args, status, out, err: builtin_cd(env, args, err),
    "env": lambda env, args, status, out, err: builtin_env(env, args, out, err),
    "exit": lambda env, args, status, out, err: builtin_exit(env, args, status, err),
    "pwd": lambda env, args, status, out, err: builtin_pwd(env, args, out, err),
}


def is_builtin(name: str) -> bool:
    """Whether name is a builtin this module can run."""
    return name in _BUILTINS


def run_builtin(
    name: str,
    env: Environment,
    args: Sequence[str],
    status: int = 0,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the named builtin and return its exit status.

    Raises KeyError for an unknown name; exit raises ShellExit.
    """
    try:
        builtin = _BUILTINS[name]
    except KeyError:
        raise KeyError(name) from None
    return builtin(env, args, status, stdout, stderr)