"""The cd builtin: resolving, canonicalizing and entering a directory."""

from __future__ import annotations

import errno
import os
import re
import sys
from typing import Sequence, TextIO

from minishex.env import Environment


class CdError(Exception):
    """Raised when a path component met while canonicalizing is unusable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cd: {path}: {reason}")
        self.path = path
        self.reason = reason


def _check_directory(path: str) -> None:
    if not os.access(path, os.F_OK):
        raise CdError(path, os.strerror(errno.ENOENT))
    if not os.path.isdir(path):
        raise CdError(path, os.strerror(errno.ENOTDIR))


def _parent_cut(prefix: str) -> int:
    """Index of the slash before the last component of prefix, or 0."""
    return max(prefix.rstrip("/").rfind("/"), 0)


def _remove_dot_components(path: str) -> str:
    start = path.find("/./")
    while start != -1:
        path = path[: start + 1] + path[start + 3 :].lstrip("/")
        start = path.find("/./", start)
    if len(path) >= 2 and path.endswith("/."):
        path = path[:-1]
    return path


def _remove_trailing_dot_dot_component(path: str) -> str:
    if len(path) < 3 or not path.endswith("/.."):
        return path
    head = path[: len(path) - 2].rstrip("/")
    if len(head) > 1:
        _check_directory(head)
    return path[: _parent_cut(head) + 1]


def _remove_dot_dot_components(path: str) -> str:
    start = path.find("/../")
    while start != -1:
        cut = _parent_cut(path[: start + 1])
        if start > 0:
            _check_directory(path[:start])
        path = path[: cut + 1] + path[start + 3 :].lstrip("/")
        start = path.find("/../", cut)
    return _remove_trailing_dot_dot_component(path)


def _remove_unnecessary_slashes(path: str) -> str:
    path = re.sub("/{2,}", "/", path)
    if len(path) >= 2 and path.endswith("/"):
        path = path[:-1]
    return path


def canonicalize(curpath: str) -> str:
    """Return the canonical form of a destination path.

    Dot components are dropped, each dot-dot component is removed together
    with the component before it (which must be an existing directory), and
    redundant slashes are collapsed. Raises CdError when a component before
    a dot-dot is missing or is not a directory.
    """
    path = _remove_dot_components(curpath)
    path = _remove_dot_dot_components(path)
    return _remove_unnecessary_slashes(path)


def _is_possibly_cdpath(directory: str) -> bool:
    rest = directory
    for _ in range(2):
        if rest.startswith("."):
            rest = rest[1:]
    return bool(rest) and not rest.startswith("/")


def _cdpath_prefixes(value: str) -> list[str]:
    prefixes = value.split(":")
    if prefixes[-1] == "":
        prefixes.pop()
    return prefixes


def _try_cdpath(env: Environment, directory: str) -> str | None:
    variable = env.get("CDPATH")
    if variable is None or variable.value is None:
        return None
    for prefix in _cdpath_prefixes(variable.value):
        candidate = f"./{directory}" if not prefix else f"{prefix}/{directory}"
        if os.path.isdir(candidate):
            return candidate
    return None


def raw_curpath(env: Environment, directory: str) -> str:
    """Return the uncanonicalized destination path for cd.

    Absolute paths are kept; relative ones are searched in CDPATH when
    applicable, and otherwise joined to the current working directory.
    """
    if directory.startswith("/"):
        return directory
    if _is_possibly_cdpath(directory):
        found = _try_cdpath(env, directory)
        if found is not None:
            return found
    return f"{os.getcwd()}/{directory}"


def _goto_directory(env: Environment, directory: str, err: TextIO) -> int:
    try:
        curpath = canonicalize(raw_curpath(env, directory))
    except CdError as exc:
        err.write(f"{exc}\n")
        return 1
    except OSError as exc:
        err.write(f"cd: getcwd(): {exc.strerror}\n")
        return 1
    try:
        os.chdir(curpath)
    except OSError as exc:
        err.write(f"cd: {curpath}: {os.strerror(exc.errno or 0)}\n")
        return 1
    working_dir = env.get("PWD") or env.append("PWD")
    previous_dir = env.get("OLDPWD") or env.append("OLDPWD")
    previous_dir.value = working_dir.value
    working_dir.value = curpath
    return 0


def builtin_cd(
    env: Environment,
    args: Sequence[str],
    stderr: TextIO | None = None,
) -> int:
    """Change the working directory and update PWD and OLDPWD.

    Returns the exit status; errors are reported on stderr.
    """
    err = sys.stderr if stderr is None else stderr
    option = next((arg for arg in args if arg.startswith("-")), None)
    if args and args[0].startswith("-"):
        err.write(f"cd: {option}: invalid option\n")
        return 1
    if args:
        if len(args) > 1:
            err.write("cd: too many arguments\n")
            return 1
        return _goto_directory(env, args[0], err)
    home = env.get("HOME")
    if home is None or not home.value:
        err.write("cd: HOME not set\n")
        return 1
    return _goto_directory(env, home.value, err)