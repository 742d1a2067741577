"""Ordered shell environment variables."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TextIO


@dataclass
class Variable:
    """An environment variable; a value of None means declared but unassigned."""

    name: str
    value: str | None = None

    def to_entry(self) -> str:
        """Render as an environment entry: NAME=value, or NAME when unassigned."""
        if self.value is None:
            return self.name
        return f"{self.name}={self.value}"


class Environment:
    """An ordered collection of shell variables."""

    def __init__(self, variables: Iterable[Variable] | None = None) -> None:
        self._variables: list[Variable] = [
            Variable(v.name, v.value) for v in (variables or ())
        ]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str | None]) -> Environment:
        """Build an environment from a name-to-value mapping, keeping its order."""
        return cls(Variable(name, value) for name, value in mapping.items())

    def get(self, name: str) -> Variable | None:
        """Return the first variable with this name, or None."""
        return next((v for v in self._variables if v.name == name), None)

    def append(self, name: str, value: str | None = None) -> Variable:
        """Add a new variable at the end and return it."""
        variable = Variable(name, value)
        self._variables.append(variable)
        return variable

    def prepend(self, name: str, value: str | None = None) -> Variable:
        """Add a new variable at the beginning and return it."""
        variable = Variable(name, value)
        self._variables.insert(0, variable)
        return variable

    def remove(self, name: str) -> Variable:
        """Remove and return the first variable with this name.

        Raises KeyError if there is none.
        """
        for index, variable in enumerate(self._variables):
            if variable.name == name:
                return self._variables.pop(index)
        raise KeyError(name)

    def clear(self) -> None:
        """Remove every variable."""
        self._variables.clear()

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables)

    def __contains__(self, name: object) -> bool:
        return any(v.name == name for v in self._variables)

    def assigned_lines(self) -> Iterator[str]:
        """Yield NAME=value for every variable that has a value."""
        for variable in self._variables:
            if variable.value is not None:
                yield f"{variable.name}={variable.value}"

    def print_assigned(self, file: TextIO | None = None) -> None:
        """Write every assigned variable as NAME=value, one per line."""
        out = sys.stdout if file is None else file
        for line in self.assigned_lines():
            out.write(line + "\n")

    def to_envp(self) -> list[str]:
        """Return the variables as environment entries, in order."""
        return [variable.to_entry() for variable in self._variables]