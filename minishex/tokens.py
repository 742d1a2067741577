"""Token kinds and token records produced by the command-line parser."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Kind of a token in a parsed command line."""

    COMMAND = enum.auto()
    BUILTIN = enum.auto()
    ARGUMENT = enum.auto()
    PIPE = enum.auto()
    INPUT = enum.auto()
    HEREDOC = enum.auto()
    OUTPUT_TRUNCATE = enum.auto()
    OUTPUT_APPEND = enum.auto()
    FILE = enum.auto()
    DELIMITER = enum.auto()
    DELIMITER_QUOTED = enum.auto()
    CONTENT = enum.auto()

    @property
    def is_redirection(self) -> bool:
        """Whether this kind is a redirection operator."""
        return self in _REDIRECTION_OPERANDS

    @property
    def operand_type(self) -> TokenType | None:
        """The kind the token following this redirection operator must have."""
        return _REDIRECTION_OPERANDS.get(self)


_REDIRECTION_OPERANDS = {
    TokenType.INPUT: TokenType.FILE,
    TokenType.HEREDOC: TokenType.CONTENT,
    TokenType.OUTPUT_TRUNCATE: TokenType.FILE,
    TokenType.OUTPUT_APPEND: TokenType.FILE,
}


@dataclass
class Token:
    """One word or operator of a command line."""

    type: TokenType
    text: str


def find_first(tokens: Iterable[Token], token_type: TokenType) -> int | None:
    """Return the index of the first token of the given kind, or None."""
    return next(
        (index for index, token in enumerate(tokens) if token.type is token_type),
        None,
    )