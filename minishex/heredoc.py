"""Reading here-document bodies for the heredoc tokens of a command line."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from minishex.env import Environment
from minishex.tokens import Token, TokenType

PROMPT = "> "
INTERRUPTED_EXIT_CODE = 130

ReadLine = Callable[[str], "str | None"]
Expander = Callable[[Environment, str], str]


class HeredocInterrupted(Exception):
    """Raised when the user interrupts the reading of a here-document."""

    def __init__(self) -> None:
        super().__init__("here-document interrupted")
        self.exit_code = INTERRUPTED_EXIT_CODE


def _default_read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def append_line(buffer: str, line: str) -> str:
    """Return the buffer with the line and a newline appended."""
    return f"{buffer}{line}\n"


def read_heredoc(
    delimiter: str,
    read_line: ReadLine | None = None,
    stderr: TextIO | None = None,
) -> tuple[str, bool]:
    """Read lines until the delimiter or end of input.

    Returns the collected body and whether the delimiter was reached. At end
    of input a warning goes to stderr. A KeyboardInterrupt while reading
    becomes HeredocInterrupted.
    """
    reader = _default_read_line if read_line is None else read_line
    body = ""
    try:
        while True:
            line = reader(PROMPT)
            if line is None:
                out = sys.stderr if stderr is None else stderr
                out.write("Unexpected eof\n")
                return body, False
            if line == delimiter:
                return body, True
            body = append_line(body, line)
    except KeyboardInterrupt:
        raise HeredocInterrupted() from None


def collect_heredocs(
    tokens: Iterable[Token],
    env: Environment,
    read_line: ReadLine | None = None,
    expand: Expander | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Replace every delimiter token by the content of its here-document.

    Bodies ended by an unquoted delimiter that contain a dollar sign are
    passed through expand, when one is given.
    """
    for token in tokens:
        if token.type not in (TokenType.DELIMITER, TokenType.DELIMITER_QUOTED):
            continue
        body, terminated = read_heredoc(token.text, read_line, stderr)
        if (
            terminated
            and expand is not None
            and token.type is not TokenType.DELIMITER_QUOTED
            and "$" in body
        ):
            body = expand(env, body)
        token.text = body
        token.type = TokenType.CONTENT