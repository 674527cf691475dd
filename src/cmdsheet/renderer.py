"""Turn a composed token list into the single line shown to the user."""

from __future__ import annotations

import re
from typing import Iterable

_QUOTED = re.compile(r"""('(?:[^']|'\\'')*'|"(?:[^"\\]|\\.)*")""")
_WHITESPACE = re.compile(r"\s+")


def render(tokens: Iterable[str]) -> str:
    """Join *tokens* with single spaces.

    Empty tokens are skipped, runs of whitespace collapse to one space, and
    the result is trimmed. Whitespace inside a single- or double-quoted
    operand is kept as written. Rendering an already rendered string yields
    the same string.

    Example::

        >>> render(["tar", "", "cvzf ", " a.tar.gz"])
        'tar cvzf a.tar.gz'
        >>> render(["grep", '"a  b"', "log.txt"])
        'grep "a  b" log.txt'
    """
    line = " ".join(token for token in tokens if token)
    parts = _QUOTED.split(line)
    # split() with one group puts the quoted operands at odd indexes
    return "".join(
        part if index % 2 else _WHITESPACE.sub(" ", part)
        for index, part in enumerate(parts)
    ).strip()
