"""Scan a raw expression string into Number and Symbol tokens.

Numbers match [0-9]*\\.?[0-9]+ greedily; symbols are single characters.
Minus is always emitted as Symbol.MINUS here, the converter decides
whether it is unary.
"""

from __future__ import annotations

import re

from safecalc.errors import InvalidCharacter
from safecalc.models import Number, Symbol, Token

# One token, with any leading whitespace.
_TOKEN_RE = re.compile(r"\s*(?:(?P<number>[0-9]*\.?[0-9]+)|(?P<symbol>[-+*/^()%]))")
_TRAILING_SPACE_RE = re.compile(r"\s*")


def tokenize(text: str) -> list[Token]:
    """Split text into tokens in source order.

    Raises InvalidCharacter at the first position no token matches
    (e.g. the dot in '5.', or the first dot in '1..2' since '.' and
    '..2' are not numbers).
    """
    tokens: list[Token] = []
    pos = 0
    end = len(text)

    while pos < end:
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            # Only whitespace left is fine
            pos = _TRAILING_SPACE_RE.match(text, pos).end()
            if pos < end:
                raise InvalidCharacter(f"Cannot scan {text[pos]!r}", position=pos)
            break
        if m.group("number") is not None:
            tokens.append(Number.parse(m.group("number")))
        else:
            tokens.append(Symbol(m.group("symbol")))
        pos = m.end()

    return tokens
