import re
from datetime import date
from typing import Any, List, NamedTuple

from .errors import InvalidQuery

FILTER = "$filter"

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<string>'(?:[^']|'')*')
    | (?P<date>\d{4}-\d{2}-\d{2}(?![\w.]))
    | (?P<number>-?\d+(?:\.\d+)?(?![\w.]))
    | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<comma>,)
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    kind: str
    value: Any
    text: str
    pos: int


def tokenize(text: str) -> List[Token]:
    """Split a $filter expression into tokens; the list always ends with an `eof` token."""
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            ch = text[pos]
            if ch == "'":
                raise InvalidQuery(FILTER, f"Unterminated string literal at position {pos}", token=text[pos:])
            raise InvalidQuery(FILTER, f"Unexpected character '{ch}' at position {pos}", token=ch)
        kind = m.lastgroup
        raw = m.group()
        if kind != "ws":
            tokens.append(Token(kind, _convert(kind, raw), raw, pos))
        pos = m.end()
    tokens.append(Token("eof", None, "", pos))
    return tokens


def _convert(kind: str, raw: str) -> Any:
    if kind == "string":
        return raw[1:-1].replace("''", "'")
    if kind == "number":
        return float(raw) if "." in raw else int(raw)
    if kind == "date":
        try:
            return date.fromisoformat(raw)
        except ValueError:
            raise InvalidQuery(FILTER, f"Invalid date literal '{raw}'", token=raw)
    return raw
