import re
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional, Tuple

from .errors import InvalidQuery
from .functions import FUNCTIONS
from .nodes import Expr
from .parser import parse_filter

QUERY_OPTIONS: Tuple[str, ...] = ("select", "filter", "orderby", "skip", "top")

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_COUNT_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class OrderKey:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class QueryDescriptor:
    """Parsed query options for one request. Empty means "return everything as is"."""
    select: Optional[Tuple[str, ...]] = None
    filter: Optional[Expr] = None
    order_by: Tuple[OrderKey, ...] = ()
    skip: int = 0
    top: Optional[int] = None


@dataclass(frozen=True)
class QueryPolicy:
    """Which options and filter functions a deployment accepts."""
    allowed_options: FrozenSet[str] = field(default_factory=lambda: frozenset(QUERY_OPTIONS))
    allowed_functions: FrozenSet[str] = field(default_factory=lambda: frozenset(FUNCTIONS))
    max_top: Optional[int] = None


def parse_select(text: str) -> Optional[Tuple[str, ...]]:
    """
    Parse a comma separated field list.

    Returns None for `*`, meaning the whole entity.
    """
    items = [p.strip() for p in text.split(",")]
    if items == ["*"]:
        return None
    fields = []
    for item in items:
        if not item:
            raise InvalidQuery("$select", "Empty field name in $select")
        if not _IDENT_RE.match(item):
            raise InvalidQuery("$select", f"Invalid field name '{item}'", token=item)
        if item in fields:
            raise InvalidQuery("$select", f"Field '{item}' selected more than once", token=item)
        fields.append(item)
    return tuple(fields)


def parse_orderby(text: str) -> Tuple[OrderKey, ...]:
    """Parse `field [asc|desc]` items; direction defaults to ascending."""
    keys = []
    for item in text.split(","):
        parts = item.split()
        if not parts:
            raise InvalidQuery("$orderby", "Empty item in $orderby")
        name = parts[0]
        if not _IDENT_RE.match(name):
            raise InvalidQuery("$orderby", f"Invalid field name '{name}'", token=name)
        if len(parts) > 2:
            raise InvalidQuery("$orderby", f"Unexpected '{parts[2]}' after '{name} {parts[1]}'", token=parts[2])
        direction = parts[1].lower() if len(parts) == 2 else "asc"
        if direction not in ("asc", "desc"):
            raise InvalidQuery("$orderby", f"Direction must be 'asc' or 'desc', got '{parts[1]}'", token=parts[1])
        keys.append(OrderKey(name, direction == "desc"))
    return tuple(keys)


def parse_count(parameter: str, text: str) -> int:
    """Parse a $skip or $top value as a non-negative integer."""
    value = text.strip()
    if not _COUNT_RE.match(value):
        raise InvalidQuery(parameter, f"Expected a non-negative integer, got '{text}'", token=text)
    n = int(value)
    if n < 0:
        raise InvalidQuery(parameter, f"Value must not be negative, got {n}", token=value)
    return n


def parse_query(options: Mapping[str, Optional[str]], policy: Optional[QueryPolicy] = None) -> QueryDescriptor:
    """
    Build a QueryDescriptor from raw `$`-prefixed query parameters.

    Keys without a `$` prefix are not query options and are ignored; `None`
    values are treated as absent.

    Raises:
        InvalidQuery: unknown or disabled option, bad syntax, negative count,
            `$top` over the configured maximum.
    """
    policy = policy or QueryPolicy()
    values = {}
    for key, raw in options.items():
        if not key.startswith("$") or raw is None:
            continue
        name = key[1:]
        if name not in QUERY_OPTIONS:
            raise InvalidQuery(key, f"Query option '{key}' is not supported", token=key)
        if name not in policy.allowed_options:
            raise InvalidQuery(key, f"Query option '{key}' is not allowed", token=key)
        if not raw.strip():
            raise InvalidQuery(key, f"Query option '{key}' must not be empty")
        values[name] = raw

    top = parse_count("$top", values["top"]) if "top" in values else None
    if top is not None and policy.max_top is not None and top > policy.max_top:
        raise InvalidQuery("$top", f"Value {top} exceeds the maximum of {policy.max_top}", token=str(top))

    return QueryDescriptor(
        select=parse_select(values["select"]) if "select" in values else None,
        filter=parse_filter(values["filter"]) if "filter" in values else None,
        order_by=parse_orderby(values["orderby"]) if "orderby" in values else (),
        skip=parse_count("$skip", values["skip"]) if "skip" in values else 0,
        top=top,
    )
