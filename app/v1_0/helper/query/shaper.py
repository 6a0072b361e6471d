import operator
import sys
from itertools import islice
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .functions import FUNCTIONS
from .nodes import Call, Compare, Expr, FieldRef, Literal, Logical, Not
from .options import OrderKey, QueryDescriptor, QueryPolicy, parse_query
from .schemas import EntitySchema
from .validator import validate_query

Row = Any
Evaluator = Callable[[Row], Any]

_COMPARE: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": operator.eq,
    "ne": operator.ne,
    "gt": operator.gt,
    "ge": operator.ge,
    "lt": operator.lt,
    "le": operator.le,
}


def get_value(row: Row, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def compile_expr(expr: Expr) -> Evaluator:
    """Turn a validated filter AST into a function of one row."""
    if isinstance(expr, FieldRef):
        name = expr.name
        return lambda row: get_value(row, name)

    if isinstance(expr, Literal):
        value = expr.value
        return lambda row: value

    if isinstance(expr, Compare):
        left, right = compile_expr(expr.left), compile_expr(expr.right)
        op = _COMPARE[expr.op]
        if expr.op in ("eq", "ne"):
            return lambda row: op(left(row), right(row))

        def ordered(row: Row) -> bool:
            a, b = left(row), right(row)
            if a is None or b is None:
                return False
            return op(a, b)
        return ordered

    if isinstance(expr, Logical):
        left, right = compile_expr(expr.left), compile_expr(expr.right)
        if expr.op == "and":
            return lambda row: left(row) is True and right(row) is True
        return lambda row: left(row) is True or right(row) is True

    if isinstance(expr, Not):
        inner = compile_expr(expr.operand)
        return lambda row: inner(row) is not True

    if isinstance(expr, Call):
        impl = FUNCTIONS[expr.name].impl
        args = [compile_expr(a) for a in expr.args]
        return lambda row: impl(*(a(row) for a in args))

    raise TypeError(f"Unsupported expression {type(expr).__name__}")


def apply_filter(rows: Iterable[Row], expr: Optional[Expr]) -> Iterator[Row]:
    if expr is None:
        return iter(rows)
    predicate = compile_expr(expr)
    return (row for row in rows if predicate(row) is True)


def apply_orderby(rows: Iterable[Row], keys: Sequence[OrderKey]) -> List[Row]:
    """
    Stable multi-key sort.

    Sorting from the lowest priority key to the highest keeps earlier keys
    dominant; `sorted(reverse=True)` stays stable so ties keep input order.
    Nulls go first ascending and last descending.
    """
    out = list(rows)
    for key in reversed(keys):
        name = key.field
        out = sorted(
            out,
            key=lambda row: _null_first(get_value(row, name)),
            reverse=key.descending,
        )
    return out


def _null_first(value: Any) -> Tuple[bool, Any]:
    return (False, 0) if value is None else (True, value)


def apply_select(rows: Iterable[Row], fields: Optional[Sequence[str]]) -> Iterator[Any]:
    if fields is None:
        return iter(rows)
    return ({name: get_value(row, name) for name in fields} for row in rows)


def apply_page(rows: Iterable[Row], skip: int = 0, top: Optional[int] = None) -> Iterator[Row]:
    # islice bounds are capped at sys.maxsize; larger values behave the same
    start = min(skip, sys.maxsize)
    stop = None if top is None else min(skip + top, sys.maxsize)
    return islice(rows, start, stop)


class QueryShaper:
    """
    Applies $filter, $orderby, $select and $skip/$top to an in-memory collection.

    The pipeline order is fixed: filter, order-by, select, then pagination.
    The whole descriptor is validated before the first stage runs, so a bad
    query never produces a partial result. Instances hold no per-call state
    and can be shared between requests.
    """

    def __init__(self, schema: EntitySchema, policy: Optional[QueryPolicy] = None) -> None:
        self.schema = schema
        self.policy = policy or QueryPolicy()

    def parse(self, options: Mapping[str, Optional[str]]) -> QueryDescriptor:
        return parse_query(options, self.policy)

    def apply(self, entities: Iterable[Row], query: QueryDescriptor) -> List[Any]:
        validate_query(query, self.schema, self.policy)

        rows: Iterable[Row] = apply_filter(entities, query.filter)
        if query.order_by:
            rows = apply_orderby(rows, query.order_by)
        rows = apply_select(rows, query.select)
        return list(apply_page(rows, query.skip, query.top))
