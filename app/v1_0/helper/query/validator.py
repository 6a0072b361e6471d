from typing import Optional

from .errors import InvalidQuery
from .functions import FUNCTIONS
from .lexer import FILTER
from .nodes import Call, Compare, Expr, FieldRef, Literal, Logical, Not
from .options import QueryDescriptor, QueryPolicy
from .schemas import EntitySchema

_NUMERIC = frozenset({"int", "number"})
_ORDERED = _NUMERIC | {"str", "date"}


def validate_query(query: QueryDescriptor, schema: EntitySchema, policy: Optional[QueryPolicy] = None) -> None:
    """
    Check a descriptor against the entity's field set before anything runs.

    Raises:
        InvalidQuery: unknown field, type mismatch, disabled function,
            negative skip/top.
    """
    policy = policy or QueryPolicy()

    if query.filter is not None:
        result = _infer(query.filter, schema, policy)
        if result != "bool":
            raise InvalidQuery(FILTER, f"Filter expression must be boolean, got {result}")

    for key in query.order_by:
        _require_field("$orderby", key.field, schema)

    for name in query.select or ():
        _require_field("$select", name, schema)

    if query.skip < 0:
        raise InvalidQuery("$skip", f"Value must not be negative, got {query.skip}", token=str(query.skip))
    if query.top is not None and query.top < 0:
        raise InvalidQuery("$top", f"Value must not be negative, got {query.top}", token=str(query.top))


def _require_field(parameter: str, name: str, schema: EntitySchema) -> str:
    field_type = schema.type_of(name)
    if field_type is None:
        raise InvalidQuery(parameter, f"Unknown field '{name}' on {schema.entity}", token=name)
    return field_type


def _compatible(left: str, right: str) -> bool:
    return left == right or (left in _NUMERIC and right in _NUMERIC)


def _infer(expr: Expr, schema: EntitySchema, policy: QueryPolicy) -> str:
    if isinstance(expr, FieldRef):
        return _require_field(FILTER, expr.name, schema)

    if isinstance(expr, Literal):
        return expr.kind

    if isinstance(expr, Compare):
        left = _infer(expr.left, schema, policy)
        right = _infer(expr.right, schema, policy)
        if "null" in (left, right):
            if expr.op not in ("eq", "ne"):
                raise InvalidQuery(FILTER, f"Operator '{expr.op}' cannot be applied to null", token=expr.op)
        elif not _compatible(left, right):
            raise InvalidQuery(FILTER, f"Cannot compare {left} with {right} using '{expr.op}'", token=expr.op)
        elif expr.op not in ("eq", "ne") and left not in _ORDERED:
            raise InvalidQuery(FILTER, f"Operator '{expr.op}' is not defined for {left}", token=expr.op)
        return "bool"

    if isinstance(expr, Logical):
        for side in (expr.left, expr.right):
            t = _infer(side, schema, policy)
            if t != "bool":
                raise InvalidQuery(FILTER, f"Operands of '{expr.op}' must be boolean, got {t}", token=expr.op)
        return "bool"

    if isinstance(expr, Not):
        t = _infer(expr.operand, schema, policy)
        if t != "bool":
            raise InvalidQuery(FILTER, f"Operand of 'not' must be boolean, got {t}", token="not")
        return "bool"

    if isinstance(expr, Call):
        spec = FUNCTIONS.get(expr.name)
        if spec is None:
            raise InvalidQuery(FILTER, f"Unknown function '{expr.name}'", token=expr.name)
        if expr.name not in policy.allowed_functions:
            raise InvalidQuery(FILTER, f"Function '{expr.name}' is not allowed", token=expr.name)
        if len(expr.args) != len(spec.arg_types):
            raise InvalidQuery(
                FILTER,
                f"Function '{expr.name}' takes {len(spec.arg_types)} argument(s), got {len(expr.args)}",
                token=expr.name,
            )
        for pos, (arg, expected) in enumerate(zip(expr.args, spec.arg_types), start=1):
            t = _infer(arg, schema, policy)
            if t != "null" and not _compatible(t, expected):
                raise InvalidQuery(
                    FILTER,
                    f"Argument {pos} of '{expr.name}' must be {expected}, got {t}",
                    token=expr.name,
                )
        return spec.return_type

    raise InvalidQuery(FILTER, f"Unsupported expression {type(expr).__name__}")
