from .errors import InvalidQuery
from .functions import FUNCTIONS, FunctionSpec
from .nodes import Call, Compare, Expr, FieldRef, Literal, Logical, Not
from .lexer import Token, tokenize
from .parser import MAX_DEPTH, MAX_NESTING, parse_filter
from .options import (
    QUERY_OPTIONS,
    OrderKey,
    QueryDescriptor,
    QueryPolicy,
    parse_count,
    parse_orderby,
    parse_query,
    parse_select,
)
from .schemas import EntitySchema, FieldSpec, STUDENT_SCHEMA
from .validator import validate_query
from .shaper import (
    QueryShaper,
    apply_filter,
    apply_orderby,
    apply_page,
    apply_select,
    compile_expr,
    get_value,
)

__all__ = [
    "InvalidQuery",
    "FUNCTIONS", "FunctionSpec",
    "Call", "Compare", "Expr", "FieldRef", "Literal", "Logical", "Not",
    "Token", "tokenize",
    "MAX_DEPTH", "MAX_NESTING", "parse_filter",
    "QUERY_OPTIONS", "OrderKey", "QueryDescriptor", "QueryPolicy",
    "parse_count", "parse_orderby", "parse_query", "parse_select",
    "EntitySchema", "FieldSpec", "STUDENT_SCHEMA",
    "validate_query",
    "QueryShaper",
    "apply_filter", "apply_orderby", "apply_page", "apply_select",
    "compile_expr", "get_value",
]
