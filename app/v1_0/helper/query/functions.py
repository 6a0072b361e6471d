from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple


@dataclass(frozen=True)
class FunctionSpec:
    """A $filter function: argument types, result type and implementation."""
    name: str
    arg_types: Tuple[str, ...]
    return_type: str
    impl: Callable[..., Any]


def _null_safe(fn: Callable[..., Any], default: Any = None) -> Callable[..., Any]:
    def wrapper(*args: Any) -> Any:
        if any(a is None for a in args):
            return default
        return fn(*args)
    return wrapper


_SPECS = (
    # boolean string functions
    FunctionSpec("contains", ("str", "str"), "bool", _null_safe(lambda s, sub: sub in s, False)),
    FunctionSpec("startswith", ("str", "str"), "bool", _null_safe(lambda s, p: s.startswith(p), False)),
    FunctionSpec("endswith", ("str", "str"), "bool", _null_safe(lambda s, p: s.endswith(p), False)),
    # value functions
    FunctionSpec("tolower", ("str",), "str", _null_safe(str.lower)),
    FunctionSpec("toupper", ("str",), "str", _null_safe(str.upper)),
    FunctionSpec("trim", ("str",), "str", _null_safe(str.strip)),
    FunctionSpec("length", ("str",), "int", _null_safe(len)),
    FunctionSpec("year", ("date",), "int", _null_safe(lambda d: d.year)),
    FunctionSpec("month", ("date",), "int", _null_safe(lambda d: d.month)),
    FunctionSpec("day", ("date",), "int", _null_safe(lambda d: d.day)),
)

FUNCTIONS: Dict[str, FunctionSpec] = {f.name: f for f in _SPECS}
