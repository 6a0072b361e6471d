"""
Recursive-descent parser for $filter expressions.

Grammar (keywords are case-insensitive, field names are not):

    or_expr    := and_expr ("or" and_expr)*
    and_expr   := unary ("and" unary)*
    unary      := "not" unary | comparison
    comparison := operand (("eq" | "ne" | "gt" | "ge" | "lt" | "le") operand)?
    operand    := "(" or_expr ")" | literal | name "(" args ")" | name
    args       := [or_expr ("," or_expr)*]
"""
from typing import List

from .errors import InvalidQuery
from .lexer import FILTER, Token, tokenize
from .nodes import COMPARISON_OPS, Call, Compare, Expr, FieldRef, Literal, Logical, Not

_KEYWORDS = frozenset(COMPARISON_OPS) | {"and", "or", "not"}

MAX_NESTING = 50
MAX_DEPTH = 200


def parse_filter(text: str) -> Expr:
    if not text or not text.strip():
        raise InvalidQuery(FILTER, "Filter expression must not be empty")
    return _Parser(tokenize(text)).parse()


def _depth(expr: Expr) -> int:
    """Height of the expression tree, measured without recursion."""
    deepest = 0
    stack = [(expr, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        if isinstance(node, (Compare, Logical)):
            stack.append((node.left, level + 1))
            stack.append((node.right, level + 1))
        elif isinstance(node, Not):
            stack.append((node.operand, level + 1))
        elif isinstance(node, Call):
            stack.extend((a, level + 1) for a in node.args)
    return deepest


class _Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.i = 0
        self.nesting = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.i]

    def _advance(self) -> Token:
        tok = self.tokens[self.i]
        self.i += 1
        return tok

    def _at_keyword(self, *words: str) -> bool:
        tok = self.current
        return tok.kind == "ident" and tok.text.lower() in words

    def _expect(self, kind: str, what: str) -> Token:
        if self.current.kind != kind:
            raise self._error(f"Expected {what}")
        return self._advance()

    def _error(self, message: str) -> InvalidQuery:
        tok = self.current
        if tok.kind == "eof":
            return InvalidQuery(FILTER, f"{message} but reached end of expression")
        return InvalidQuery(FILTER, f"{message} at position {tok.pos}, found '{tok.text}'", token=tok.text)

    def parse(self) -> Expr:
        expr = self._or_expr()
        if self.current.kind != "eof":
            raise self._error("Unexpected token")
        if _depth(expr) > MAX_DEPTH:
            raise InvalidQuery(FILTER, f"Expression nested too deeply (more than {MAX_DEPTH} levels)")
        return expr

    def _nest(self) -> None:
        self.nesting += 1
        if self.nesting > MAX_NESTING:
            raise InvalidQuery(
                FILTER,
                f"Expression nested too deeply (more than {MAX_NESTING} levels)",
                token=self.current.text or None,
            )

    def _or_expr(self) -> Expr:
        left = self._and_expr()
        while self._at_keyword("or"):
            self._advance()
            left = Logical("or", left, self._and_expr())
        return left

    def _and_expr(self) -> Expr:
        left = self._unary()
        while self._at_keyword("and"):
            self._advance()
            left = Logical("and", left, self._unary())
        return left

    def _unary(self) -> Expr:
        if self._at_keyword("not"):
            self._advance()
            self._nest()
            operand = self._unary()
            self.nesting -= 1
            return Not(operand)
        return self._comparison()

    def _comparison(self) -> Expr:
        left = self._operand()
        if self._at_keyword(*COMPARISON_OPS):
            op = self._advance().text.lower()
            return Compare(op, left, self._operand())
        return left

    def _operand(self) -> Expr:
        tok = self.current
        if tok.kind == "lparen":
            self._advance()
            self._nest()
            expr = self._or_expr()
            self._expect("rparen", "')'")
            self.nesting -= 1
            return expr
        if tok.kind == "string":
            self._advance()
            return Literal(tok.value, "str")
        if tok.kind == "number":
            self._advance()
            return Literal(tok.value, "number" if isinstance(tok.value, float) else "int")
        if tok.kind == "date":
            self._advance()
            return Literal(tok.value, "date")
        if tok.kind == "ident":
            word = tok.text.lower()
            if word in ("true", "false"):
                self._advance()
                return Literal(word == "true", "bool")
            if word == "null":
                self._advance()
                return Literal(None, "null")
            if word in _KEYWORDS:
                raise self._error("Expected an operand")
            self._advance()
            if self.current.kind == "lparen":
                return Call(word, self._args())
            return FieldRef(tok.text)
        raise self._error("Expected an operand")

    def _args(self) -> tuple:
        self._expect("lparen", "'('")
        self._nest()
        args: List[Expr] = []
        if self.current.kind != "rparen":
            args.append(self._or_expr())
            while self.current.kind == "comma":
                self._advance()
                args.append(self._or_expr())
        self._expect("rparen", "')'")
        self.nesting -= 1
        return tuple(args)
