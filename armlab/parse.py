"""Recursive-descent parser for ntlang expressions.

Grammar::

    program    ::= expression EOT
    expression ::= operand (operator operand)*
    operand    ::= intlit
                 | '-' operand
    operator   ::= '+' | '-'
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from armlab.scan import TokenKind, TokenStream, scan

_UINT32_MASK = 0xFFFFFFFF


class Operator(enum.Enum):
    """Operators that may appear in a parse tree."""

    PLUS = "PLUS"
    MINUS = "MINUS"
    MULT = "MULT"
    DIV = "DIV"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntVal:
    """An integer literal."""

    value: int


@dataclass(frozen=True)
class UnaryOp:
    """An operator applied to one operand."""

    operator: Operator
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    """An operator applied to a left and a right operand."""

    operator: Operator
    left: "Node"
    right: "Node"


Node = Union[IntVal, UnaryOp, BinaryOp]


class ParseError(ValueError):
    """Raised when the token stream does not match the grammar."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"parse_error: {reason}")


_BINARY_OPERATORS = {
    TokenKind.PLUS: Operator.PLUS,
    TokenKind.MINUS: Operator.MINUS,
}


def _literal_value(text: str) -> int:
    return int(text) & _UINT32_MASK


def _parse_operand(stream: TokenStream) -> Node:
    if stream.accept(TokenKind.INTLIT):
        return IntVal(_literal_value(stream.get(-1).value))
    if stream.accept(TokenKind.MINUS):
        return UnaryOp(Operator.MINUS, _parse_operand(stream))
    raise ParseError("Bad operand")


def _parse_expression(stream: TokenStream) -> Node:
    node = _parse_operand(stream)
    while (operator := _BINARY_OPERATORS.get(stream.get(0).kind)) is not None:
        stream.accept(TokenKind.ANY)
        node = BinaryOp(operator, node, _parse_operand(stream))
    return node


def parse_program(stream: TokenStream) -> Node:
    """Parse a whole program: one expression followed by end of text."""
    node = _parse_expression(stream)
    if not stream.accept(TokenKind.EOT):
        raise ParseError("Expecting EOT")
    return node


def parse(text: str) -> Node:
    """Scan and parse an ntlang expression."""
    return parse_program(TokenStream(scan(text)))


def _as_signed(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _tree_lines(node: Node, level: int):
    indent = "." * (level * 2)
    if isinstance(node, IntVal):
        yield f"{indent}EXPR INTVAL {_as_signed(node.value)}"
    elif isinstance(node, UnaryOp):
        yield f"{indent}EXPR OPER1 {node.operator}"
        yield from _tree_lines(node.operand, level + 1)
    elif isinstance(node, BinaryOp):
        yield f"{indent}EXPR OPER2 {node.operator}"
        yield from _tree_lines(node.left, level + 1)
        yield from _tree_lines(node.right, level + 1)
    else:
        raise TypeError(f"not a parse tree node: {node!r}")


def format_tree(node: Node) -> str:
    """Render a parse tree, one node per line, indented by depth."""
    return "\n".join(_tree_lines(node, 0))