"""Evaluation of ntlang parse trees and the ntlang command."""

from __future__ import annotations

import sys
from typing import Sequence

from armlab.parse import BinaryOp, IntVal, Node, Operator, UnaryOp, format_tree, parse_program
from armlab.scan import SCAN_INPUT_LEN, ScanError, TokenStream, format_tokens, scan

_UINT32_MASK = 0xFFFFFFFF
_FAILURE_STATUS = 255


class EvalError(ValueError):
    """Raised when a parse tree holds an operator that cannot be evaluated."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"eval_error: {reason}")


def evaluate(node: Node) -> int:
    """Evaluate a parse tree with unsigned 32-bit wrap-around arithmetic."""
    if isinstance(node, IntVal):
        return node.value & _UINT32_MASK
    if isinstance(node, UnaryOp):
        value = evaluate(node.operand)
        if node.operator is Operator.MINUS:
            return -value & _UINT32_MASK
        raise EvalError("Bad operator")
    if isinstance(node, BinaryOp):
        left = evaluate(node.left)
        right = evaluate(node.right)
        if node.operator is Operator.PLUS:
            return (left + right) & _UINT32_MASK
        if node.operator is Operator.MINUS:
            return (left - right) & _UINT32_MASK
        raise EvalError("Bad operator")
    raise TypeError(f"not a parse tree node: {node!r}")


def format_value(value: int) -> str:
    """Render a 32-bit value as a signed decimal integer."""
    value &= _UINT32_MASK
    if value & 0x80000000:
        value -= 1 << 32
    return str(value)


def run(text: str) -> int:
    """Scan, parse and evaluate an expression, returning its 32-bit value."""
    return evaluate(parse_program(TokenStream(scan(text))))


def main(argv: Sequence[str] | None = None) -> int:
    """Print the tokens, parse tree and value of one expression."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: project02 <expression>")
        print('  Example: project02 "1 + 2"')
        return _FAILURE_STATUS

    text = args[0][:SCAN_INPUT_LEN]
    try:
        tokens = scan(text)
        print(format_tokens(tokens))
        print()
        tree = parse_program(TokenStream(tokens))
        print(format_tree(tree))
        print()
        value = evaluate(tree)
    except (ScanError, ValueError) as error:
        print(error)
        return _FAILURE_STATUS

    print(format_value(value))
    return 0


if __name__ == "__main__":
    sys.exit(main())