"""
Constant expression evaluation for array sizes, bitfield widths and enum values.
"""

import logging
import re
from typing import Callable, Optional, Union

from tree_sitter import Node

logger = logging.getLogger(__name__)

Number = Union[int, float]
Value = Union[int, float, str]

_INTEGER_SUFFIX = r"(?:[uU](?:ll|LL|l|L|z|Z)?|(?:ll|LL|l|L|z|Z)[uU]?)?"
_HEX_PATTERN = re.compile(rf"^([+-]?)0[xX]([0-9a-fA-F]+){_INTEGER_SUFFIX}$")
_BINARY_PATTERN = re.compile(rf"^([+-]?)0[bB]([01]+){_INTEGER_SUFFIX}$")
_DECIMAL_PATTERN = re.compile(rf"^([+-]?\d+){_INTEGER_SUFFIX}$")
_FLOAT_PATTERN = re.compile(
    r"^([+-]?(?:\d+\.\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?\d+[eE][+-]?\d+)[fFlL]?$"
)

SYMBOL_KINDS = frozenset({"identifier", "qualified_identifier", "field_identifier"})


def parse_number(literal: str) -> Optional[Number]:
    """Parse a C++ number literal.

    Supports decimal, ``0x`` hexadecimal, ``0b`` binary and floating point
    literals with an optional sign, digit separators and type suffixes.

    Args:
        literal: Source text of the literal

    Returns:
        The numeric value, or None when the text is not a number literal
    """
    text = literal.strip().replace("'", "")

    match = _HEX_PATTERN.match(text)
    if match:
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value

    match = _BINARY_PATTERN.match(text)
    if match:
        value = int(match.group(2), 2)
        return -value if match.group(1) == "-" else value

    match = _FLOAT_PATTERN.match(text)
    if match:
        return float(match.group(1))

    match = _DECIMAL_PATTERN.match(text)
    if match:
        return int(match.group(1))

    return None


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _apply_operator(operator: str, left: Number, right: Number) -> Number:
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator in ("/", "%"):
        if right == 0:
            logger.error("Division by zero in constant expression")
            return 0
        if isinstance(left, int) and isinstance(right, int):
            quotient = abs(left) // abs(right)
            if (left < 0) != (right < 0):
                quotient = -quotient
            return quotient if operator == "/" else left - quotient * right
        return left / right if operator == "/" else left % right
    if operator == "<<":
        return int(left) << int(right)
    if operator == ">>":
        return int(left) >> int(right)
    if operator == "&":
        return int(left) & int(right)
    if operator == "|":
        return int(left) | int(right)
    if operator == "^":
        return int(left) ^ int(right)

    logger.error(f"Unsupported operator in constant expression: {operator}")
    return 0


def evaluate_expression(node: Node, get_text: Callable[[Node], str]) -> Value:
    """Evaluate a constant expression node.

    Identifiers are returned verbatim as symbolic values. Unsupported node
    kinds are logged and evaluate to 0.

    Args:
        node: Tree-sitter expression node
        get_text: Callback returning the source text of a node

    Returns:
        Integer or float result, or the symbolic text of the expression
    """
    kind = node.type

    if kind == "number_literal":
        value = parse_number(get_text(node))
        if value is None:
            logger.error(f"Invalid number literal: {get_text(node)}")
            return 0
        return value

    if kind == "parenthesized_expression":
        return evaluate_expression(node.named_children[0], get_text)

    if kind == "binary_expression":
        left = evaluate_expression(node.child(0), get_text)
        operator = get_text(node.child(1))
        right = evaluate_expression(node.child(2), get_text)

        # Symbolic operands are left for the constant resolution pass.
        if not (is_number(left) and is_number(right)):
            return get_text(node)
        return _apply_operator(operator, left, right)

    if kind in SYMBOL_KINDS:
        return get_text(node)

    logger.error(f"Missing expression parser for: {kind}")
    return 0
