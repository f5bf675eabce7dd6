"""
Cirno Expression Model

This module defines the closed set of expression variants understood by the
Cirno interpreter, together with helpers for building, matching, traversing
and rendering expression trees.

Every node is an immutable dataclass. A tree is built directly by the caller;
there is no surface syntax.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar, Union, assert_never

from .errors import UnknownVariantError

T = TypeVar("T")


@dataclass(frozen=True)
class Print:
    """Evaluate the payload and emit its textual rendering."""
    expr: "Expression"


@dataclass(frozen=True)
class Seq:
    """Evaluate ``left`` for its effects, then evaluate and return ``right``."""
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class Unit:
    """The trivial value."""


@dataclass(frozen=True)
class TrueLit:
    """Boolean literal true."""


@dataclass(frozen=True)
class FalseLit:
    """Boolean literal false."""


@dataclass(frozen=True)
class If:
    """Conditional: only the chosen branch is evaluated."""
    condition: "Expression"
    then_branch: "Expression"
    else_branch: "Expression"


@dataclass(frozen=True)
class String:
    """String literal / string value."""
    text: str


Expression = Union[Print, Seq, Unit, TrueLit, FalseLit, If, String]
Value = Union[Unit, TrueLit, FalseLit, String]

EXPRESSION_TYPES = (Print, Seq, Unit, TrueLit, FalseLit, If, String)
VALUE_TYPES = (Unit, TrueLit, FalseLit, String)


def match_expr(expr: Expression, *,
               on_print: Callable[[Expression], T],
               on_seq: Callable[[Expression, Expression], T],
               on_unit: Callable[[], T],
               on_true: Callable[[], T],
               on_false: Callable[[], T],
               on_if: Callable[[Expression, Expression, Expression], T],
               on_string: Callable[[str], T]) -> T:
    """
    Dispatch to exactly one handler based on the variant of ``expr``.

    All seven handlers are required, so a consumer cannot match partially.
    The variant's payload is passed positionally to its handler.

    Args:
        expr: The expression to match on
        on_print: Called with the printed sub-expression
        on_seq: Called with the left and right sub-expressions
        on_unit: Called with no arguments
        on_true: Called with no arguments
        on_false: Called with no arguments
        on_if: Called with condition, then-branch and else-branch
        on_string: Called with the text payload

    Returns:
        Whatever the selected handler returns

    Raises:
        UnknownVariantError: If ``expr`` is not an expression variant
    """
    if isinstance(expr, Print):
        return on_print(expr.expr)
    elif isinstance(expr, Seq):
        return on_seq(expr.left, expr.right)
    elif isinstance(expr, Unit):
        return on_unit()
    elif isinstance(expr, TrueLit):
        return on_true()
    elif isinstance(expr, FalseLit):
        return on_false()
    elif isinstance(expr, If):
        return on_if(expr.condition, expr.then_branch, expr.else_branch)
    elif isinstance(expr, String):
        return on_string(expr.text)
    elif not isinstance(expr, EXPRESSION_TYPES):
        raise UnknownVariantError(expr)
    else:
        assert_never(expr)


def is_value(expr: Expression) -> bool:
    """Return True if ``expr`` is already a value (Unit, True, False or String)."""
    return isinstance(expr, VALUE_TYPES)


def children(expr: Expression) -> Tuple[Expression, ...]:
    """Return the direct sub-expressions of ``expr`` in evaluation order."""
    return match_expr(
        expr,
        on_print=lambda e: (e,),
        on_seq=lambda l, r: (l, r),
        on_unit=lambda: (),
        on_true=lambda: (),
        on_false=lambda: (),
        on_if=lambda c, t, e: (c, t, e),
        on_string=lambda s: (),
    )


def iter_nodes(expr: Expression) -> Iterator[Tuple[Optional[Expression], Optional[int], Expression]]:
    """
    Generator that yields (parent, child_idx, node) for every node in the tree.

    The traversal is depth-first pre-order, which is also the order in which
    the evaluator first reaches each node when every branch is taken.

    Example:
        >>> tree = seq(print_expr(string("a")), unit())
        >>> [type(n).__name__ for _, _, n in iter_nodes(tree)]
        ['Seq', 'Print', 'String', 'Unit']
    """
    stack: List[Tuple[Optional[Expression], Optional[int], Any]] = [(None, None, expr)]

    while stack:
        parent, child_idx, node = stack.pop()
        yield (parent, child_idx, node)

        if isinstance(node, EXPRESSION_TYPES):
            subs = children(node)
            # Reversed so the leftmost child is visited first
            for idx in range(len(subs) - 1, -1, -1):
                stack.append((node, idx, subs[idx]))


# Helper functions for creating expression nodes
def print_expr(expr: Expression) -> Print:
    """Create a print node."""
    return Print(expr)

def seq(left: Expression, right: Expression) -> Seq:
    """Create a sequencing node."""
    return Seq(left, right)

def unit() -> Unit:
    """Create the unit value."""
    return Unit()

def true() -> TrueLit:
    """Create the boolean literal true."""
    return TrueLit()

def false() -> FalseLit:
    """Create the boolean literal false."""
    return FalseLit()

def if_expr(condition: Expression, then_branch: Expression, else_branch: Expression) -> If:
    """Create a conditional node."""
    return If(condition, then_branch, else_branch)

def string(text: str) -> String:
    """Create a string literal."""
    return String(text)


def pretty_print_expr(expr: Expression) -> str:
    """
    Render an expression tree in a Lisp-like form for logs and debugging.

    Args:
        expr: The expression to render

    Returns:
        A string such as ``(seq (print "a") tt)``; string payloads are
        JSON-quoted so embedded quotes and newlines stay unambiguous
    """
    parts: List[str] = []
    # Holds nodes still to render and literal separators, popped from the end
    stack: List[Any] = [expr]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        parts.append(match_expr(
            item,
            on_print=lambda e: "(print",
            on_seq=lambda l, r: "(seq",
            on_unit=lambda: "tt",
            on_true=lambda: "true",
            on_false=lambda: "false",
            on_if=lambda c, t, e: "(if",
            on_string=lambda s: json.dumps(s, ensure_ascii=False),
        ))

        subs = children(item)
        if subs:
            stack.append(")")
            for sub in reversed(subs):
                stack.append(sub)
                stack.append(" ")

    return "".join(parts)
