"""
Cirno Errors

Exceptions raised by the evaluator. None of them is recoverable inside the
interpreter: they stop evaluation of the offending subtree and propagate to
the caller.
"""

from typing import Any


class CirnoError(Exception):
    """Base class for all Cirno errors."""


class NonBooleanConditionError(CirnoError, TypeError):
    """A condition evaluated to something other than True or False."""

    def __init__(self, expr: Any):
        self.expr = expr
        super().__init__(f"Condition must evaluate to true or false, got {expr!r}")


class MalformedShowTargetError(CirnoError, AssertionError):
    """show() reached a Print, Seq or If node, which evaluation should have reduced."""

    def __init__(self, expr: Any):
        self.expr = expr
        super().__init__(f"Cannot show unevaluated expression {type(expr).__name__}")


class UnknownVariantError(CirnoError, TypeError):
    """An object that is not an expression variant reached the matcher."""

    def __init__(self, obj: Any):
        self.obj = obj
        super().__init__(f"Not an expression: {obj!r}")


class EvaluationDepthError(CirnoError, RuntimeError):
    """Expression nesting exceeded the configured evaluation depth."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Maximum evaluation depth exceeded: {depth} > {max_depth}")
