"""
Cirno Interpreter

This module implements the evaluator for Cirno expressions.
Evaluation reduces any expression to a value (Unit, True, False or String)
and performs print effects in program order: left to right, depth first.

The evaluator walks the tree with an explicit work stack rather than Python
recursion, so program length and nesting are bounded only by memory.
"""

import logging
import sys
import time
from typing import TYPE_CHECKING, List, Optional, TextIO, Tuple

from .config import InterpreterConfig, get_config
from .core import (
    Expression, Value, FalseLit, TrueLit, Unit, String,
    match_expr, pretty_print_expr,
)
from .errors import EvaluationDepthError, MalformedShowTargetError, NonBooleanConditionError
from .metrics import EvaluationMetrics, count_nodes

if TYPE_CHECKING:
    from .metrics import MetricsLogger

logger = logging.getLogger(__name__)

# Work stack instructions
_EVAL = "eval"          # evaluate payload, push its value
_PRINT = "print"        # pop a value, emit it, push Unit
_DISCARD = "discard"    # pop a value
_BRANCH = "branch"      # pop a condition, schedule the chosen branch of the If in payload

Frame = Tuple[str, Optional[Expression], int]


def truth(expr: Expression) -> bool:
    """
    Extract a Python boolean from a boolean literal.

    Raises:
        NonBooleanConditionError: If ``expr`` is not True or False
    """
    if isinstance(expr, TrueLit):
        return True
    if isinstance(expr, FalseLit):
        return False
    logger.debug("truth() on non-boolean %r", expr)
    raise NonBooleanConditionError(expr)


def _not_showable(expr: Expression):
    logger.debug("show() on unevaluated %s", type(expr).__name__)
    raise MalformedShowTargetError(expr)


def show(expr: Expression) -> str:
    """
    Render a value as text.

    Unit renders as ``tt``, booleans as ``true``/``false`` and strings as
    their own text.

    Raises:
        MalformedShowTargetError: If ``expr`` is a Print, Seq or If node
    """
    return match_expr(
        expr,
        on_print=lambda e: _not_showable(expr),
        on_seq=lambda l, r: _not_showable(expr),
        on_unit=lambda: "tt",
        on_true=lambda: "true",
        on_false=lambda: "false",
        on_if=lambda c, t, e: _not_showable(expr),
        on_string=lambda s: s,
    )


class Interpreter:
    """
    Tree-walking evaluator for Cirno expressions.

    Features:
    - Strict left-to-right, depth-first evaluation
    - Short-circuit conditionals (only the chosen branch runs)
    - Configurable output stream (defaults to sys.stdout)
    - Per-run counters, optional depth guard and metrics logging
    """

    def __init__(self, output: Optional[TextIO] = None, config: Optional[InterpreterConfig] = None,
                 metrics_logger: Optional["MetricsLogger"] = None):
        self.output = output
        self.config = config if config is not None else get_config().interpreter
        self.metrics_logger = metrics_logger
        self._reset_counters()

    def _reset_counters(self):
        self.step_count = 0
        self.print_count = 0
        self.chars_emitted = 0
        self.max_depth_reached = 0
        self._last_metrics: Optional[EvaluationMetrics] = None

    def execute(self, expr: Expression) -> Value:
        """
        Evaluate an expression to a value.

        Args:
            expr: The expression tree to evaluate

        Returns:
            A Unit, TrueLit, FalseLit or String node

        Raises:
            NonBooleanConditionError: If an If condition is not a boolean
            EvaluationDepthError: If ``config.max_depth`` is set and nesting exceeds it
        """
        self._reset_counters()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Evaluating %s", pretty_print_expr(expr))
        start = time.perf_counter()

        result = self._run(expr)

        self._last_metrics = EvaluationMetrics(
            steps=self.step_count,
            prints=self.print_count,
            chars_emitted=self.chars_emitted,
            max_depth=self.max_depth_reached,
            node_count=count_nodes(expr),
            elapsed_seconds=time.perf_counter() - start,
        )
        if self.metrics_logger is not None:
            self.metrics_logger.log_run(self._last_metrics)
        logger.debug("Evaluated to %s in %d steps", type(result).__name__, self.step_count)
        return result

    def _run(self, expr: Expression) -> Value:
        stack: List[Frame] = [(_EVAL, expr, 0)]
        values: List[Value] = []

        while stack:
            instruction, node, depth = stack.pop()

            if instruction == _EVAL:
                self._step(node, depth, stack, values)
            elif instruction == _PRINT:
                self.emit(show(values.pop()))
                values.append(Unit())
            elif instruction == _DISCARD:
                values.pop()
            elif instruction == _BRANCH:
                branch = node.then_branch if truth(values.pop()) else node.else_branch
                stack.append((_EVAL, branch, depth + 1))

        return values.pop()

    def _step(self, expr: Expression, depth: int, stack: List[Frame], values: List[Value]) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            logger.debug("Depth guard tripped at %d", depth)
            raise EvaluationDepthError(depth, max_depth)

        self.step_count += 1
        if depth > self.max_depth_reached:
            self.max_depth_reached = depth

        # Frames are pushed in reverse: the last one pushed runs first
        match_expr(
            expr,
            on_print=lambda e: stack.extend([(_PRINT, None, depth), (_EVAL, e, depth + 1)]),
            on_seq=lambda l, r: stack.extend([(_EVAL, r, depth + 1), (_DISCARD, None, depth),
                                              (_EVAL, l, depth + 1)]),
            on_unit=lambda: values.append(Unit()),
            on_true=lambda: values.append(TrueLit()),
            on_false=lambda: values.append(FalseLit()),
            on_if=lambda c, t, e: stack.extend([(_BRANCH, expr, depth), (_EVAL, c, depth + 1)]),
            on_string=lambda s: values.append(String(s)),
        )

    def emit(self, text: str) -> None:
        """Write ``text`` to the output stream without a trailing newline."""
        stream = self.output if self.output is not None else sys.stdout
        stream.write(text)
        if self.config.flush_on_print:
            stream.flush()
        self.print_count += 1
        self.chars_emitted += len(text)

    def truth(self, expr: Expression) -> bool:
        return truth(expr)

    def show(self, expr: Expression) -> str:
        return show(expr)

    def last_metrics(self) -> Optional[EvaluationMetrics]:
        """Return metrics for the last completed run, or None."""
        return self._last_metrics


def execute(expr: Expression, output: Optional[TextIO] = None) -> Value:
    """Evaluate ``expr`` with a fresh interpreter writing to ``output`` (default stdout)."""
    return Interpreter(output=output).execute(expr)
