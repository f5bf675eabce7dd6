"""
Cirno: a minimal tree-walking interpreter.

This package implements a tiny expression language with sequencing,
conditionals, boolean literals, a unit value, string literals and a print
effect. Programs are expression trees built directly in Python.
"""

from .core import (
    Expression, Value, Print, Seq, Unit, TrueLit, FalseLit, If, String,
    match_expr, is_value, children, iter_nodes, pretty_print_expr,
    print_expr, seq, unit, true, false, if_expr, string,
)
from .errors import (
    CirnoError, NonBooleanConditionError, MalformedShowTargetError,
    UnknownVariantError, EvaluationDepthError,
)
from .interpreter import Interpreter, execute, show, truth
from .verify import verify_expr

__version__ = "0.1.0"
__all__ = [
    "Expression", "Value", "Print", "Seq", "Unit", "TrueLit", "FalseLit", "If", "String",
    "match_expr", "is_value", "children", "iter_nodes", "pretty_print_expr",
    "print_expr", "seq", "unit", "true", "false", "if_expr", "string",
    "CirnoError", "NonBooleanConditionError", "MalformedShowTargetError",
    "UnknownVariantError", "EvaluationDepthError",
    "Interpreter", "execute", "show", "truth", "verify_expr",
]
