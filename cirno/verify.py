"""
Cirno Verification System

This module implements static checks for expression trees. Verification is
advisory: the interpreter never requires it, but a caller building trees
programmatically can use it to reject malformed input before evaluation.
"""

from typing import List, Optional, Tuple

from .config import get_config
from .core import EXPRESSION_TYPES, If, String, Unit, children, iter_nodes


def check_shape(expr) -> Tuple[bool, List[str]]:
    """
    Check that every node is an expression variant with a well-typed payload.

    Args:
        expr: The tree to check

    Returns:
        Tuple of (is_valid, error_messages)
    """
    errors = []

    for parent, child_idx, node in iter_nodes(expr):
        if not isinstance(node, EXPRESSION_TYPES):
            if parent is None:
                errors.append(f"Root is not an expression: {type(node).__name__}")
            else:
                errors.append(f"{type(parent).__name__} child {child_idx} is not an expression: "
                              f"{type(node).__name__}")
            continue

        if isinstance(node, String) and not isinstance(node.text, str):
            errors.append(f"String payload must be str, got {type(node.text).__name__}")

    return len(errors) == 0, errors


def check_conditions(expr) -> Tuple[bool, List[str]]:
    """
    Flag If nodes whose condition is a literal that can never be a boolean.

    Only literal Unit and String conditions are caught here; a condition
    that evaluates to a non-boolean still fails at run time.
    """
    errors = []

    for _, _, node in iter_nodes(expr):
        if isinstance(node, If) and isinstance(node.condition, (Unit, String)):
            errors.append(f"If condition is a literal {type(node.condition).__name__}, not a boolean")

    return len(errors) == 0, errors


def check_depth(expr, max_depth: int = 100) -> Tuple[bool, List[str]]:
    """
    Check that the tree depth doesn't exceed the maximum allowed.

    A single leaf has depth 1.
    """
    errors = []

    actual_depth = 0
    stack = [(expr, 1)]
    while stack:
        node, depth = stack.pop()
        actual_depth = max(actual_depth, depth)
        if isinstance(node, EXPRESSION_TYPES):
            stack.extend((child, depth + 1) for child in children(node))

    if actual_depth > max_depth:
        errors.append(f"Expression depth {actual_depth} exceeds maximum allowed depth {max_depth}")

    return len(errors) == 0, errors


def check_node_count(expr, max_nodes: int = 10000) -> Tuple[bool, List[str]]:
    """Check that the tree doesn't have too many nodes."""
    errors = []

    node_count = sum(1 for _ in iter_nodes(expr))

    if node_count > max_nodes:
        errors.append(f"Expression has {node_count} nodes, exceeds maximum allowed {max_nodes}")

    return len(errors) == 0, errors


def verify_expr(expr, max_depth: Optional[int] = None,
                max_nodes: Optional[int] = None) -> Tuple[bool, List[str]]:
    """
    Run all verification checks and combine their results.

    Args:
        expr: The tree to verify
        max_depth: Maximum allowed depth (defaults to VerifierConfig.max_depth; None skips the check)
        max_nodes: Maximum allowed node count (defaults to VerifierConfig.max_nodes; None skips the check)

    Returns:
        Tuple of (is_valid, error_messages)
    """
    verifier_config = get_config().verifier
    if max_depth is None:
        max_depth = verifier_config.max_depth
    if max_nodes is None:
        max_nodes = verifier_config.max_nodes

    if not isinstance(expr, EXPRESSION_TYPES):
        return False, [f"Root is not an expression: {type(expr).__name__}"]

    all_errors = []

    # Shape first: the remaining checks assume well-formed nodes
    is_valid, errors = check_shape(expr)
    if not is_valid:
        return False, errors

    checks = [check_conditions(expr)]
    if max_depth is not None:
        checks.append(check_depth(expr, max_depth))
    if max_nodes is not None:
        checks.append(check_node_count(expr, max_nodes))

    for is_valid, errors in checks:
        if not is_valid:
            all_errors.extend(errors)

    return len(all_errors) == 0, all_errors
