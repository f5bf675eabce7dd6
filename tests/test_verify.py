#!/usr/bin/env python3
"""
Tests for the Cirno verification system.

These tests make sure the verifier rejects malformed trees and passes
well-formed ones.
"""

import unittest
from cirno import Print, Seq, If, String, print_expr, seq, unit, true, false, if_expr, string
from cirno.config import CirnoConfig, VerifierConfig, get_config, set_config
from cirno.verify import check_shape, check_conditions, check_depth, check_node_count, verify_expr


def _deep_seq(depth):
    tree = unit()
    for _ in range(depth - 1):
        tree = seq(unit(), tree)
    return tree


class TestVerification(unittest.TestCase):
    """Test cases for individual checks and verify_expr."""

    def test_well_formed_programs_pass(self):
        programs = [
            unit(),
            string("x"),
            seq(print_expr(string("a")), print_expr(string("b"))),
            if_expr(true(), string("x"), print_expr(string("never"))),
            print_expr(if_expr(seq(unit(), false()), true(), false())),
        ]
        for program in programs:
            with self.subTest(program=program):
                is_valid, errors = verify_expr(program)
                self.assertTrue(is_valid, f"Program should verify: {errors}")

    def test_check_shape_catches_bad_children(self):
        """Test that non-expression children are reported with their position."""
        is_valid, errors = check_shape(Seq(unit(), "oops"))
        self.assertFalse(is_valid)
        self.assertEqual(errors, ["Seq child 1 is not an expression: str"])

        is_valid, errors = check_shape(Print(None))
        self.assertFalse(is_valid)

    def test_check_shape_catches_bad_string_payload(self):
        is_valid, errors = check_shape(String(42))
        self.assertFalse(is_valid)
        self.assertIn("String payload must be str, got int", errors)

    def test_verify_rejects_non_expression_root(self):
        is_valid, errors = verify_expr("not a tree")
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 1)

    def test_check_conditions(self):
        """Test that literal non-boolean conditions are flagged."""
        for cond in [unit(), string("x")]:
            with self.subTest(cond=cond):
                is_valid, errors = check_conditions(if_expr(cond, unit(), unit()))
                self.assertFalse(is_valid)
                self.assertEqual(len(errors), 1)

        # A computed condition is left to run time
        is_valid, _ = check_conditions(If(seq(unit(), true()), unit(), unit()))
        self.assertTrue(is_valid)

    def test_check_depth(self):
        self.assertTrue(check_depth(_deep_seq(5), max_depth=5)[0])
        is_valid, errors = check_depth(_deep_seq(6), max_depth=5)
        self.assertFalse(is_valid)
        self.assertIn("depth 6", errors[0])

    def test_check_node_count(self):
        # _deep_seq(n) has 2n - 1 nodes
        self.assertTrue(check_node_count(_deep_seq(3), max_nodes=5)[0])
        self.assertFalse(check_node_count(_deep_seq(4), max_nodes=5)[0])

    def test_limits_default_to_config(self):
        """Test that verify_expr reads its limits from the global config."""
        previous = get_config()
        try:
            set_config(CirnoConfig(verifier=VerifierConfig(max_depth=3, max_nodes=100)))
            self.assertFalse(verify_expr(_deep_seq(4))[0])
            self.assertTrue(verify_expr(_deep_seq(4), max_depth=4)[0])
        finally:
            set_config(previous)

    def test_combined_errors(self):
        """Test that independent failures are all reported."""
        tree = if_expr(unit(), _deep_seq(10), unit())
        is_valid, errors = verify_expr(tree, max_depth=5, max_nodes=5)
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 3)


if __name__ == '__main__':
    unittest.main()
