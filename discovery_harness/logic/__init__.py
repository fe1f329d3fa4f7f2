# ABOUTME: Exposes the rule evaluator used for prerequisites and scope filters.
# ABOUTME: Provides a stable import location for logic evaluation helpers.

from discovery_harness.logic.evaluator import LogicEvaluator, UnknownOperatorError

__all__ = ["LogicEvaluator", "UnknownOperatorError"]
