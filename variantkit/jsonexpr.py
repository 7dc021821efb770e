"""Boolean evaluation of JSON audience expressions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from variantkit.evaluator import Evaluator, Operator
from variantkit.operators import (
    AndCombinator,
    BinaryOperator,
    BooleanCombinator,
    EqualsOperator,
    GreaterThanOperator,
    GreaterThanOrEqualOperator,
    InOperator,
    LessThanOperator,
    LessThanOrEqualOperator,
    MatchOperator,
    NotOperator,
    NullOperator,
    OrCombinator,
    UnaryOperator,
    ValueOperator,
    VarOperator,
)


def default_operators() -> dict[str, Operator]:
    """Return a fresh table of the standard operators keyed by name."""
    return {
        "and": BooleanCombinator(AndCombinator()),
        "or": BooleanCombinator(OrCombinator()),
        "value": ValueOperator(),
        "var": VarOperator(),
        "null": UnaryOperator(NullOperator()),
        "not": UnaryOperator(NotOperator()),
        "in": BinaryOperator(InOperator()),
        "match": BinaryOperator(MatchOperator()),
        "eq": BinaryOperator(EqualsOperator()),
        "gt": BinaryOperator(GreaterThanOperator()),
        "gte": BinaryOperator(GreaterThanOrEqualOperator()),
        "lt": BinaryOperator(LessThanOperator()),
        "lte": BinaryOperator(LessThanOrEqualOperator()),
    }


def evaluate_boolean_expr(expr: Any, vars: Mapping[str, Any] | None) -> bool:
    """Evaluate ``expr`` against ``vars`` and return the truth of the result."""
    evaluator = Evaluator(default_operators(), vars)
    return evaluator.boolean_convert(evaluator.evaluate(expr))