"""The operators of the JSON expression language."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from variantkit.evaluator import ConversionError, Evaluator, Operator


class _Combiner(ABC):
    @abstractmethod
    def combine(self, evaluator: Evaluator, args: Sequence[Any]) -> bool:
        """Combine the truth of the evaluated arguments."""


class _BinaryFunction(ABC):
    @abstractmethod
    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> Any:
        """Apply the operator to two evaluated operands."""


class _UnaryFunction(ABC):
    @abstractmethod
    def unary(self, evaluator: Evaluator, arg: Any) -> Any:
        """Apply the operator to one evaluated operand."""


class AndCombinator(_Combiner):
    """True when every argument evaluates to true; stops at the first false one."""

    def combine(self, evaluator: Evaluator, args: Sequence[Any]) -> bool:
        return all(evaluator.boolean_convert(evaluator.evaluate(item)) for item in args)


class OrCombinator(_Combiner):
    """True when any argument evaluates to true, or when there are no arguments."""

    def combine(self, evaluator: Evaluator, args: Sequence[Any]) -> bool:
        if any(evaluator.boolean_convert(evaluator.evaluate(item)) for item in args):
            return True
        return len(args) == 0


class BooleanCombinator(Operator):
    """Applies a combiner to a list of argument expressions."""

    def __init__(self, combiner: _Combiner) -> None:
        self.combiner = combiner

    def evaluate(self, evaluator: Evaluator, args: Any) -> bool | None:
        if isinstance(args, (list, tuple)):
            return self.combiner.combine(evaluator, args)
        return None


class BinaryOperator(Operator):
    """Evaluates two operand expressions and applies a binary function to them."""

    def __init__(self, op: _BinaryFunction) -> None:
        self.op = op

    def evaluate(self, evaluator: Evaluator, args: Any) -> Any:
        if not isinstance(args, (list, tuple)) or not args:
            return None
        lhs = evaluator.evaluate(args[0])
        if lhs is None or len(args) < 2:
            return None
        rhs = evaluator.evaluate(args[1])
        if rhs is None:
            return None
        return self.op.binary(evaluator, lhs, rhs)


def _compared(
    evaluator: Evaluator, lhs: Any, rhs: Any, test: Callable[[int], bool]
) -> bool | None:
    result = evaluator.compare(lhs, rhs)
    return None if result is None else test(result)


class EqualsOperator(_BinaryFunction):
    """Equality under the evaluator's comparison."""

    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> bool | None:
        return _compared(evaluator, lhs, rhs, lambda result: result == 0)


class GreaterThanOperator(_BinaryFunction):
    """Strictly greater under the evaluator's comparison."""

    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> bool | None:
        return _compared(evaluator, lhs, rhs, lambda result: result > 0)


class GreaterThanOrEqualOperator(_BinaryFunction):
    """Greater or equal under the evaluator's comparison."""

    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> bool | None:
        return _compared(evaluator, lhs, rhs, lambda result: result >= 0)


class LessThanOperator(_BinaryFunction):
    """Strictly less under the evaluator's comparison."""

    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> bool | None:
        return _compared(evaluator, lhs, rhs, lambda result: result < 0)


class LessThanOrEqualOperator(_BinaryFunction):
    """Less or equal under the evaluator's comparison."""

    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> bool | None:
        return _compared(evaluator, lhs, rhs, lambda result: result <= 0)


class InOperator(_BinaryFunction):
    """Membership of a needle in a list, substring of a string, or key of a mapping."""

    def binary(self, evaluator: Evaluator, haystack: Any, needle: Any) -> bool | None:
        if isinstance(haystack, (list, tuple)):
            return any(evaluator.compare(item, needle) == 0 for item in haystack)
        if isinstance(haystack, str):
            try:
                return evaluator.string_convert(needle) in haystack
            except ConversionError:
                return False
        if isinstance(haystack, Mapping):
            try:
                return evaluator.string_convert(needle) in haystack
            except ConversionError:
                return False
        return None


class MatchOperator(_BinaryFunction):
    """Whether the text contains a match of the regular expression."""

    def binary(self, evaluator: Evaluator, lhs: Any, rhs: Any) -> bool | None:
        try:
            text = evaluator.string_convert(lhs)
            pattern = re.compile(evaluator.string_convert(rhs))
        except (ConversionError, re.error):
            return None
        return pattern.search(text) is not None


class UnaryOperator(Operator):
    """Evaluates its argument expression and applies a unary function to it."""

    def __init__(self, op: _UnaryFunction) -> None:
        self.op = op

    def evaluate(self, evaluator: Evaluator, args: Any) -> Any:
        return self.op.unary(evaluator, evaluator.evaluate(args))


class NotOperator(_UnaryFunction):
    """Logical negation; None stays None."""

    def unary(self, evaluator: Evaluator, arg: Any) -> bool | None:
        if arg is None:
            return None
        return not evaluator.boolean_convert(arg)


class NullOperator(_UnaryFunction):
    """Whether the argument is None."""

    def unary(self, evaluator: Evaluator, arg: Any) -> bool:
        return arg is None


class ValueOperator(Operator):
    """A literal value."""

    def evaluate(self, evaluator: Evaluator, value: Any) -> Any:
        return value


class VarOperator(Operator):
    """A variable looked up by path, given as a string or as {"path": ...}."""

    def evaluate(self, evaluator: Evaluator, path: Any) -> Any:
        if isinstance(path, Mapping):
            path = path.get("path")
        if isinstance(path, str):
            return evaluator.extract_var(path)
        return None