"""Evaluation of JSON audience expressions against a set of variables."""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

_INDEX = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class ConversionError(ValueError):
    """Raised when a value cannot be converted to the requested type."""


class Operator(ABC):
    """An operator that an expression names by its key."""

    @abstractmethod
    def evaluate(self, evaluator: Evaluator, args: Any) -> Any:
        """Evaluate the operator's arguments and return the result."""


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_zero(value: Any) -> bool:
    if isinstance(value, bool):
        return not value
    if isinstance(value, int):
        return value == 0
    if isinstance(value, float):
        return value == 0 and math.copysign(1.0, value) > 0
    if isinstance(value, str):
        return value == ""
    return False


def _identical(lhs: Any, rhs: Any) -> bool:
    """Equality that also requires matching types, recursing into containers."""
    if _is_list(lhs) and _is_list(rhs):
        return len(lhs) == len(rhs) and all(map(_identical, lhs, rhs))
    if isinstance(lhs, Mapping) and isinstance(rhs, Mapping):
        return lhs.keys() == rhs.keys() and all(
            _identical(value, rhs[key]) for key, value in lhs.items()
        )
    return type(lhs) is type(rhs) and lhs == rhs


def _sign(lhs: Any, rhs: Any) -> int:
    if lhs == rhs:
        return 0
    return 1 if lhs > rhs else -1


def _parse_float(text: str) -> float:
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        raise ConversionError("can't convert number")
    try:
        value = float(text)
    except ValueError as exc:
        raise ConversionError("can't convert number") from exc
    if math.isinf(value) and "inf" not in text.lower():
        raise ConversionError("can't convert number")
    return value


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.16g}"


class Evaluator:
    """Evaluates expressions with a table of operators and a set of variables."""

    def __init__(
        self,
        operators: Mapping[str, Operator] | None = None,
        vars: Mapping[str, Any] | None = None,
    ) -> None:
        self.operators: Mapping[str, Operator] = operators if operators is not None else {}
        self.vars = vars

    def evaluate(self, expr: Any) -> Any:
        """Evaluate ``expr``: a list combines with "and", a mapping names its operator."""
        if _is_list(expr):
            combiner = self.operators.get("and")
            return combiner.evaluate(self, expr) if combiner is not None else None
        if isinstance(expr, Mapping) and expr:
            key, args = next(iter(expr.items()))
            operator = self.operators.get(key) if isinstance(key, str) else None
            if operator is not None:
                return operator.evaluate(self, args)
        return None

    def compare(self, lhs: Any, rhs: Any) -> int | None:
        """Return -1, 0 or 1 ordering ``lhs`` against ``rhs``, or None if incomparable."""
        if lhs is not None and rhs is not None and _is_zero(lhs) and _is_zero(rhs):
            return 0

        if _is_number(lhs):
            try:
                left = self.number_convert(lhs)
                right = self.number_convert(rhs)
            except ConversionError:
                pass
            else:
                return _sign(left, right)
        elif isinstance(lhs, str):
            try:
                right_text = self.string_convert(rhs)
            except ConversionError:
                pass
            else:
                return _sign(lhs, right_text)
        elif isinstance(lhs, bool):
            right_flag = self.boolean_convert(rhs)
            if lhs == right_flag:
                return 0
            return 1 if lhs else -1

        if (_is_list(lhs) and _is_list(rhs)) or (
            isinstance(lhs, Mapping) and isinstance(rhs, Mapping)
        ):
            if len(lhs) != len(rhs):
                return 1 if len(lhs) > len(rhs) else -1
            return 0 if _identical(lhs, rhs) else None

        if lhs is None and rhs is None:
            return 0
        return None

    def boolean_convert(self, x: Any) -> bool:
        """Return the truth of ``x`` under the expression language's rules."""
        if isinstance(x, bool):
            return x
        if isinstance(x, str):
            return x not in ("false", "0", "")
        if isinstance(x, (int, float)):
            return x != 0
        return x is not None

    def number_convert(self, x: Any) -> float:
        """Return ``x`` as a float; raise :class:`ConversionError` if it has no number."""
        if isinstance(x, bool):
            return 1.0 if x else 0.0
        if isinstance(x, str):
            return _parse_float(x)
        if isinstance(x, (int, float)):
            return float(x)
        raise ConversionError("can't convert number")

    def string_convert(self, x: Any) -> str:
        """Return ``x`` as text; raise :class:`ConversionError` for containers and None."""
        if isinstance(x, bool):
            return "true" if x else "false"
        if isinstance(x, str):
            return x
        if isinstance(x, int):
            return str(x)
        if isinstance(x, float):
            return _format_float(x)
        raise ConversionError("can't convert string")

    def extract_var(self, path: str) -> Any:
        """Return the variable at the slash-separated ``path``, or None if absent."""
        target: Any = self.vars
        for fragment in path.split("/"):
            if _is_list(target):
                if not _INDEX.fullmatch(fragment):
                    return None
                index = int(fragment)
                if not _INT32_MIN <= index <= _INT32_MAX or index < 0 or index >= len(target):
                    return None
                value = target[index]
            elif isinstance(target, Mapping):
                value = target.get(fragment)
            else:
                return None
            if value is None:
                return None
            target = value
        return target