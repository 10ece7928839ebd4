"""
Value-set resolution.

Turns the value expression of an apply/select node into the ordered
value set that drives iteration:

    "params.products"           -> [products]
    "3"                         -> [range(0, 3)]
    "params.a params.b"         -> [a, b]        (multi-set mode only)
    "" / None                   -> []            (no new iteration)

Dimensions may differ in length; consumers iterate up to the longest
one (see value_set_length).
"""
from __future__ import annotations

import math
import sys
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, List

from ysttxt.config import EngineConfig
from ysttxt.errors import ExpressionError, ValueSetEvaluationError
from ysttxt.expressions import ExpressionEvaluator, context_names, error_message
from ysttxt.log import get_logger
from ysttxt.model import UNDEFINED, Context

ValueSet = List[Sequence[Any]]

_log = get_logger("resolver")


def fill_array(n: float) -> range:
    """Index sequence driving a counted repetition: 0 .. ceil(n) - 1."""
    return range(max(0, math.ceil(n)))


def value_set_length(value_set: Sequence[Sequence[Any]]) -> int:
    return max((len(values) for values in value_set), default=0)


class ValueSetResolver:
    def __init__(self, evaluator: ExpressionEvaluator, config: EngineConfig):
        self._evaluator = evaluator
        self._config = config

    def split(self, values_text: str) -> List[str]:
        if self._config.allow_multi_set:
            return values_text.split()
        return [values_text]

    def resolve(self, context: Context, values_text: str | None) -> ValueSet:
        """
        Evaluate *values_text* in *context* and return the value set.

        Raises:
            ValueSetEvaluationError: an expression failed, was undefined
                or did not produce a sequence or a number
        """
        if not values_text:
            return []

        bindings = context_names(context, self._config.allow_multi_set)
        value_set: ValueSet = []
        for part in self.split(values_text):
            try:
                value = self._evaluator.evaluate(part, bindings)
            except ExpressionError as exc:
                raise ValueSetEvaluationError(
                    f"Error evaluating ystSet attribute ('{part}'): {error_message(exc)}"
                ) from exc
            if value is UNDEFINED:
                raise ValueSetEvaluationError(f"Undefined expression: {part} in set attribute")
            value_set.append(self._as_dimension(part, value))

        if self._config.debug:
            _log.debug(
                "resolved %r into %d dimension(s), length %d",
                values_text, len(value_set), value_set_length(value_set),
            )
        return value_set

    @staticmethod
    def _as_dimension(part: str, value: Any) -> Sequence[Any]:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if value > sys.maxsize or not math.isfinite(value):
                raise ValueSetEvaluationError(
                    f"Set attribute ('{part}') is not a usable count: {value!r}"
                )
            return fill_array(value)
        if isinstance(value, Sequence):
            return value
        if isinstance(value, Iterable) and not isinstance(value, Mapping):
            return list(value)
        raise ValueSetEvaluationError(
            f"Set attribute ('{part}') is not a sequence: {type(value).__name__}"
        )
