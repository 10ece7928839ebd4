"""
Expression evaluation for ysttxt.

Every `$expr$` marker, value expression, condition and ystBool spec is
author-supplied text. It is evaluated by simpleeval against an explicit
binding map built from the current Context; nothing is looked up in
module or interpreter globals.

Bindings:
    e, values         current element and array of the first dimension
    e<k>, values<k>   every dimension k (multi-set mode only)
    i                 the context index
    params            the params mapping
    true, false, null, undefined
                      lowercase aliases, so `e == null` reads as in page
                      markup; undefined also equals null

ARCHITECTURAL RULE:
    Evaluation failures leave this module as ExpressionError (or
    UndefinedExpressionError), never as simpleeval exceptions.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from simpleeval import (
    DEFAULT_FUNCTIONS,
    DISALLOW_METHODS,
    DISALLOW_PREFIXES,
    AttributeDoesNotExist,
    EvalWithCompoundTypes,
    NameNotDefined,
)

from .errors import ExpressionError, UndefinedExpressionError
from .model import UNDEFINED, Context

BASE_NAMES: Dict[str, Any] = {
    "True": True,
    "False": False,
    "None": None,
    "true": True,
    "false": False,
    "null": None,
    "undefined": UNDEFINED,
}

BASE_FUNCTIONS: Dict[str, Callable[..., Any]] = {
    **DEFAULT_FUNCTIONS,
    "len": len,
    "min": min,
    "max": max,
    "abs": abs,
    "round": round,
    "bool": bool,
    "sorted": sorted,
}


class TemplateEval(EvalWithCompoundTypes):
    """
    EvalWithCompoundTypes where `m.name` on a mapping reads the key first.

    `order.items` reads the "items" entry of a dict; the dict method is
    reached only when no such key exists. Names simpleeval refuses
    (private prefixes, format helpers) are still refused.
    """

    def _eval_attribute(self, node):
        if node.attr.startswith(tuple(DISALLOW_PREFIXES)) or node.attr in DISALLOW_METHODS:
            return super()._eval_attribute(node)
        target = self._eval(node.value)
        if isinstance(target, Mapping) and node.attr in target:
            return target[node.attr]
        try:
            return getattr(target, node.attr)
        except (AttributeError, TypeError):
            pass
        try:
            return target[node.attr]
        except (KeyError, IndexError, TypeError):
            raise AttributeDoesNotExist(node.attr, self.expr) from None


def context_names(context: Context, allow_multi_set: bool = False) -> Dict[str, Any]:
    """Build the binding map for *context*."""
    names: Dict[str, Any] = {"i": context.index, "params": context.params}
    if context.values:
        if allow_multi_set:
            for k, values in enumerate(context.values):
                names[f"values{k}"] = values
                names[f"e{k}"] = context.element(k)
        names["values"] = context.values[0]
        names["e"] = context.element(0)
    return names


def error_message(exc: BaseException) -> str:
    """Best human-readable message for *exc*."""
    message = str(exc)
    return message if message else type(exc).__name__


class ExpressionEvaluator:
    """
    Evaluates expression text against explicit bindings.

    Extra names and functions given here are visible to every expression
    (e.g. formatting helpers registered by the host application).
    """

    def __init__(
        self,
        names: Optional[Mapping[str, Any]] = None,
        functions: Optional[Mapping[str, Callable[..., Any]]] = None,
    ):
        self._names = {**BASE_NAMES, **(names or {})}
        self._functions = {**BASE_FUNCTIONS, **(functions or {})}

    def evaluate(self, expression: str, bindings: Mapping[str, Any]) -> Any:
        """
        Evaluate *expression*; the result may be UNDEFINED.

        Raises:
            UndefinedExpressionError: a name, attribute, key or index
                referenced by the expression does not exist
            ExpressionError: any other evaluation failure
        """
        if not (expression or "").strip():
            raise UndefinedExpressionError(expression)
        evaluator = TemplateEval(
            names={**self._names, **bindings},
            functions=self._functions,
        )
        try:
            return evaluator.eval(expression)
        except (NameNotDefined, AttributeDoesNotExist, KeyError, IndexError) as exc:
            raise UndefinedExpressionError(expression) from exc
        except Exception as exc:
            raise ExpressionError(expression, error_message(exc)) from exc

    def evaluate_defined(self, expression: str, bindings: Mapping[str, Any]) -> Any:
        """Evaluate *expression* and reject an UNDEFINED result."""
        value = self.evaluate(expression, bindings)
        if value is UNDEFINED:
            raise UndefinedExpressionError(expression)
        return value
