"""
Template interpreter.

Walks a template element by element. Literal fragments are scanned for
markers and escapes; operation nodes are handed to a dispatcher (the
Engine) together with the current context.

Fragment syntax:
    $expr$      evaluate expr and emit the result (HTML-encoded unless raw)
    $#expr$     evaluate expr for its side effects, emit nothing
    \\$          a literal dollar sign that never opens a marker
    \\x          any other escape is kept as written (backslash included)
"""
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Sequence

from ysttxt.config import EngineConfig
from ysttxt.debug import inline_error
from ysttxt.entities import decode_entities, encode_entities
from ysttxt.errors import TemplateFormatError, UnbalancedMarkerError, YSTError
from ysttxt.expressions import ExpressionEvaluator, context_names
from ysttxt.log import get_logger
from ysttxt.model import Context, OperationNode

Dispatcher = Callable[[OperationNode, Context], str]

_log = get_logger("interpreter")


def to_text(value: Any) -> str:
    """Render an expression result as page text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, range)):
        return ",".join("" if item is None else to_text(item) for item in value)
    return str(value)


class TemplateInterpreter:
    def __init__(self, evaluator: ExpressionEvaluator, config: EngineConfig, dispatch: Dispatcher):
        self._evaluator = evaluator
        self._config = config
        self._dispatch = dispatch

    def evaluate(self, context: Context, template: Sequence[Any], literal: bool = False) -> str:
        """
        Evaluate *template* in *context* and return the produced text.

        Marker errors are rendered inline (or raised in strict mode);
        UnbalancedMarkerError and errors raised by operation nodes always
        propagate to the caller.
        """
        bindings = context_names(context, self._config.allow_multi_set)
        out: List[str] = []
        for element in template:
            if isinstance(element, OperationNode):
                out.append(self._dispatch(element, context))
            elif isinstance(element, str):
                self._expand(element, bindings, literal, out)
            elif element:
                raise TemplateFormatError(f"Unexpected template element: {element!r}")
            # empty elements emit nothing
        return "".join(out)

    def _expand(self, text: str, bindings: Mapping[str, Any], literal: bool, out: List[str]) -> None:
        pos = 0
        n = len(text)
        while pos < n:
            ch = text[pos]
            if ch == "\\":
                pos += 1
                escaped = text[pos] if pos < n else ""
                if escaped != "$":
                    out.append("\\")
                out.append(escaped)
            elif ch == "$":
                pos += 1
                write_value = True
                if pos < n and text[pos] == "#":
                    write_value = False
                    pos += 1
                end = text.find("$", pos)
                if end == -1:
                    raise UnbalancedMarkerError(f"Unbalanced $ in expression: ${text[pos:]}")
                self._substitute(text[pos:end], bindings, write_value, literal, out)
                pos = end
            else:
                out.append(ch)
            pos += 1

    def _substitute(
        self, expression: str, bindings: Mapping[str, Any], write_value: bool, literal: bool, out: List[str]
    ) -> None:
        expression = decode_entities(expression)
        try:
            value = self._evaluator.evaluate_defined(expression, bindings)
        except YSTError as exc:
            if not self._config.alert_errors:
                raise
            if write_value:
                _log.warning("marker $%s$ rendered as inline error: %s", expression, exc)
                out.append(inline_error(exc))
            else:
                _log.debug("side-effect marker $#%s$ failed: %s", expression, exc)
            return
        if write_value and value is not None:
            out.append(to_text(value if literal else encode_entities(value)))
