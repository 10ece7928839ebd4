"""
The operation library and its error shell.

Engine owns one interpreter, one resolver and one registry, all sharing
the same immutable EngineConfig. Every operation takes the current
Context first and the node arguments after it:

    value(context, aux, template)
    literal(context, aux, template)
    apply(context, aux, values_text, template)
    select(context, values_text, condition, aux, template, ...)
    iff(context, aux, condition, template)
    include(context, aux, target, params_text)
    yst_bool(context, attr_spec)

ERROR POLICY:
    - value/literal turn any template failure into an error panel
    - apply/select/include turn operation failures into error panels and
      keep going with the rest of their output
    - yst_bool never recovers; it re-raises with the attribute spec
    - with alert_errors off every failure propagates unchanged
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence

import yaml

from ysttxt.config import EngineConfig
from ysttxt.debug import (
    condition_error_panel,
    include_error_panel,
    params_error_panel,
    set_error_panel,
    template_error_panel,
)
from ysttxt.errors import (
    BooleanAttributeError,
    ParamsParseError,
    TemplateFormatError,
    YSTError,
)
from ysttxt.expressions import ExpressionEvaluator, context_names, error_message
from ysttxt.interpreter import TemplateInterpreter
from ysttxt.log import get_logger
from ysttxt.model import Context, Operation, OperationNode, as_template
from ysttxt.registry import TemplateRegistry
from ysttxt.resolver import ValueSetResolver, value_set_length


def parse_params(text: str) -> Dict[str, Any]:
    """
    Parse an include params literal into a parameter mapping.

    Accepts a YAML flow mapping or a JSON object, e.g.
    `{title: 'Offers', limit: 3}`. Blank text yields an empty mapping.
    """
    try:
        params = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParamsParseError(f"Invalid params literal: {exc}") from exc
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise ParamsParseError(f"Params literal is not an object: {text}")
    return dict(params)


class Engine:
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[TemplateRegistry] = None,
        evaluator: Optional[ExpressionEvaluator] = None,
    ):
        self.config = config or EngineConfig()
        self.registry = registry if registry is not None else TemplateRegistry()
        self.evaluator = evaluator or ExpressionEvaluator()
        self.resolver = ValueSetResolver(self.evaluator, self.config)
        self.interpreter = TemplateInterpreter(self.evaluator, self.config, self.dispatch)
        # params literals raise on marker errors instead of rendering them inline
        self._params_interpreter = TemplateInterpreter(
            self.evaluator, self.config.with_changes(alert_errors=False), self.dispatch
        )
        self._log = get_logger("engine")
        self._handlers: Dict[Operation, Callable[..., str]] = {
            Operation.VALUE: self.value,
            Operation.LITERAL: self.literal,
            Operation.APPLY: self.apply,
            Operation.SELECT: self.select,
            Operation.IFF: self.iff,
            Operation.INCLUDE: self.include,
            Operation.YST_BOOL: self.yst_bool,
        }

    # ------------------------------------------------------------------
    # Top-level entry points
    # ------------------------------------------------------------------

    def render(
        self,
        template: Sequence[Any],
        values: Optional[Sequence[Any]] = None,
        index: int = 0,
        params: Optional[Mapping[str, Any]] = None,
        literal: bool = False,
    ) -> str:
        """Render *template* with an optional single value array as context."""
        context = self._top_context(values, index, params)
        if literal:
            return self.literal(context, None, as_template(template))
        return self.value(context, None, as_template(template))

    def render_entry(
        self,
        name: str,
        values: Optional[Sequence[Any]] = None,
        index: int = 0,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render the entry point registered under *name*."""
        if self.config.debug:
            self._log.debug("rendering entry point %s", name)
        context = self._top_context(values, index, params)
        try:
            entry = self.registry.lookup(name)
        except YSTError as exc:
            if not self.config.alert_errors:
                raise
            self._log.warning("entry point %s not found", name)
            return include_error_panel(exc)
        return entry(self, context)

    @staticmethod
    def _top_context(values, index, params) -> Context:
        return Context((values,) if values is not None else (), index, params or {})

    def evaluate(self, context: Context, template: Sequence[Any], literal: bool = False) -> str:
        return self.interpreter.evaluate(context, template, literal)

    def dispatch(self, node: OperationNode, context: Context) -> str:
        return self._handlers[node.operation](context, *node.args)

    def _run_aux(self, context: Context, aux: Optional[str]) -> None:
        if aux is not None:
            self.evaluate(context, (aux,))

    def _contain(self, exc: YSTError, panel: str) -> str:
        if not self.config.alert_errors:
            raise exc
        self._log.warning("rendering error panel: %s", error_message(exc))
        return panel

    # ------------------------------------------------------------------
    # Operation library
    # ------------------------------------------------------------------

    def value(self, context: Context, aux: Optional[str], template: Sequence[Any]) -> str:
        return self._emit(context, aux, template, literal=False)

    def literal(self, context: Context, aux: Optional[str], template: Sequence[Any]) -> str:
        return self._emit(context, aux, template, literal=True)

    def _emit(self, context: Context, aux: Optional[str], template: Sequence[Any], literal: bool) -> str:
        try:
            self._run_aux(context, aux)
            return self.evaluate(context, template, literal)
        except YSTError as exc:
            return self._contain(exc, template_error_panel(exc, template))

    def apply(self, context: Context, aux: Optional[str], values_text: Optional[str], template: Sequence[Any]) -> str:
        try:
            value_set = self.resolver.resolve(context, values_text)
        except YSTError as exc:
            return self._contain(exc, set_error_panel(exc, template))

        out: List[str] = []
        for k in range(value_set_length(value_set)):
            frame = Context(value_set, k, context.params)
            try:
                self._run_aux(frame, aux)
                out.append(self.evaluate(frame, template))
            except YSTError as exc:
                out.append(self._contain(exc, template_error_panel(exc, template)))
        return "".join(out)

    def select(self, context: Context, values_text: Optional[str], *conditions: Any) -> str:
        """
        Emit the template of every condition that holds, at every index.

        With an empty *values_text* the incoming context is reused as is:
        one pass, same values and index, no new iteration dimension.
        """
        if not conditions or len(conditions) % 3:
            raise TemplateFormatError("select expects (condition, aux, template) triples")
        triples = [conditions[k:k + 3] for k in range(0, len(conditions), 3)]

        if values_text:
            try:
                value_set = self.resolver.resolve(context, values_text)
            except YSTError as exc:
                return self._contain(exc, set_error_panel(exc, triples[0][2]))
            frames = [Context(value_set, k, context.params) for k in range(value_set_length(value_set))]
        else:
            frames = [context]

        out: List[str] = []
        for frame in frames:
            bindings = context_names(frame, self.config.allow_multi_set)
            for condition, aux, template in triples:
                try:
                    self._run_aux(frame, aux)
                    if self.evaluator.evaluate(condition, bindings):
                        out.append(self.evaluate(frame, template))
                except YSTError as exc:
                    out.append(self._contain(exc, condition_error_panel(exc, template, frame.index)))
        return "".join(out)

    def iff(self, context: Context, aux: Optional[str], condition: str, template: Sequence[Any]) -> str:
        return self.select(context, None, condition, aux, template)

    def include(self, context: Context, aux: Optional[str], target: Optional[str], params_text: Optional[str]) -> str:
        out: List[str] = []
        actual_params: Dict[str, Any] = {}
        if params_text:
            self._run_aux(context, aux)
            literal_params = params_text
            try:
                literal_params = self._params_interpreter.evaluate(context, (params_text,), literal=True)
                actual_params = parse_params(literal_params)
            except YSTError as exc:
                out.append(self._contain(exc, params_error_panel(exc, literal_params)))

        if not target:
            return "".join(out)

        try:
            entry = self.registry.lookup(target)
            out.append(entry(self, context.with_params(actual_params)))
        except Exception as exc:
            # host entry points may fail with anything; keep the page alive
            if not self.config.alert_errors:
                raise
            self._log.warning("including %s failed: %s", target, error_message(exc))
            out.append(include_error_panel(exc))
        return "".join(out)

    def yst_bool(self, context: Context, attr_spec: str) -> str:
        """Emit `name="name" ` for every truthy entry of the attribute mapping."""
        bindings = context_names(context, self.config.allow_multi_set)
        try:
            attributes = self.evaluator.evaluate_defined(attr_spec, bindings)
        except YSTError as exc:
            raise BooleanAttributeError(
                f"Error evaluating ystBool attribute ({attr_spec}) {error_message(exc)}"
            ) from exc
        if not isinstance(attributes, Mapping):
            raise BooleanAttributeError(
                f"Error evaluating ystBool attribute ({attr_spec}) not a mapping of attribute flags"
            )
        result = ""
        for name, flag in attributes.items():
            if flag:
                lower = str(name).lower()
                result += f'{lower}="{lower}" '
        return result
