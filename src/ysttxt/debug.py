"""
Diagnostics: template pretty printing and the error text formats.

Two error shapes reach the rendered page:

    inline marker   [YST_Error! - <message>]
                    replaces a single failed `$expr$` marker

    error panel     <p><b>Error processing template. \\n  Error message: ...</b></p>
                    replaces the output of a failed operation

Page scripts and tests match on these exact strings, so the layout
(including the odd spacing) is fixed.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from ysttxt.expressions import error_message
from ysttxt.model import Operation, OperationNode


def inline_error(exc: BaseException) -> str:
    return f"[YST_Error! - {error_message(exc)}]"


def _flatten(template: Sequence[Any]) -> list:
    # Nodes print the way compiled templates lay them out: the operation
    # followed by its argument list.
    flat: list = []
    for element in template:
        if isinstance(element, OperationNode):
            flat.append(element.operation)
            flat.append(list(element.args))
        else:
            flat.append(element)
    return flat


def print_template(template: Sequence[Any], pre: str = "") -> str:
    """Pretty print *template*, one element per line, nested lists indented."""
    if isinstance(template, str):
        template = [template]
    items = _flatten(template)
    result = pre + "[ "
    if len(items) > 1:
        result += _print_value(items[0], "", ",\n")
        for item in items[1:-1]:
            result += _print_value(item, pre + "  ", ",\n")
        result += _print_value(items[-1], pre + "  ", "")
    elif items:
        result += _print_value(items[0], "", "")
    result += "\n" + pre + "]"
    return result


def _print_value(value: Any, pre: str, post: str) -> str:
    if value is None:
        return f"{pre}'null'{post}"
    if isinstance(value, Operation):
        return f"{pre}{value.display_name}{post}"
    if isinstance(value, str):
        return f"{pre}'{value}'{post}"
    if isinstance(value, (list, tuple)):
        return print_template(value, pre) + post
    return f"{pre}{value!r}{post}"


def _panel(title: str, exc: BaseException, detail: str) -> str:
    return f"<p><b>{title}. \n  Error message: {error_message(exc)}{detail}</b></p>"


def template_error_panel(exc: BaseException, template: Sequence[Any]) -> str:
    return _panel(
        "Error processing template", exc,
        "\n  Erroneous template: \n" + print_template(template, "  "),
    )


def set_error_panel(exc: BaseException, template: Sequence[Any]) -> str:
    return _panel(
        "Error processing set attribute", exc,
        "\n  Erroneous element: \n" + print_template(template, "  "),
    )


def condition_error_panel(exc: BaseException, template: Sequence[Any], index: Optional[int]) -> str:
    return _panel(
        "Error processing conditional element", exc,
        "\n  Erroneous element: \n" + print_template(template, "  ") + f"\n  Set index: {index}",
    )


def params_error_panel(exc: BaseException, params_text: str) -> str:
    return _panel("Error processing params attribute", exc, f"\n  Erroneous params attribute: {params_text}")


def include_error_panel(exc: BaseException) -> str:
    return _panel("Error including Yeast template", exc, "")
