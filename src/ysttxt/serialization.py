"""
Serialization helpers for compiled templates and template libraries.

A compiled template is stored as plain data:

    ["<ul>", {"op": "apply", "args": [null, "params.products", ["<li>$e$</li>"]]}, "</ul>"]

    - a string is a literal fragment
    - {"op": <Operation value>, "args": [...]} is an operation node
    - a list inside "args" is a sub-template
    - an empty list element is an empty fragment

A template library maps entry point names to templates:

    templates:
      row: {template: [...], aux: null, literal: false}

Provides lossless JSON/YAML round-trip via the intermediate dict form.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import yaml

from ysttxt.errors import TemplateFormatError
from ysttxt.model import Operation, OperationNode, Template
from ysttxt.registry import TemplateRegistry


def template_to_data(template: Template) -> List[Any]:
    data: List[Any] = []
    for element in template:
        if isinstance(element, OperationNode):
            data.append({
                "op": element.operation.value,
                "args": [_arg_to_data(a) for a in element.args],
            })
        else:
            data.append(element)
    return data


def _arg_to_data(arg: Any) -> Any:
    if isinstance(arg, tuple):
        return template_to_data(arg)
    return arg


def template_from_data(data: Any) -> Template:
    if not isinstance(data, list):
        raise TemplateFormatError(f"Template must be a list, got {type(data).__name__}")
    elements: List[Any] = []
    for item in data:
        if isinstance(item, str):
            elements.append(item)
        elif isinstance(item, dict):
            elements.append(_node_from_data(item))
        elif item is None or item == []:
            elements.append("")
        else:
            raise TemplateFormatError(f"Unsupported template element: {item!r}")
    return tuple(elements)


def _node_from_data(d: Dict[str, Any]) -> OperationNode:
    try:
        operation = Operation(d["op"])
    except (KeyError, ValueError):
        raise TemplateFormatError(f"Unknown operation in node: {d!r}") from None
    args = []
    for arg in d.get("args", []):
        if isinstance(arg, list):
            args.append(template_from_data(arg))
        elif arg is None or isinstance(arg, str):
            args.append(arg)
        else:
            raise TemplateFormatError(f"Unsupported argument for {operation.value}: {arg!r}")
    return OperationNode(operation, tuple(args))


def template_to_json(template: Template) -> str:
    return json.dumps(template_to_data(template))


def template_from_json(s: str) -> Template:
    return template_from_data(json.loads(s))


def template_to_yaml(template: Template) -> str:
    return yaml.safe_dump(template_to_data(template))


def template_from_yaml(s: str) -> Template:
    return template_from_data(yaml.safe_load(s))


def library_to_dict(registry: TemplateRegistry) -> Dict[str, Any]:
    return {
        "templates": {
            name: {
                "template": template_to_data(entry.template),
                "aux": entry.aux,
                "literal": entry.literal,
            }
            for name, entry in registry.templates().items()
        }
    }


def library_from_dict(d: Dict[str, Any], registry: Optional[TemplateRegistry] = None) -> TemplateRegistry:
    """Register every template of the library document *d* into *registry*."""
    registry = registry if registry is not None else TemplateRegistry()
    templates = (d or {}).get("templates", {})
    if not isinstance(templates, dict):
        raise TemplateFormatError("'templates' must be a mapping of names to templates")
    for name, entry in templates.items():
        if isinstance(entry, list):
            entry = {"template": entry}
        if not isinstance(entry, dict) or "template" not in entry:
            raise TemplateFormatError(f"Library entry {name!r} has no template")
        registry.register_template(
            name,
            template_from_data(entry["template"]),
            aux=entry.get("aux"),
            literal=bool(entry.get("literal", False)),
        )
    return registry


def library_to_json(registry: TemplateRegistry) -> str:
    return json.dumps(library_to_dict(registry), sort_keys=True)


def library_from_json(s: str, registry: Optional[TemplateRegistry] = None) -> TemplateRegistry:
    return library_from_dict(json.loads(s), registry)


def library_to_yaml(registry: TemplateRegistry) -> str:
    return yaml.safe_dump(library_to_dict(registry))


def library_from_yaml(s: str, registry: Optional[TemplateRegistry] = None) -> TemplateRegistry:
    return library_from_dict(yaml.safe_load(s), registry)
