"""
Example template library for proof-of-concept rendering.

Builds a small product catalogue the way a compiled page would register
it: a "catalog" entry point iterating the products, a "product_row"
template included once per product, and a "footer" receiving its
params through an include literal.
"""
from typing import Any, Dict, List

from ysttxt.model import Operation, op
from ysttxt.registry import TemplateRegistry


def example_products() -> List[Dict[str, Any]]:
    return [
        {"name": "Kettle", "price": 35, "stock": 12, "featured": False},
        {"name": "Espresso <Pro>", "price": 450, "stock": 3, "featured": True},
        {"name": "Mug", "price": 8, "stock": 0, "featured": False},
    ]


def build_example_catalog() -> TemplateRegistry:
    registry = TemplateRegistry()

    registry.register_template("product_row", [
        "<li",
        op(Operation.IFF, None, "e.stock == 0", [' class="soldout"']),
        '><input type="checkbox" ',
        op(Operation.YST_BOOL, '{"checked": e.featured, "disabled": e.stock == 0}'),
        "/>$e.name$ - $e.price$",
        op(
            Operation.SELECT, None,
            "e.price > 100", None, [" <em>premium</em>"],
            "0 < e.stock < 5", None, [" <em>few left</em>"],
        ),
        "</li>",
    ])

    registry.register_template("footer", ["<p>$params.count$ products</p>"])

    registry.register_template("catalog", [
        "<h1>$params.title$</h1><ul>",
        op(Operation.APPLY, None, "params.products", [
            op(Operation.INCLUDE, None, "product_row", ""),
        ]),
        "</ul>",
        op(Operation.INCLUDE, None, "footer", "{count: $len(params.products)$}"),
    ])

    return registry
