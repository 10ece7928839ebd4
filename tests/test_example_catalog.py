"""
End-to-end rendering of the example catalog.

Exercises apply, include (with and without params), iff, select and
ystBool together, before and after a YAML round-trip of the library.
"""

from ysttxt.config import EngineConfig
from ysttxt.engine import Engine
from ysttxt.examples import build_example_catalog, example_products
from ysttxt.serialization import library_from_yaml, library_to_yaml

EXPECTED = (
    "<h1>Kitchen</h1><ul>"
    '<li><input type="checkbox" />Kettle - 35</li>'
    '<li><input type="checkbox" checked="checked" />Espresso &lt;Pro> - 450'
    " <em>premium</em> <em>few left</em></li>"
    '<li class="soldout"><input type="checkbox" disabled="disabled" />Mug - 8</li>'
    "</ul><p>3 products</p>"
)


def _params():
    return {"title": "Kitchen", "products": example_products()}


class TestExampleCatalog:
    def test_renders_catalog(self):
        engine = Engine(registry=build_example_catalog())
        assert engine.render_entry("catalog", params=_params()) == EXPECTED

    def test_renders_after_yaml_round_trip(self):
        registry = library_from_yaml(library_to_yaml(build_example_catalog()))
        assert Engine(registry=registry).render_entry("catalog", params=_params()) == EXPECTED

    def test_strict_mode_renders_the_same(self):
        engine = Engine(EngineConfig(alert_errors=False), registry=build_example_catalog())
        assert engine.render_entry("catalog", params=_params()) == EXPECTED

    def test_single_row(self):
        engine = Engine(registry=build_example_catalog())
        out = engine.render_entry("product_row", values=example_products(), index=2)
        assert out == '<li class="soldout"><input type="checkbox" disabled="disabled" />Mug - 8</li>'
