#!/usr/bin/env python3
"""
Rendering Demo: template library → Engine → HTML

Shows the full workflow:
1. Build the example template library
2. Round-trip it through YAML, as a compiled page would ship it
3. Render the catalogue with the default configuration
4. Render a broken template in default and strict mode
"""

import logging

from ysttxt import Engine, EngineConfig, op, Operation
from ysttxt.errors import YSTError
from ysttxt.examples import build_example_catalog, example_products
from ysttxt.log import setup_base_logger
from ysttxt.serialization import library_from_yaml, library_to_yaml


def main():
    setup_base_logger(level=logging.DEBUG)

    print("=" * 80)
    print("RENDERING DEMO: library → YAML → Engine → HTML")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build library
    # =========================================================================
    print("\n1. BUILDING TEMPLATE LIBRARY...")
    registry = build_example_catalog()
    print(f"   ✓ Entry points: {registry.names()}")

    # =========================================================================
    # STEP 2: YAML round trip
    # =========================================================================
    print("\n2. SERIALIZING LIBRARY...")
    document = library_to_yaml(registry)
    registry = library_from_yaml(document)
    print(f"   ✓ YAML document: {len(document.splitlines())} lines")

    # =========================================================================
    # STEP 3: Render
    # =========================================================================
    print("\n3. RENDERING CATALOG...")
    engine = Engine(EngineConfig(debug=True), registry=registry)
    html = engine.render_entry("catalog", params={"title": "Kitchen", "products": example_products()})
    print("-" * 80)
    print(html)

    # =========================================================================
    # STEP 4: Error containment
    # =========================================================================
    print("\n4. ERROR CONTAINMENT...")
    broken = ["<p>$missing$</p>", op(Operation.APPLY, None, "3", ["[$e$ of $undefined_total$]"])]
    print("-" * 80)
    print(engine.render(broken))

    strict = Engine(EngineConfig(alert_errors=False), registry=registry)
    try:
        strict.render(broken)
    except YSTError as exc:
        print(f"   ✓ strict mode raised {type(exc).__name__}: {exc}")

    print("\n" + "=" * 80)
    print("DEMO COMPLETE!")
    print("=" * 80)


if __name__ == "__main__":
    main()
