"""
Entity codec used by marker substitution.

Templates are authored inside markup, so the expression text of a marker
arrives with `"`, `&`, `<` and `>` already encoded. The codec undoes that
before evaluation and re-encodes the two characters that would break the
surrounding markup when a result is inserted.

The pair is deliberately asymmetric: decode knows four entities,
encode only touches `<` and `"`.
"""

from typing import Any

_DECODE_ORDER = (
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def decode_entities(text: str) -> str:
    """Replace the known HTML entities in *text* by their characters."""
    for entity, char in _DECODE_ORDER:
        text = text.replace(entity, char)
    return text


def encode_entities(value: Any) -> Any:
    """Encode `<` and `"` in text values; other values are returned unchanged."""
    if not isinstance(value, str):
        return value
    return value.replace("<", "&lt;").replace('"', "&quot;")
