"""
Tests for the template interpreter.

These tests verify:
    - Plain text passes through unchanged
    - Marker substitution, encoding and raw mode
    - Side-effect markers
    - Inline error recovery and strict mode
    - Unbalanced markers propagate
    - Escape handling
"""

import pytest

from ysttxt.config import EngineConfig
from ysttxt.engine import Engine
from ysttxt.errors import TemplateFormatError, UnbalancedMarkerError, UndefinedExpressionError
from ysttxt.interpreter import to_text
from ysttxt.model import Context, Operation, op


@pytest.fixture
def engine():
    return Engine()


@pytest.fixture
def strict():
    return Engine(EngineConfig(alert_errors=False))


class TestPlainText:
    def test_identity_for_text_without_markers(self, engine):
        text = "<p class='x'>Hello, world! 100% &amp; more</p>"
        assert engine.evaluate(Context(), [text]) == text

    def test_fragments_are_concatenated(self, engine):
        assert engine.evaluate(Context(), ["a", "b", "c"]) == "abc"

    def test_empty_elements_emit_nothing(self, engine):
        assert engine.evaluate(Context(), ["a", "", (), None, [], "b"]) == "ab"

    def test_unexpected_element(self, engine):
        with pytest.raises(TemplateFormatError):
            engine.evaluate(Context(), [42])


class TestMarkers:
    def test_current_element(self, engine):
        assert engine.evaluate(Context(([10, 20],), 1), ["v=$e$"]) == "v=20"

    def test_null_result_emits_nothing(self, engine):
        assert engine.evaluate(Context(([None],), 0), ["a$e$b$null$c"]) == "abc"

    def test_result_is_html_encoded(self, engine):
        ctx = Context(params={"s": '<b>"x"</b>'})
        assert engine.evaluate(ctx, ["$params.s$"]) == "&lt;b>&quot;x&quot;&lt;/b>"

    def test_raw_mode_skips_encoding(self, engine):
        ctx = Context(params={"s": '<b>"x"</b>'})
        assert engine.evaluate(ctx, ["$params.s$"], literal=True) == '<b>"x"</b>'

    def test_expression_text_is_entity_decoded(self, engine):
        """`&gt;` inside a marker is evaluated as `>`."""
        assert engine.evaluate(Context(([2],), 0), ["$e &gt; 1$"]) == "true"

    def test_index_binding(self, engine):
        assert engine.evaluate(Context(([5, 6],), 1), ["$i$"]) == "1"

    def test_side_effect_marker_emits_nothing(self, engine):
        log = []
        ctx = Context(([7],), 0, {"log": log})
        assert engine.evaluate(ctx, ["a$#params.log.append(e)$b$#e$c"]) == "abc"
        assert log == [7]


class TestMarkerErrors:
    def test_undefined_renders_inline(self, engine):
        out = engine.evaluate(Context(), ["a $missingVar$ b"])
        assert out == "a [YST_Error! - Undefined expression: missingVar] b"

    def test_inline_error_keeps_rest_of_template(self, engine):
        out = engine.evaluate(Context(([0],), 0), ["$10 // e$|$e + 1$"])
        assert out.startswith("[YST_Error! - ")
        assert out.endswith("]|1")

    def test_empty_marker_is_undefined(self, engine):
        assert engine.evaluate(Context(), ["a$$b"]) == "a[YST_Error! - Undefined expression: ]b"

    def test_side_effect_marker_error_is_silent(self, engine):
        assert engine.evaluate(Context(), ["a$#missing$b"]) == "ab"

    def test_strict_mode_propagates(self, strict):
        with pytest.raises(UndefinedExpressionError):
            strict.evaluate(Context(), ["$missingVar$"])

    def test_strict_mode_propagates_side_effect_errors(self, strict):
        with pytest.raises(UndefinedExpressionError):
            strict.evaluate(Context(), ["$#missingVar$"])

    def test_out_of_range_element_is_undefined(self):
        engine = Engine(EngineConfig(allow_multi_set=True))
        out = engine.evaluate(Context(([1, 2], ["x"]), 1), ["$e1$"])
        assert out == "[YST_Error! - Undefined expression: e1]"


class TestUnbalancedMarker:
    def test_raises_from_fragment(self, engine):
        with pytest.raises(UnbalancedMarkerError) as info:
            engine.evaluate(Context(), ["abc$def"])
        assert str(info.value) == "Unbalanced $ in expression: $def"

    def test_not_recovered_inline(self, engine):
        """The enclosing operation reports it, not an inline marker."""
        out = engine.render(["abc$def"])
        assert out.startswith("<p><b>Error processing template.")
        assert "Unbalanced $ in expression: $def" in out
        assert "[YST_Error!" not in out


class TestEscapes:
    def test_escaped_dollar_is_literal(self, engine):
        assert engine.evaluate(Context(), [r"price: \$5"]) == "price: $5"

    def test_escaped_dollars_never_open_a_marker(self, engine):
        assert engine.evaluate(Context(([1],), 0), [r"\$e\$"]) == "$e$"

    def test_other_escapes_keep_the_backslash(self, engine):
        assert engine.evaluate(Context(), [r"a\nb"]) == r"a\nb"

    def test_trailing_backslash(self, engine):
        assert engine.evaluate(Context(), ["a\\"]) == "a\\"


class TestOperationDispatch:
    def test_nodes_receive_current_context(self, engine):
        template = ["[", op(Operation.IFF, None, "e > 1", ["big $e$"]), "]"]
        assert engine.evaluate(Context(([5],), 0), template) == "[big 5]"


class TestToText:
    def test_booleans(self):
        assert to_text(True) == "true"
        assert to_text(False) == "false"

    def test_integral_floats(self):
        assert to_text(2.0) == "2"
        assert to_text(2.5) == "2.5"

    def test_sequences_are_joined(self):
        assert to_text([1, None, "a"]) == "1,,a"
