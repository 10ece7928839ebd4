"""
Tests for template pretty printing and error text formats.
"""

from ysttxt.debug import (
    condition_error_panel,
    inline_error,
    print_template,
    template_error_panel,
)
from ysttxt.errors import UndefinedExpressionError
from ysttxt.model import Operation, op


class TestPrintTemplate:
    def test_flat_template(self):
        assert print_template(["a", "b"]) == "[ 'a',\n  'b'\n]"

    def test_single_element(self):
        assert print_template(["abc$def"]) == "[ 'abc$def'\n]"

    def test_empty_template(self):
        assert print_template([]) == "[ \n]"

    def test_nested_node(self):
        template = ["a", op(Operation.IFF, None, "e", ["b"])]
        assert print_template(template) == (
            "[ 'a',\n"
            "  YST.Txt.iff,\n"
            "  [ 'null',\n"
            "    'e',\n"
            "    [ 'b'\n"
            "    ]\n"
            "  ]\n"
            "]"
        )

    def test_plain_string(self):
        assert print_template("x") == "[ 'x'\n]"


class TestErrorText:
    def test_inline_error(self):
        exc = UndefinedExpressionError("e.name")
        assert inline_error(exc) == "[YST_Error! - Undefined expression: e.name]"

    def test_message_falls_back_to_class_name(self):
        assert inline_error(RuntimeError()) == "[YST_Error! - RuntimeError]"

    def test_template_panel(self):
        panel = template_error_panel(UndefinedExpressionError("x"), ["$x$"])
        assert panel == (
            "<p><b>Error processing template. \n"
            "  Error message: Undefined expression: x\n"
            "  Erroneous template: \n"
            "  [ '$x$'\n"
            "  ]</b></p>"
        )

    def test_condition_panel_reports_index(self):
        panel = condition_error_panel(UndefinedExpressionError("x"), ["y"], 2)
        assert panel.startswith("<p><b>Error processing conditional element. ")
        assert panel.endswith("\n  Set index: 2</b></p>")
