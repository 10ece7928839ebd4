"""
Tests for the entity codec.

Decode and encode are intentionally not inverses: decode knows four
entities, encode only two characters.
"""

from ysttxt.entities import decode_entities, encode_entities


class TestDecodeEntities:
    def test_decodes_all_four_entities(self):
        """Should decode &quot; &amp; &lt; and &gt;."""
        assert decode_entities("&quot;&amp;&lt;&gt;") == '"&<>'

    def test_plain_text_unchanged(self):
        assert decode_entities("e > 1 and e.name == 'x'") == "e > 1 and e.name == 'x'"

    def test_amp_is_decoded_before_lt(self):
        """A doubly encoded &lt; collapses in one pass (amp first, then lt)."""
        assert decode_entities("&amp;lt;") == "<"


class TestEncodeEntities:
    def test_encodes_lt_and_quote_only(self):
        """Should encode < and " but leave & and > alone."""
        assert encode_entities('<a href="x">&') == "&lt;a href=&quot;x&quot;>&"

    def test_non_text_returned_unchanged(self):
        assert encode_entities(5) == 5
        assert encode_entities(None) is None
        items = ["<b>"]
        assert encode_entities(items) is items

    def test_decode_then_encode_is_not_a_round_trip(self):
        decoded = decode_entities("&quot;&amp;&lt;&gt;")
        assert encode_entities(decoded) == "&quot;&&lt;>"
