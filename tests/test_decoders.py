from __future__ import annotations

from vcard_extract.decoders import (
    decode_quoted_printable,
    decode_text,
    join_subparts,
    unescape_text,
    unhex,
)


def _hex(text: str) -> str:
    return "".join(f"={b:02X}" for b in text.encode("ascii"))


# ── Text escapes ───────────────────────────────────────────────────────────────

def test_escaped_comma():
    assert decode_text("Jane\\, Doe") == "Jane, Doe"


def test_escaped_colon_and_newline():
    assert unescape_text("a\\:b\\nc") == "a:b\nc"


def test_uppercase_newline_escape():
    assert unescape_text("a\\Nb") == "a\nb"


def test_escaped_semicolon_survives_separator_rule():
    # the backslash of \; must not be eaten by the bare ; rule
    assert unescape_text("a\\;b;c") == "a;b\nc"


def test_all_escapes_combined():
    assert unescape_text("x\\,y\\:z\\nw;v\\;u") == "x,y:z\nw\nv;u"


def test_structured_value_drops_empty_parts():
    assert decode_text(";;123 Main St;Springfield;;;", structured=True) == "123 Main St\nSpringfield"


def test_free_text_keeps_layout():
    assert decode_text("para one\\n\\n  indented") == "para one\n\n  indented"
    assert decode_text("a;;b") == "a\n\nb"


def test_join_subparts_drops_only_blank_parts():
    assert join_subparts("  a \n\n b\n ") == "  a \n b"


def test_plain_text_untouched():
    assert decode_text("hello world") == "hello world"


# ── Quoted-printable ───────────────────────────────────────────────────────────

def test_hex_hello():
    assert unhex("=48=65=6C=6C=6F") == "Hello"


def test_hex_matches_bytewise_decode():
    text = "Call me at 555-0100, ok?"
    assert unhex(_hex(text)) == text


def test_hex_line_feed_and_stray_carriage_return():
    assert unhex("=41=0D=0A=42") == "A\nB"


def test_hex_semicolon_is_separator():
    assert unhex("=41;=42") == "A\nB"


def test_hex_lowercase_digits():
    assert unhex("=6c=6f") == "lo"


def test_hex_malformed_tokens_skipped():
    assert unhex("=4=41=ZZ=414=-1") == "A"


def test_hex_soft_break_joined_lines():
    # trailing = from a soft line break leaves an empty token
    assert unhex("=48=65==6C=6C=6F") == "Hello"


def test_decode_quoted_printable_address():
    raw = ";;" + _hex("1 High St") + ";" + _hex("Leeds") + ";;"
    assert decode_quoted_printable(raw, structured=True) == "1 High St\nLeeds"


def test_decode_quoted_printable_keeps_spaces_and_blank_lines():
    assert decode_quoted_printable("=20=20=41=0A=0A=42") == "  A\n\nB"
