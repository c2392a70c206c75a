from __future__ import annotations

from vcard_extract.classify import (
    Continuation,
    EndOfRecord,
    FieldStart,
    StartOfRecord,
    Unrecognized,
    classify_line,
    param_values,
    split_head,
)
from vcard_extract.model import Encoding, Field


# ── Record boundaries ──────────────────────────────────────────────────────────

def test_begin_and_end():
    assert classify_line("BEGIN:VCARD") == StartOfRecord("BEGIN")
    assert classify_line("begin:vcard") == StartOfRecord("BEGIN")
    assert classify_line("END:VCARD") == EndOfRecord()


def test_prodid_is_alternate_start():
    assert classify_line("PRODID:-//Apple Inc.//iOS 17//EN") == StartOfRecord("PRODID")


def test_continuations():
    assert classify_line(" world") == Continuation(" world")
    assert classify_line("=6C=6F") == Continuation("=6C=6F")


def test_unrecognized_lines():
    for line in ("VERSION:3.0", "N:Doe;Jane;;;", "NICKNAME:JD", "no colon", "", "BEGIN:VCALENDAR"):
        assert isinstance(classify_line(line), Unrecognized), line


# ── Field resolution ───────────────────────────────────────────────────────────

def test_simple_properties():
    assert classify_line("FN:Jane").field is Field.FULL_NAME
    assert classify_line("ORG:Acme;Sales").field is Field.ORGANIZATION
    assert classify_line("NOTE:hi").field is Field.NOTE
    assert classify_line("CATEGORIES:a,b").field is Field.CATEGORIES


def test_phone_types():
    assert classify_line("TEL;TYPE=CELL:1").field is Field.CELL_PHONE
    assert classify_line("TEL;TYPE=WORK,VOICE:1").field is Field.WORK_PHONE
    assert classify_line("TEL;type=HOME;type=pref:1").field is Field.HOME_PHONE
    assert classify_line("TEL;CELL:1").field is Field.CELL_PHONE


def test_cell_wins_over_work():
    assert classify_line("TEL;TYPE=WORK;TYPE=CELL:1").field is Field.CELL_PHONE


def test_unknown_phone_takes_next_slot():
    first = classify_line("TEL:1", phone_slots_used=0)
    third = classify_line("TEL;TYPE=FAX:3", phone_slots_used=2)
    assert (first.field, first.uses_phone_slot) == (Field.PHONE1, True)
    assert (third.field, third.uses_phone_slot) == (Field.PHONE3, True)


def test_unknown_phone_overflow_has_no_field():
    result = classify_line("TEL:4", phone_slots_used=3)
    assert result.field is None
    assert result.uses_phone_slot is True


def test_typed_phone_does_not_use_slot():
    assert classify_line("TEL;TYPE=HOME:1", phone_slots_used=3).uses_phone_slot is False


def test_address_and_email_types():
    assert classify_line("ADR;TYPE=WORK:;;1 St").field is Field.WORK_ADDRESS
    assert classify_line("ADR;TYPE=HOME:;;1 St").field is Field.HOME_ADDRESS
    assert classify_line("ADR:;;1 St").field is Field.ADDRESS
    assert classify_line("EMAIL;TYPE=INTERNET,WORK:a@b.c").field is Field.WORK_EMAIL
    assert classify_line("EMAIL;TYPE=HOME:a@b.c").field is Field.HOME_EMAIL
    # CELL only applies to phones
    assert classify_line("EMAIL;TYPE=CELL:a@b.c").field is Field.EMAIL


def test_grouped_forms_match_bare_form():
    bare = classify_line("ADR;TYPE=HOME:;;1 St")
    assert classify_line("item1.ADR;TYPE=HOME:;;1 St") == bare
    assert classify_line("item2..ADR;TYPE=HOME:;;1 St") == bare
    assert classify_line(".ADR;TYPE=HOME:;;1 St") == bare
    assert classify_line("item3.TEL:5", phone_slots_used=1).field is Field.PHONE2


def test_photo_routed_to_sink():
    result = classify_line("PHOTO;ENCODING=b;TYPE=JPEG:/9j/4AAQ")
    assert isinstance(result, FieldStart)
    assert result.field is None
    assert result.uses_phone_slot is False


# ── Encoding and payload ───────────────────────────────────────────────────────

def test_encoding_selection():
    assert classify_line("NOTE:plain").encoding is Encoding.TEXT
    assert classify_line("NOTE;ENCODING=QUOTED-PRINTABLE:=48").encoding is Encoding.HEX
    assert classify_line("NOTE;CHARSET=UTF-8;QUOTED-PRINTABLE:=48").encoding is Encoding.HEX


def test_payload_splits_on_first_colon_only():
    assert classify_line("NOTE:see http://example.com:8080/x").payload == "see http://example.com:8080/x"


def test_split_head():
    assert split_head("item1.TEL;type=CELL;type=pref") == ("TEL", ["TYPE=CELL", "TYPE=PREF"])


def test_param_values_mixes_bare_and_keyed():
    assert param_values(["TYPE=WORK,VOICE", "PREF", "CHARSET=UTF-8"], "TYPE") == {"WORK", "VOICE", "PREF"}
