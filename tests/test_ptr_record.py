import re

import pytest

from sailr.ptr_record import MAX_KEY_LEN, PtrRecord, PtrType, Rexp


@pytest.mark.parametrize(
    "type_, code",
    [
        (PtrType.INT, "i"),
        (PtrType.DBL, "d"),
        (PtrType.STR, "s"),
        (PtrType.REXP, "r"),
        (PtrType.NULL, "n"),
        (PtrType.INFO, "f"),
    ],
)
def test_type_code(type_, code):
    value = None if type_ is PtrType.NULL else 1
    assert PtrRecord("k", value, type_).type_code() == code


def test_null_record_has_no_value():
    rec = PtrRecord("x", 5, PtrType.NULL)
    assert rec.value is None


def test_update_replaces_value_and_type():
    rec = PtrRecord("x", 1, PtrType.INT)
    rec.update("hello", PtrType.STR)
    assert rec.value == "hello"
    assert rec.type is PtrType.STR


def test_update_to_null_clears_value():
    rec = PtrRecord("x", 1.5, PtrType.DBL)
    rec.update(2.5, PtrType.NULL)
    assert rec.value is None
    assert rec.type is PtrType.NULL


def test_swap_exchanges_slots_and_round_trips():
    rec = PtrRecord("x", 10, PtrType.INT)
    rec.set_extra(2.5, PtrType.DBL)
    rec.swap()
    assert (rec.value, rec.type, rec.extra, rec.extra_type) == (2.5, PtrType.DBL, 10, PtrType.INT)
    rec.swap()
    assert (rec.value, rec.type, rec.extra, rec.extra_type) == (10, PtrType.INT, 2.5, PtrType.DBL)


def test_long_key_is_truncated():
    rec = PtrRecord("a" * 1000, 1, PtrType.INT)
    assert len(rec.key) == MAX_KEY_LEN - 1


def test_short_key_is_kept():
    rec = PtrRecord("weight", 1, PtrType.INT)
    assert rec.key == "weight"


def test_reset_rexp_on_non_rexp_raises():
    rec = PtrRecord("x", 1, PtrType.INT)
    with pytest.raises(TypeError):
        rec.reset_rexp()


def test_reset_rexp_forgets_match():
    rexp = Rexp("[0-9]+")
    rec = PtrRecord("REXP", rexp, PtrType.REXP)
    assert rexp.search("abc 123")
    assert rexp.last_match.group(0) == "123"
    rec.reset_rexp()
    assert rexp.last_match is None


def test_rexp_search_miss():
    rexp = Rexp("^Hello")
    assert rexp.search("Say Hello") is False
    assert rexp.last_match is None


def test_rexp_keeps_pattern_and_encoding():
    rexp = Rexp("a+b", "EUC-JP")
    assert rexp.pattern == "a+b"
    assert rexp.encoding == "EUC-JP"


def test_rexp_invalid_pattern_raises():
    with pytest.raises(re.error):
        Rexp("[")


def test_describe_string_record():
    rec = PtrRecord("greeting", "Hello World", PtrType.STR, anonym=True)
    text = rec.describe()
    assert "KEY:greeting" in text
    assert "VAL:Hello World" in text
    assert "[Anonym:1]" in text


def test_describe_int_without_extra_shows_null():
    rec = PtrRecord("x", 10, PtrType.INT)
    text = rec.describe()
    assert "VAL:10" in text
    assert "VAL:(NULL)" in text


def test_describe_rexp_shows_pattern():
    rec = PtrRecord("REXP1", Rexp("^Hello"), PtrType.REXP)
    assert "VAL:^Hello" in rec.describe()