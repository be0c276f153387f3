import pytest

from sailr.ptr_record import HEAD_KEY, MAX_KEY_LEN, PtrType, Rexp
from sailr.ptr_table import PtrTable


@pytest.fixture
def table():
    return PtrTable()


def test_new_table_holds_header(table):
    records = list(table)
    assert len(table) == 1
    assert records[0].key == HEAD_KEY
    assert records[0].type is PtrType.INFO
    assert table.null_updated() == 0


def test_anonym_string_keys(table):
    first = table.create_anonym_string("hello")
    second = table.create_anonym_string("world")
    assert first.key == "STR000000000001"
    assert first.anonym is True
    assert second.key != first.key
    assert second.key.startswith("STR")
    assert len(second.key) == len(first.key)
    assert table.read_string(first.key) == "hello"
    assert table.read_string(second.key) == "world"


def test_anonym_rexp(table):
    record = table.create_anonym_rexp(r"\d+", "UTF-8")
    assert record.key.startswith("REXP")
    assert len(record.key) == 15
    assert record.type is PtrType.REXP
    assert isinstance(record.value, Rexp)
    assert record.value.search("abc123")
    assert record.anonym is True


def test_add_updates_existing_record(table):
    first = table.create_int("x", 10)
    second = table.create_double("x", 2.5)
    assert first is second
    assert table.get_type("x") is PtrType.DBL
    assert table.find("x").value == 2.5
    assert len(table) == 2


def test_int_with_extra_slot_swaps(table):
    record = table.create_int("x", 10, 0.0)
    assert record.extra_type is PtrType.DBL
    record.swap()
    assert record.type is PtrType.DBL
    assert record.extra == 10


def test_update_int_and_double(table):
    table.create_int("x", 1)
    table.create_double("y", 1.0)
    table.update_int("x", 7)
    table.update_double("y", 7.5)
    assert table.find("x").value == 7
    assert table.find("y").value == 7.5
    with pytest.raises(TypeError):
        table.update_int("y", 3)


def test_update_string_requires_string(table):
    table.create_string("greeting", "Hello World")
    table.update_string("greeting", "Bye")
    assert table.read_string("greeting") == "Bye"
    table.create_int("n", 1)
    with pytest.raises(TypeError):
        table.update_string("n", "text")
    with pytest.raises(KeyError):
        table.update_string("missing", "text")


def test_create_null_clears_value(table):
    table.create_string("s", "abc")
    table.create_null("s")
    assert table.is_null("s")
    assert table.find("s").value is None


def test_find_missing_returns_none_and_get_type_raises(table):
    assert table.find("nothing") is None
    assert "nothing" not in table
    with pytest.raises(KeyError):
        table.get_type("nothing")


def test_delete(table):
    table.create_int("x", 1)
    table.delete("x")
    assert "x" not in table
    with pytest.raises(KeyError):
        table.delete("x")


def test_delete_except_keeps_listed(table):
    for name in ("a", "b", "c"):
        table.create_null(name)
    table.delete_except([HEAD_KEY, "b"])
    assert [r.key for r in table] == [HEAD_KEY, "b"]


def test_clear_removes_everything(table):
    table.create_null("a")
    table.clear()
    assert len(table) == 0
    with pytest.raises(LookupError):
        table.null_updated()


def test_null_updated_bits(table):
    table.change_null_updated_by_type(PtrType.INT)
    table.change_null_updated_by_type(PtrType.STR)
    bits = table.null_updated()
    assert bits & (1 << PtrType.INT)
    assert bits & (1 << PtrType.STR)
    assert not bits & (1 << PtrType.DBL)
    table.reset_null_updated()
    assert table.null_updated() == 0


def test_null_updated_rejects_other_types(table):
    with pytest.raises(ValueError):
        table.change_null_updated_by_type(PtrType.NULL)


def test_long_key_is_truncated(table):
    long_key = "k" * 600
    record = table.create_null(long_key)
    assert len(record.key) == MAX_KEY_LEN - 1
    assert long_key in table
    assert table.find(long_key) is record


def test_iteration_keeps_insertion_order(table):
    table.create_null("z")
    table.create_null("a")
    assert [r.key for r in table] == [HEAD_KEY, "z", "a"]


def test_show_all_prints_each_record(table, capsys):
    table.create_string("greeting", "Hello World")
    table.show_all()
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert HEAD_KEY in lines[0]
    assert "KEY:greeting" in lines[1]
    assert "Hello World" in lines[1]