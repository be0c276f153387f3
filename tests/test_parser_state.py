from sailr.parser_state import ParserState
from sailr.ptr_record import DEFAULT_REXP_ENCODING
from sailr.ptr_table import PtrTable


def make_state():
    return ParserState("script.slr", PtrTable())


def test_defaults():
    state = make_state()
    assert state.tree is None
    assert (state.lineno, state.tline, state.yynerrs) == (0, 0, 0)
    assert state.rexp_encoding == DEFAULT_REXP_ENCODING
    assert state.varnames() == []


def test_lhs_and_rhs_are_tracked_separately():
    state = make_state()
    state.add_lhs_var("bmi")
    state.add_rhs_var("weight")
    state.add_rhs_var("height")
    assert state.lhs_varnames() == ["bmi"]
    assert state.rhs_varnames() == ["weight", "height"]
    assert state.varnames() == ["bmi", "weight", "height"]


def test_names_are_unique():
    state = make_state()
    state.add_lhs_var("x")
    state.add_rhs_var("x")
    state.add_lhs_var("x")
    assert state.varnames() == ["x"]
    assert state.lhs_varnames() == ["x"]
    assert state.rhs_varnames() == ["x"]


def test_returned_lists_are_copies():
    state = make_state()
    state.add_rhs_var("y")
    names = state.varnames()
    names.append("z")
    assert state.varnames() == ["y"]


def test_encoding_can_be_changed():
    state = make_state()
    state.rexp_encoding = "ASCII"
    assert state.rexp_encoding == "ASCII"