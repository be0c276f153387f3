import dataclasses

import pytest

from sailr.script_loc import ScriptLoc


def test_default_location_is_all_zero():
    loc = ScriptLoc()
    assert (loc.first_line, loc.first_column, loc.last_line, loc.last_column) == (0, 0, 0, 0)


def test_describe_default():
    assert ScriptLoc().describe() == (
        "approximate script position: from line 0 col 0 to line 0 col 0 "
    )


def test_describe_contains_all_coordinates_in_order():
    loc = ScriptLoc(3, 7, 5, 12)
    text = loc.describe()
    assert text == "approximate script position: from line 3 col 7 to line 5 col 12 "


def test_str_matches_describe():
    loc = ScriptLoc(1, 2, 3, 4)
    assert str(loc) == loc.describe()


def test_location_is_immutable():
    loc = ScriptLoc(1, 1, 1, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        loc.first_line = 9  # type: ignore[misc]
    assert loc.first_line == 1
    assert loc == ScriptLoc(1, 1, 1, 1)


def test_equality_by_value():
    assert ScriptLoc(1, 2, 3, 4) == ScriptLoc(1, 2, 3, 4)
    assert ScriptLoc(1, 2, 3, 4) != ScriptLoc(1, 2, 3, 5)