import pytest

from cutout_editor.utils.helpers import clamp_tolerance, parse_path, parse_point, parse_rect
from cutout_editor.utils.validators import InvalidInputError, validate_path


def test_parse_point_and_rect():
    assert parse_point(" 3, 4") == (3, 4)
    assert parse_rect("1,2,30,40") == (1, 2, 30, 40)
    with pytest.raises(ValueError):
        parse_point("3")
    with pytest.raises(ValueError):
        parse_rect("1,2,3")


def test_parse_path():
    assert parse_path("0,0; 10,0;10,10;") == [(0, 0), (10, 0), (10, 10)]
    assert parse_path("") == []


def test_clamp_tolerance():
    assert clamp_tolerance(None) == 60
    assert clamp_tolerance(-5) == 0
    assert clamp_tolerance(250) == 200
    assert clamp_tolerance(75) == 75


def test_validate_path():
    assert validate_path([(0, 0), (1, 0), (1, 1)]) == [(0, 0), (1, 0), (1, 1)]
    with pytest.raises(InvalidInputError):
        validate_path([(0, 0), (1, 1)])
    with pytest.raises(InvalidInputError):
        validate_path(None)
