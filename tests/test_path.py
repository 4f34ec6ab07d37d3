"""
Tests for derivation path parsing.
"""

import pytest

from pokthd.crypto import HARDENED_BIT
from pokthd.errors import ErrorKind, InvalidPath
from pokthd.path import (
    COIN_TYPE,
    DEFAULT_PATH,
    DerivationPath,
    account_path,
    format_path,
    is_absolute_path,
    is_index,
    parse_path,
    parse_segment,
)


def test_constants():
    assert COIN_TYPE == 635
    assert DEFAULT_PATH == "m/44'/635'/0'/0"


@pytest.mark.parametrize("segment", ["44", "44'", "44h", "44H", " 44 "])
def test_parse_segment_markers(segment):
    assert parse_segment(segment) == 44


@pytest.mark.parametrize("segment", ["", "'", "-1", "1.5", "abc", "0x10", "2147483648"])
def test_parse_segment_invalid(segment):
    with pytest.raises(InvalidPath) as exc_info:
        parse_segment(segment)
    assert exc_info.value.kind is ErrorKind.INVALID_PATH


def test_parse_segment_max():
    assert parse_segment(str(HARDENED_BIT - 1)) == HARDENED_BIT - 1


def test_parse_absolute_path():
    path = parse_path("m/44'/635'/0'/0/0")

    assert path.absolute
    assert path.indices == (44, 635, 0, 0, 0)
    assert len(path) == 5
    assert path.hardened_indices == tuple(i | HARDENED_BIT for i in (44, 635, 0, 0, 0))


def test_parse_relative_path():
    path = parse_path("0'/1/2h")
    assert not path.absolute
    assert path.indices == (0, 1, 2)
    assert str(path) == "0'/1'/2'"


def test_root_path():
    path = parse_path("m")
    assert path.absolute
    assert path.indices == ()
    assert str(path) == "m"


def test_format_path_marks_every_segment_hardened():
    assert format_path("m/44'/635'/0'/0/0") == "m/44'/635'/0'/0'/0'"
    assert format_path("M/1h/2H") == "m/1'/2'"


def test_format_path_is_idempotent():
    once = format_path("m/44/635h/0'/0")
    assert format_path(once) == once


@pytest.mark.parametrize("path", ["", "   ", "m/", "m//0", "m/44'/x", "m/0/-1", "/0"])
def test_parse_path_invalid(path):
    with pytest.raises(InvalidPath):
        parse_path(path)


def test_child_and_relative_to():
    base = parse_path("m/44'/635'")
    full = parse_path("m/44'/635'/0'/0/0")

    assert base.child(7) == DerivationPath((44, 635, 7), absolute=True)
    assert full.relative_to(base) == DerivationPath((0, 0, 0), absolute=False)

    with pytest.raises(InvalidPath):
        parse_path("m/44'/1'").relative_to(base)


def test_is_absolute_path():
    assert is_absolute_path("m/0")
    assert is_absolute_path("m")
    assert not is_absolute_path("0/1")


@pytest.mark.parametrize(
    "value,expected",
    [(0, True), (5, True), ("12", True), (" 3 ", True), (-1, False), ("3'", False),
     ("m/0", False), (True, False), (None, False), (1.0, False)],
)
def test_is_index(value, expected):
    assert is_index(value) is expected


def test_account_path():
    assert account_path(0) == "m/44'/635'/0'/0/0"
    assert account_path(7) == "m/44'/635'/7'/0/0"
    assert account_path(HARDENED_BIT - 1) == f"m/44'/635'/{HARDENED_BIT - 1}'/0/0"


@pytest.mark.parametrize("index", [-1, HARDENED_BIT, "1", 1.0, True, None])
def test_account_path_invalid(index):
    with pytest.raises(InvalidPath):
        account_path(index)
