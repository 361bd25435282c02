import pytest

from nmm.errors import ParseIntError
from nmm.literals import parse_int, parse_radix


@pytest.mark.parametrize(
    "token,expected",
    [("0", 0), ("0x1A", 26), ("0x1a", 26), ("017", 15), ("42", 42), ("00", 0), ("0xFFFFFFFF", 0xFFFFFFFF)],
)
def test_parse_int_radix_detection(token: str, expected: int) -> None:
    assert parse_int(token) == expected


@pytest.mark.parametrize("token", ["08", "0x", "0xG1", "-1", "4294967296", "1_000", "abc", ""])
def test_parse_int_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(ParseIntError) as excinfo:
        parse_int(token)
    assert isinstance(excinfo.value.source, ValueError)
    assert str(excinfo.value).startswith("Int parse error:")


def test_parse_int_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_int("09")


def test_parse_radix_allows_plus_sign():
    assert parse_radix("+41", 16) == 0x41
    assert parse_int("+7") == 7
