from __future__ import annotations

import pytest

from kinlayout.dates import parse_date_string, year_of


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("25 NOV 1954", "1954-11-25"),
        ("NOV 1954", "1954-11-01"),
        ("ABT 1905", "1905-01-01"),
        ("1839-08-29", "1839-08-29"),
        ("(About:1746-00-00)", "1746-01-01"),
        ("05/15/1923", "1923-05-15"),
        ("April 17, 1850", "1850-04-17"),
        ("SEPT. 17,1910", "1910-09-17"),
        ("02 May1838", "1838-05-02"),
        ("(1789?)", "1789-01-01"),
        ("2001-03-04T10:00:00Z", "2001-03-04"),
    ],
)
def test_parse_date_string(raw: str, expected: str) -> None:
    assert parse_date_string(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "unknown", "Foo 1900", "13/40/1900"])
def test_unparseable_dates_return_none(raw) -> None:
    assert parse_date_string(raw) is None


def test_year_of() -> None:
    assert year_of("12 JUN 1921") == 1921
    assert year_of(None) is None
    assert year_of("someday") is None
