from datetime import date, datetime, timedelta, timezone

import pytest

from fleet_erp.utils.dates import (
    build_date_range_filter,
    first_day_of_month,
    is_same_month,
    last_day_of_month,
    parse_date_input,
    to_end_of_day,
    to_iso_date_string,
    to_start_of_day,
)


def test_end_of_day_sets_last_millisecond():
    result = to_end_of_day(datetime(2024, 1, 15, 10, 30))
    assert (result.hour, result.minute, result.second, result.microsecond) == (23, 59, 59, 999000)


def test_start_of_day_sets_midnight():
    result = to_start_of_day(datetime(2024, 1, 15, 10, 30, 45, 123000))
    assert (result.hour, result.minute, result.second, result.microsecond) == (0, 0, 0, 0)


def test_day_helpers_keep_calendar_day_and_input():
    original = datetime(2024, 1, 15, 10, 30)
    snapshot = (original.year, original.month, original.day, original.hour, original.minute)

    for result in (to_end_of_day(original), to_start_of_day(original)):
        assert (result.year, result.month, result.day) == (2024, 1, 15)
        assert result is not original

    assert (original.year, original.month, original.day, original.hour, original.minute) == snapshot


def test_day_helpers_keep_timezone():
    tz = timezone(timedelta(hours=-3))
    result = to_end_of_day(datetime(2024, 3, 1, 8, 0, tzinfo=tz))
    assert result.tzinfo == tz
    assert result.day == 1


def test_day_helpers_accept_plain_dates():
    assert to_start_of_day(date(2024, 2, 29)) == datetime(2024, 2, 29, 0, 0)
    assert to_end_of_day(date(2024, 2, 29)) == datetime(2024, 2, 29, 23, 59, 59, 999000)


def test_parse_date_only_string_is_local_midnight():
    assert parse_date_input("2024-01-01") == datetime(2024, 1, 1)


def test_parse_datetime_string():
    assert parse_date_input("2024-01-01T10:15:00") == datetime(2024, 1, 1, 10, 15)


def test_filter_absent_bounds():
    assert build_date_range_filter() is None
    assert build_date_range_filter(None, None) is None
    assert build_date_range_filter("", "") is None


def test_filter_start_only():
    result = build_date_range_filter("2024-01-01")
    assert list(result) == ["created_at"]
    assert result["created_at"]["gte"] == datetime(2024, 1, 1, 0, 0)
    assert "lte" not in result["created_at"]


def test_filter_end_only_with_custom_field():
    result = build_date_range_filter(None, "2024-12-31", "due_date")
    assert list(result) == ["due_date"]
    assert result["due_date"]["lte"] == datetime(2024, 12, 31, 23, 59, 59, 999000)
    assert "gte" not in result["due_date"]


def test_filter_both_bounds_from_mixed_inputs():
    result = build_date_range_filter(datetime(2024, 1, 1, 15, 0), date(2024, 1, 31))
    assert result == {
        "created_at": {
            "gte": datetime(2024, 1, 1, 0, 0),
            "lte": datetime(2024, 1, 31, 23, 59, 59, 999000),
        }
    }


def test_filter_does_not_check_ordering():
    result = build_date_range_filter("2024-12-31", "2024-01-01")
    assert result["created_at"]["gte"] > result["created_at"]["lte"]


@pytest.mark.parametrize("garbage", ["not-a-date", "2024-1-5", "31/12/2024"])
def test_filter_drops_unparseable_bounds(garbage):
    assert build_date_range_filter(garbage, None) is None
    assert build_date_range_filter(None, garbage) is None

    result = build_date_range_filter(garbage, "2024-03-10")
    assert result == {"created_at": {"lte": datetime(2024, 3, 10, 23, 59, 59, 999000)}}


def test_parse_rejects_non_iso_strings():
    with pytest.raises(ValueError):
        parse_date_input("31/12/2024")


def test_filter_merges_into_larger_predicate():
    where = {"status": "active", **build_date_range_filter("2024-01-01", "2024-01-02")}
    assert set(where) == {"status", "created_at"}


def test_month_boundaries():
    assert first_day_of_month(2024, 2) == datetime(2024, 2, 1)
    assert last_day_of_month(2024, 2) == datetime(2024, 2, 29, 23, 59, 59, 999000)
    assert last_day_of_month(2023, 2).day == 28
    assert last_day_of_month(2024, 12).day == 31


def test_is_same_month():
    assert is_same_month(date(2024, 5, 1), datetime(2024, 5, 31, 23, 0))
    assert not is_same_month(date(2024, 5, 1), date(2023, 5, 1))
    assert not is_same_month(date(2024, 5, 1), date(2024, 6, 1))


def test_iso_date_string():
    assert to_iso_date_string(datetime(2024, 7, 4, 18, 30)) == "2024-07-04"
    assert to_iso_date_string(date(2024, 7, 4)) == "2024-07-04"
