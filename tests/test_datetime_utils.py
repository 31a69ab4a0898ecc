from datetime import datetime

import pytest

from core.outcome import MalformedInputError
from core.parser_utils.datetime import (
    format_clock,
    format_timestamp,
    infer_time_range,
    normalize_start_date,
    parse_clock_hours,
    parse_duration_hours,
    split_glued_tokens,
)

REFERENCE = datetime(2026, 10, 19, 14, 5)


def test_parse_clock_hours_and_format_clock():
    assert parse_clock_hours("9") == 9.0
    assert parse_clock_hours("9:30") == 9.5
    assert parse_clock_hours("25") is None
    assert parse_clock_hours("noon") is None
    assert format_clock(9.5) == "9:30"
    assert format_clock(14.0) == "14:00"


def test_format_timestamp_uses_twelve_hour_clock():
    assert format_timestamp(REFERENCE) == "10/19/26 2:05 PM"
    assert format_timestamp(datetime(2026, 1, 2, 0, 7)) == "01/02/26 12:07 AM"


def test_split_glued_tokens_separates_ranges_and_meridiems():
    assert split_glued_tokens(["3pm"]) == ["3", "PM"]
    assert split_glued_tokens(["9-9:30am"]) == ["9", "-", "9:30", "AM"]
    assert split_glued_tokens(["4/20", "-"]) == ["4/20", "-"]


@pytest.mark.parametrize(
    "phrase",
    [["9-9:30", "a.m."], ["9", "to", "9:30", "a.m."], ["9", "-", "9:30am"]],
)
def test_time_range_infers_half_hour_duration(phrase):
    start, duration = normalize_start_date(phrase, REFERENCE)
    assert start == "9:00 AM"
    assert duration == pytest.approx(0.5)


def test_time_range_wraps_past_noon():
    tokens, duration = infer_time_range(["11", "to", "1"])
    assert tokens == ["11:00"]
    assert duration == pytest.approx(2.0)


def test_time_range_keeps_start_meridiem():
    start, duration = normalize_start_date(["11", "PM", "-", "1", "AM"], REFERENCE)
    assert start == "11:00 PM"
    assert duration == pytest.approx(2.0)


def test_empty_time_range_is_malformed():
    with pytest.raises(MalformedInputError):
        normalize_start_date(["3", "-", "3"], REFERENCE)


def test_relative_days_and_bare_hours_resolve():
    assert normalize_start_date(["today", "3"], REFERENCE) == ("10/19/26 3:00", None)
    assert normalize_start_date(["tmw", "3pm"], REFERENCE) == ("10/20/26 3:00 PM", None)
    assert normalize_start_date(["4/20", "3", "p.m."], REFERENCE) == ("4/20/26 3:00 PM", None)


def test_normalizing_twice_changes_nothing():
    first, _ = normalize_start_date(["tomorrow", "9", "am"], REFERENCE)
    second, _ = normalize_start_date(first.split(" "), REFERENCE)
    assert first == "10/20/26 9:00 AM"
    assert second == first


def test_empty_start_phrase_means_now():
    assert normalize_start_date([], REFERENCE) == ("10/19/26 2:05 PM", None)


def test_parse_duration_hours_accepts_units():
    assert parse_duration_hours(["2"]) == 2.0
    assert parse_duration_hours(["1.5", "hours"]) == 1.5
    assert parse_duration_hours([".5h"]) == 0.5


@pytest.mark.parametrize("words", [["two"], ["0"], ["2", "days"]])
def test_parse_duration_hours_rejects_bad_values(words):
    with pytest.raises(MalformedInputError):
        parse_duration_hours(words)


@pytest.mark.parametrize("phrase", [["11-1pm"], ["11", "to", "1", "PM"], ["11", "-", "1", "p.m."]])
def test_start_borrowing_end_meridiem_flips_across_noon(phrase):
    assert normalize_start_date(phrase, REFERENCE) == ("11:00 AM", pytest.approx(2.0))


def test_borrowed_meridiem_kept_when_start_precedes_end():
    assert normalize_start_date(["12-1pm"], REFERENCE) == ("12:00 PM", pytest.approx(1.0))
    assert normalize_start_date(["11-1am"], REFERENCE) == ("11:00 PM", pytest.approx(2.0))


def test_split_glued_tokens_separates_meridiem_on_both_ends():
    assert split_glued_tokens(["9am-10am"]) == ["9", "AM", "-", "10", "AM"]
    assert split_glued_tokens(["11:30p.m.-1am"]) == ["11:30", "PM", "-", "1", "AM"]
    assert normalize_start_date(["4/20", "9am-10:30am"], REFERENCE) == ("4/20/26 9:00 AM", pytest.approx(1.5))


def test_glued_dash_pair_without_meridiem_or_day_is_malformed():
    with pytest.raises(MalformedInputError):
        split_glued_tokens(["4-20"])
    assert split_glued_tokens(["today", "2-4"]) == ["today", "2", "-", "4"]
    assert split_glued_tokens(["2-4", "pm"]) == ["2", "-", "4", "pm"]
