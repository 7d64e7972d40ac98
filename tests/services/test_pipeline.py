"""Tests for the filter, sort and paginate pipeline."""

from dataclasses import dataclass

import pytest

from tunas.services.pipeline import (
    SortDirection,
    SortField,
    SortKind,
    SortState,
    TableQuery,
    TableSpec,
    category_equals,
    clamp_page,
    date_instant,
    filter_records,
    page_count,
    paginate,
    run_table,
    sort_records,
    text_search,
)
from tunas.services.tables import RESULTS_TABLE, ROSTER_TABLE


@dataclass
class Row:
    name: str
    group: str = "a"
    score: float | None = None
    joined: str | None = None
    nickname: str | None = None


NAME = SortField("name", lambda r: r.name, SortKind.TEXT)
GROUP = SortField("group", lambda r: r.group, SortKind.CATEGORY)
SCORE = SortField("score", lambda r: r.score, SortKind.NUMBER)
JOINED = SortField("joined", lambda r: r.joined, SortKind.DATE)

ROW_TABLE: TableSpec[Row] = TableSpec(
    fields={"name": NAME, "group": GROUP, "score": SCORE, "joined": JOINED},
    default_sort="name",
    search_fields=(lambda r: r.name, lambda r: r.nickname),
    category_field=lambda r: r.group,
)


def names(rows) -> list[str]:
    return [row.name for row in rows]


class TestFilter:
    """Tests for text_search, category_equals and filter_records."""

    def test_empty_term_matches_everything(self):
        rows = [Row("Amy"), Row("Bob")]
        assert filter_records(rows, [text_search("", lambda r: r.name)]) == rows
        assert filter_records(rows, [text_search(None, lambda r: r.name)]) == rows

    def test_search_is_case_insensitive_substring(self):
        rows = [Row("Amy Adams"), Row("Bob Brown"), Row("Cara ADAMSON")]
        result = filter_records(rows, [text_search("adams", lambda r: r.name)])
        assert names(result) == ["Amy Adams", "Cara ADAMSON"]

    def test_search_matches_any_field(self):
        rows = [Row("Amy", nickname="Flash"), Row("Bob"), Row("Flash Gordon")]
        predicate = text_search("flash", lambda r: r.name, lambda r: r.nickname)
        assert names(filter_records(rows, [predicate])) == ["Amy", "Flash Gordon"]

    def test_missing_field_never_matches(self):
        rows = [Row("Amy", nickname=None)]
        assert filter_records(rows, [text_search("none", lambda r: r.nickname)]) == []

    def test_category_bypassed_without_selection(self):
        rows = [Row("Amy", group="F"), Row("Bob", group="M")]
        assert filter_records(rows, [category_equals(None, lambda r: r.group)]) == rows
        assert filter_records(rows, [category_equals("", lambda r: r.group)]) == rows

    def test_category_exact_match(self):
        rows = [Row("Amy", group="F"), Row("Bob", group="M"), Row("Cal", group="f")]
        assert names(filter_records(rows, [category_equals("F", lambda r: r.group)])) == ["Amy"]

    def test_all_predicates_must_hold(self):
        rows = [Row("Amy", group="F"), Row("Ann", group="M"), Row("Bob", group="M")]
        predicates = [text_search("a", lambda r: r.name), category_equals("M", lambda r: r.group)]
        assert names(filter_records(rows, predicates)) == ["Ann"]


class TestSortRecords:
    """Tests for sort_records."""

    def test_text_sort_ignores_case(self):
        rows = [Row("bob"), Row("Cara"), Row("amy")]
        assert names(sort_records(rows, NAME)) == ["amy", "bob", "Cara"]

    def test_descending(self):
        rows = [Row("bob"), Row("Cara"), Row("amy")]
        assert names(sort_records(rows, NAME, SortDirection.DESC)) == ["Cara", "bob", "amy"]

    def test_category_sort_uses_raw_value(self):
        rows = [Row("1", group="b"), Row("2", group="B"), Row("3", group="a")]
        assert names(sort_records(rows, GROUP)) == ["2", "3", "1"]

    def test_number_sort_is_numeric(self):
        rows = [Row("ten", score=10), Row("nine", score=9), Row("hundred", score=100)]
        assert names(sort_records(rows, SCORE)) == ["nine", "ten", "hundred"]

    def test_stable_for_equal_keys(self):
        rows = [Row("1", score=5), Row("2", score=1), Row("3", score=5), Row("4", score=5)]
        assert names(sort_records(rows, SCORE)) == ["2", "1", "3", "4"]
        assert names(sort_records(rows, SCORE, SortDirection.DESC)) == ["1", "3", "4", "2"]

    def test_missing_numbers_sort_last_both_directions(self):
        rows = [Row("none1"), Row("two", score=2), Row("none2"), Row("one", score=1)]
        assert names(sort_records(rows, SCORE)) == ["one", "two", "none1", "none2"]
        assert names(sort_records(rows, SCORE, SortDirection.DESC)) == [
            "two",
            "one",
            "none1",
            "none2",
        ]

    def test_nan_sorts_with_missing(self):
        rows = [Row("nan", score=float("nan")), Row("one", score=1)]
        assert names(sort_records(rows, SCORE)) == ["one", "nan"]

    def test_missing_date_sorts_as_epoch(self):
        rows = [
            Row("recent", joined="2024-03-01"),
            Row("missing", joined=None),
            Row("old", joined="1999-12-31"),
        ]
        assert names(sort_records(rows, JOINED)) == ["missing", "old", "recent"]
        assert names(sort_records(rows, JOINED, SortDirection.DESC)) == [
            "recent",
            "old",
            "missing",
        ]

    def test_invalid_date_sorts_as_epoch(self):
        rows = [Row("recent", joined="2024-03-01"), Row("junk", joined="not a date")]
        assert names(sort_records(rows, JOINED)) == ["junk", "recent"]

    def test_dates_compare_by_instant(self):
        rows = [
            Row("utc-late", joined="2024-01-01T12:00:00+00:00"),
            Row("offset-early", joined="2024-01-01T09:00:00+05:00"),
        ]
        assert names(sort_records(rows, JOINED)) == ["offset-early", "utc-late"]


class TestDateInstant:
    """Tests for date_instant."""

    @pytest.mark.parametrize("value", [None, "", "garbage"])
    def test_missing_or_invalid_is_epoch(self, value):
        assert date_instant(value) == 0.0

    def test_date_only_taken_as_utc_midnight(self):
        assert date_instant("1970-01-02") == 86400.0


class TestSortState:
    """Tests for SortState.toggle."""

    def test_same_field_flips_direction(self):
        state = SortState("name")
        assert state.toggle("name") == SortState("name", SortDirection.DESC)

    def test_new_field_starts_ascending(self):
        state = SortState("name", SortDirection.DESC)
        assert state.toggle("score") == SortState("score", SortDirection.ASC)

    def test_toggle_twice_restores_order(self):
        rows = [Row("b", score=2), Row("a", score=2), Row("c", score=1)]
        query = ROW_TABLE.default_query().with_sort("score")
        first = run_table(rows, ROW_TABLE, query, page_size=10)

        query = query.with_sort("score").with_sort("score")
        again = run_table(rows, ROW_TABLE, query, page_size=10)

        assert names(again.items) == names(first.items) == ["c", "b", "a"]


class TestPaginate:
    """Tests for paginate, page_count and clamp_page."""

    def test_120_records_in_pages_of_50(self):
        rows = list(range(120))
        assert page_count(len(rows), 50) == 3
        assert len(paginate(rows, 1, 50).items) == 50
        assert paginate(rows, 3, 50).items == list(range(100, 120))
        assert paginate(rows, 4, 50).items == []

    def test_page_zero_is_empty(self):
        assert paginate(list(range(10)), 0, 5).items == []

    def test_empty_input(self):
        page = paginate([], 1, 50)
        assert page.items == []
        assert page.page_count == 0
        assert page.first_row == 0
        assert page.last_row == 0

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            paginate([1, 2], 1, 0)
        with pytest.raises(ValueError):
            page_count(2, -1)

    def test_row_numbers(self):
        page = paginate(list(range(120)), 3, 50)
        assert (page.first_row, page.last_row) == (101, 120)
        assert page.has_previous
        assert not page.has_next

    @pytest.mark.parametrize(
        ("page", "total", "expected"),
        [(1, 120, 1), (4, 120, 3), (0, 120, 1), (-2, 120, 1), (5, 0, 1), (2, 50, 1)],
    )
    def test_clamp_page(self, page, total, expected):
        assert clamp_page(page, total, 50) == expected


class TestTableQuery:
    """Tests for TableQuery transitions."""

    def test_changes_reset_page(self):
        query = TableQuery(sort=SortState("name"), page=4)
        assert query.with_search("amy").page == 1
        assert query.with_category("F").page == 1
        assert query.with_sort("score").page == 1

    def test_with_page_keeps_filters(self):
        query = TableQuery(sort=SortState("name"), search="amy", category="F")
        moved = query.with_page(3)
        assert (moved.search, moved.category, moved.page) == ("amy", "F", 3)

    def test_blank_category_clears_filter(self):
        assert TableQuery(sort=SortState("name")).with_category("").category is None


class TestRunTable:
    """Tests for run_table and TableSpec."""

    def test_filter_sort_paginate(self):
        rows = [Row(f"swimmer {i:03d}", score=120 - i) for i in range(120)]
        query = TableQuery(sort=SortState("score"), search="swimmer", page=3)
        page = run_table(rows, ROW_TABLE, query, page_size=50)

        assert page.total == 120
        assert len(page.items) == 20
        assert page.items[0].score == 101

    def test_page_clamped_after_filter_shrinks(self):
        rows = [Row(f"row {i}") for i in range(120)] + [Row("needle")]
        query = TableQuery(sort=SortState("name"), search="needle", page=3)
        page = run_table(rows, ROW_TABLE, query, page_size=50)

        assert page.page_index == 1
        assert names(page.items) == ["needle"]

    def test_category_filter(self):
        rows = [Row("a", group="F"), Row("b", group="M")]
        query = TableQuery(sort=SortState("name"), category="M")
        assert names(run_table(rows, ROW_TABLE, query, 10).items) == ["b"]

    def test_unknown_sort_field(self):
        with pytest.raises(ValueError, match="Unknown sort field"):
            ROW_TABLE.get_field("height")

    def test_unknown_default_sort(self):
        with pytest.raises(ValueError):
            TableSpec(fields={"name": NAME}, default_sort="score")


class TestRosterTable:
    """Tests for the club roster table definition."""

    def test_default_sort_by_name(self, roster):
        page = run_table(roster.swimmers, ROSTER_TABLE, ROSTER_TABLE.default_query(), 50)
        assert [s.full_name for s in page.items] == [
            "Amy Adams",
            "Bob Brown",
            "cara Cole",
            "Dee Dunn",
        ]

    def test_search_matches_short_id(self, roster):
        query = ROSTER_TABLE.default_query().with_search("deedun")
        page = run_table(roster.swimmers, ROSTER_TABLE, query, 50)
        assert [s.full_name for s in page.items] == ["Dee Dunn"]

    def test_filter_by_sex(self, roster):
        query = ROSTER_TABLE.default_query().with_category("M")
        page = run_table(roster.swimmers, ROSTER_TABLE, query, 50)
        assert [s.full_name for s in page.items] == ["Bob Brown"]

    def test_sort_by_age(self, roster):
        query = ROSTER_TABLE.default_query().with_sort("age")
        page = run_table(roster.swimmers, ROSTER_TABLE, query, 50)
        assert [s.age_range.min for s in page.items] == [10, 11, 12, 13]

    def test_missing_birthday_sorts_first_ascending(self, make_swimmer):
        swimmers = [
            make_swimmer(full_name="Old Timer", birthday="2010-05-01"),
            make_swimmer(full_name="No Birthday"),
            make_swimmer(full_name="Young One", birthday="2014-02-01"),
        ]
        query = ROSTER_TABLE.default_query().with_sort("birthday")
        page = run_table(swimmers, ROSTER_TABLE, query, 50)
        assert [s.full_name for s in page.items] == ["No Birthday", "Old Timer", "Young One"]


class TestResultsTable:
    """Tests for the meet results table definition."""

    def test_time_sort_is_numeric(self, make_result):
        results = [
            make_result(time="1:05.40", date="2024-01-01"),
            make_result(time="59.90", date="2024-01-02"),
            make_result(time="2:01.00", date="2024-01-03"),
        ]
        query = RESULTS_TABLE.default_query().with_sort("time")
        page = run_table(results, RESULTS_TABLE, query, 50)
        assert [r.time for r in page.items] == ["59.90", "1:05.40", "2:01.00"]

    def test_malformed_time_sorts_last(self, make_result):
        results = [make_result(time="NT"), make_result(time="1:05.40")]
        query = RESULTS_TABLE.default_query().with_sort("time")
        query = query.with_sort("time")  # descending
        page = run_table(results, RESULTS_TABLE, query, 50)
        assert [r.time for r in page.items] == ["1:05.40", "NT"]

    def test_filter_by_course_and_search_meet(self, make_result):
        results = [
            make_result(event="100 FR SCY", meet="Winter Invite"),
            make_result(event="100 FR LCM", meet="Summer Champs"),
            make_result(event="50 BK LCM", meet="Winter Invite"),
        ]
        query = RESULTS_TABLE.default_query().with_search("winter").with_category("LCM")
        page = run_table(results, RESULTS_TABLE, query, 50)
        assert [r.event for r in page.items] == ["50 BK LCM"]
