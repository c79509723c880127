import json
from datetime import date
from urllib.parse import parse_qs, urlencode

from portal_console.app.listing.query_serializer import (
    FieldKind,
    FilterField,
    build_list_params,
    build_where_clause,
    serialize_filter,
)

BLOG_FIELDS = (
    FilterField("search", FieldKind.TEXT, wire_field="title"),
    FilterField("status", FieldKind.ENUM, options=("active", "deactive")),
    FilterField("dateRange", FieldKind.DATE_RANGE, wire_field="createdAt"),
)


def test_blog_scenario_omits_empty_search_and_normalizes_dates() -> None:
    applied = {"status": "active", "search": "", "dateRange": [date(2024, 1, 10), date(2024, 1, 12)]}

    serialized = serialize_filter(applied, BLOG_FIELDS)

    assert json.loads(serialized) == {
        "where": {
            "status": "active",
            "createdAt": {"from": "2024-01-10T00:00:00.000Z", "to": "2024-01-12T23:59:59.999Z"},
        }
    }


def test_serialization_is_deterministic() -> None:
    applied = {"search": "news", "status": "deactive", "dateRange": ["2024-03-01"]}

    assert serialize_filter(applied, BLOG_FIELDS) == serialize_filter(dict(applied), BLOG_FIELDS)


def test_text_is_sent_under_the_wire_field_and_stripped() -> None:
    where = build_where_clause({"search": "  release notes "}, BLOG_FIELDS)

    assert where == {"title": "release notes"}


def test_blank_criteria_never_become_keys() -> None:
    applied = {"search": "   ", "status": "", "dateRange": []}

    assert build_where_clause(applied, BLOG_FIELDS) == {}
    assert build_where_clause({"status": None, "dateRange": [None]}, BLOG_FIELDS) == {}


def test_all_empty_filter_is_omitted_from_query() -> None:
    serialized = serialize_filter({"search": "", "status": "", "dateRange": []}, BLOG_FIELDS)
    params = build_list_params(1, 10, serialized)

    assert serialized is None
    assert params == {"page": 1, "limit": 10}
    assert "filter" not in parse_qs(urlencode(params))


def test_list_params_carry_filter_when_present() -> None:
    serialized = serialize_filter({"status": "active"}, BLOG_FIELDS)

    params = build_list_params(3, 20, serialized)

    assert params == {"page": 3, "limit": 20, "filter": '{"where":{"status":"active"}}'}


def test_non_ascii_text_is_kept_verbatim() -> None:
    serialized = serialize_filter({"search": "اخبار"}, BLOG_FIELDS)

    assert serialized == '{"where":{"title":"اخبار"}}'


def test_cleared_date_picker_is_omitted() -> None:
    for cleared in (["", ""], "", [" "], [None, None]):
        serialized = serialize_filter({"status": "active", "dateRange": cleared}, BLOG_FIELDS)

        assert serialized == '{"where":{"status":"active"}}'


def test_blank_end_marker_gives_single_day_range() -> None:
    where = build_where_clause({"dateRange": ["2024-01-10", ""]}, BLOG_FIELDS)

    assert where == {"createdAt": {"from": "2024-01-10T00:00:00.000Z", "to": "2024-01-10T23:59:59.999Z"}}
