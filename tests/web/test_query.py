"""Tests for QueryStringHandler."""

import enum
from datetime import date

import pytest

from webquark.conversion import ConversionStatus
from webquark.kernel.exceptions import ConfigurationException
from webquark.web.context import ContextAccessor
from webquark.web.query import QueryStringHandler, parse_query_string


class Sort(enum.Enum):
    ASC = "asc"
    DESC = "desc"


class _FakeHostContext:
    raw_query_string = "page=2&q=hello+world"


class TestParseQueryString:
    def test_leading_question_mark_ignored(self):
        assert parse_query_string("?a=1&b=2") == {"a": "1", "b": "2"}

    def test_blank_values_kept(self):
        assert parse_query_string("flag&x=") == {"flag": "", "x": ""}

    def test_last_duplicate_wins(self):
        assert parse_query_string("a=1&a=2") == {"a": "2"}

    def test_percent_and_plus_decoding(self):
        assert parse_query_string("name=J%C3%BCrgen+M") == {"name": "Jürgen M"}

    def test_empty(self):
        assert parse_query_string("") == {}
        assert parse_query_string(None) == {}


class TestStringAccess:
    def test_get_set_remove(self):
        query = QueryStringHandler("a=1")
        assert query.get("a") == "1"
        assert query.get("missing") is None
        assert query.get("missing", "x") == "x"

        query.set("b", "2")
        assert query.has_key("b")
        query.remove("a")
        assert not query.has_key("a")

    def test_remove_missing_key_is_noop(self):
        query = QueryStringHandler("a=1")
        query.remove("zzz")
        assert len(query) == 1

    def test_keys_are_case_sensitive(self):
        query = QueryStringHandler("Key=1")
        assert query.has_key("Key")
        assert not query.has_key("key")


class TestTypedAccess:
    def test_get_as(self):
        query = QueryStringHandler("page=3&sort=desc&on=true&day=2024-05-01")
        assert query.get_as("page", int) == 3
        assert query.get_as("sort", Sort) is Sort.DESC
        assert query.get_as("on", bool) is True
        assert query.get_as("day", date) == date(2024, 5, 1)

    def test_get_as_default_on_missing_or_invalid(self):
        query = QueryStringHandler("page=abc&blank=")
        assert query.get_as("page", int, 1) == 1
        assert query.get_as("blank", int, 1) == 1
        assert query.get_as("missing", int, 1) == 1

    def test_try_get_as_reports_status(self):
        query = QueryStringHandler("page=abc")
        assert query.try_get_as("page", int).status is ConversionStatus.INVALID
        assert query.try_get_as("missing", int).status is ConversionStatus.ABSENT

    def test_set_as(self):
        query = QueryStringHandler()
        query.set_as("sort", Sort.ASC)
        query.set_as("day", date(2024, 5, 1))
        assert query.get("sort") == "ASC"
        assert query.get_as("day", date) == date(2024, 5, 1)


class TestBulk:
    def test_all_keys_keep_order(self):
        assert QueryStringHandler("b=1&a=2").all_keys() == ["b", "a"]

    def test_to_dict_is_a_copy(self):
        query = QueryStringHandler("a=1")
        snapshot = query.to_dict()
        snapshot["a"] = "changed"
        assert query.get("a") == "1"

    def test_add_range_overwrites(self):
        query = QueryStringHandler("a=1")
        query.add_range({"a": "9", "b": "2"})
        query.add_range([("c", "3")])
        assert query.to_dict() == {"a": "9", "b": "2", "c": "3"}

    def test_is_empty(self):
        assert QueryStringHandler().is_empty()
        assert not QueryStringHandler("a=1").is_empty()

    def test_dunder_protocols(self):
        query = QueryStringHandler("a=1&b=2")
        assert "a" in query
        assert list(query) == ["a", "b"]
        assert len(query) == 2


class TestSerialization:
    def test_to_query_string_encodes_keys_and_values(self):
        query = QueryStringHandler()
        query.set("q", "a b&c")
        query.set("k y", "1")
        assert query.to_query_string() == "q=a+b%26c&k+y=1"

    def test_to_query_string_parses_back(self):
        query = QueryStringHandler("name=J%C3%BCrgen&x=1%2B1")
        assert parse_query_string(query.to_query_string()) == query.to_dict()

    def test_str_matches_to_query_string(self):
        query = QueryStringHandler("a=1")
        assert str(query) == "a=1"

    def test_to_encoded_string_is_double_encoded(self):
        query = QueryStringHandler("a=1&b=x y")
        assert query.to_query_string() == "a=1&b=x+y"
        assert query.to_encoded_string() == "a%3D1%26b%3Dx%2By"

    def test_added_key_is_serialized(self):
        query = QueryStringHandler("a=1&b=2")
        assert query.to_dict() == {"a": "1", "b": "2"}
        query.set("c", "3")
        assert "c=3" in query.to_query_string()

    def test_empty_serializes_to_empty_string(self):
        assert QueryStringHandler().to_query_string() == ""


class TestFromAccessor:
    def test_reads_host_context(self):
        query = QueryStringHandler.from_accessor(ContextAccessor(_FakeHostContext()))
        assert query.get_as("page", int) == 2
        assert query.get("q") == "hello world"

    def test_mutation_does_not_touch_request(self):
        ctx = _FakeHostContext()
        query = QueryStringHandler.from_accessor(ContextAccessor(ctx))
        query.set("page", "5")
        assert ctx.raw_query_string == "page=2&q=hello+world"

    def test_missing_accessor(self):
        with pytest.raises(ConfigurationException):
            QueryStringHandler.from_accessor(None)

    def test_empty_accessor(self):
        with pytest.raises(ConfigurationException):
            QueryStringHandler.from_accessor(ContextAccessor())

    def test_context_without_query_string(self):
        with pytest.raises(ConfigurationException):
            QueryStringHandler.from_accessor(ContextAccessor(object()))
