"""
Unit tests for canonical message construction and query encoding.
"""
import itertools

import pytest

from httpsign.core.signing.canonical import (
    create_canonical_message,
    encode_query,
    parse_query,
    query_from_items,
)


@pytest.mark.parametrize(
    "params, encoded",
    [
        (None, ""),
        ({}, ""),
        ({"k": ["v"]}, "k=v"),
        ({"k1": ["v1"], "k2": ["v2"]}, "k1=v1&k2=v2"),
        ({"k1": ["v1_1", "v1_2"], "k2": ["v2"]}, "k1=v1_1&k1=v1_2&k2=v2"),
        ({"k1": ["v1_2", "v1_1"], "k2": ["v2"]}, "k1=v1_1&k1=v1_2&k2=v2"),
        ({"k1": ["v1"], "k2": ["v2"], "k3": ["v3"]}, "k1=v1&k2=v2&k3=v3"),
        ({"k1": ["v1"], "k2": ["v2_2", "v2_1"], "k3": ["v3_2", "v3_1"]}, "k1=v1&k2=v2_1&k2=v2_2&k3=v3_1&k3=v3_2"),
        ({"k": ["v4", "v3", "v2", "v1"]}, "k=v1&k=v2&k=v3&k=v4"),
        ({"b": ["2", "1"], "a": ["3"]}, "a=3&b=1&b=2"),
    ],
)
def test_encode_query(params, encoded):
    assert encode_query(params) == encoded


class TestEncodeQuery:
    """Escaping and order independence."""

    def test_escapes_like_form_encoding(self):
        assert encode_query({"q": ["a b"]}) == "q=a+b"
        assert encode_query({"a&b": ["c=d"]}) == "a%26b=c%3Dd"
        assert encode_query({"path": ["/x/y"]}) == "path=%2Fx%2Fy"
        assert encode_query({"safe": ["-_.~"]}) == "safe=-_.~"

    def test_escapes_unicode_as_utf8(self):
        assert encode_query({"name": ["é"]}) == "name=%C3%A9"

    def test_blank_value(self):
        assert encode_query({"flag": [""]}) == "flag="

    def test_order_independent(self):
        items = [("k2", "b"), ("k1", "z"), ("k2", "a"), ("k1", "y"), ("k3", "")]
        expected = "k1=y&k1=z&k2=a&k2=b&k3="
        for permutation in itertools.permutations(items):
            assert encode_query(query_from_items(permutation)) == expected

    def test_does_not_mutate_input(self):
        params = {"b": ["2", "1"], "a": ["3"]}
        encode_query(params)
        assert params == {"b": ["2", "1"], "a": ["3"]}


class TestParseQuery:

    def test_duplicate_keys(self):
        assert parse_query("a=1&b=2&a=0") == {"a": ["1", "0"], "b": ["2"]}

    def test_blank_values_kept(self):
        assert parse_query("a=&b") == {"a": [""], "b": [""]}

    def test_bytes_and_escapes(self):
        assert parse_query(b"q=a+b&x=%2F") == {"q": ["a b"], "x": ["/"]}

    def test_empty(self):
        assert parse_query("") == {}

    def test_reordered_query_strings_encode_identically(self):
        first = encode_query(parse_query("k1=v1&k1=v2&k2=v"))
        second = encode_query(parse_query("k2=v&k1=v2&k1=v1"))
        assert first == second == "k1=v1&k1=v2&k2=v"

    def test_invalid_utf8_preserved(self):
        assert encode_query(parse_query("x=%FF")) == "x=%FF"
        assert encode_query(parse_query(b"x=%80%FE")) == "x=%80%FE"
        assert parse_query("x=%FE") != parse_query("x=%FF")

    def test_utf8_escapes_decoded(self):
        assert parse_query("name=%C3%A9") == {"name": ["\u00e9"]}
        assert encode_query(parse_query("name=%C3%A9")) == "name=%C3%A9"

    def test_values_sorted_by_raw_bytes(self):
        # U+E000 is EE 80 80 in UTF-8, which sorts before a raw FF byte
        assert encode_query(parse_query("x=%FF&x=%EE%80%80")) == "x=%EE%80%80&x=%FF"


class TestCreateCanonicalMessage:

    def test_concrete_scenario(self):
        message = create_canonical_message(
            "GET", "example.com", "/r", {"b": ["2", "1"], "a": ["3"]}, "2024-01-01T00:00:00Z"
        )
        assert message == b"GETexample.com/ra=3&b=1&b=22024-01-01T00:00:00Z"

    def test_empty_path_and_query(self):
        message = create_canonical_message("GET", "example.com", "", {}, "2024-01-01T00:00:00Z")
        assert message == b"GETexample.com/2024-01-01T00:00:00Z"

    def test_accepts_encoded_query(self):
        message = create_canonical_message("POST", "h:8080", "/p", "a=1", "t")
        assert message == b"POSTh:8080/pa=1t"

    def test_method_not_case_folded(self):
        lower = create_canonical_message("get", "h", "/", {}, "t")
        upper = create_canonical_message("GET", "h", "/", {}, "t")
        assert lower != upper

    def test_escaped_path_kept_verbatim(self):
        message = create_canonical_message("GET", "h", "/a%20b", {}, "t")
        assert message == b"GETh/a%20bt"
