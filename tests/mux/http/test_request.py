"""
Tests for the immutable Request.
"""

import dataclasses

import pytest

from pathmux.http import Request
from pathmux.routing import Params


@pytest.mark.unit
class TestFromTarget:
    """Test Request.from_target()."""

    def test_plain_path(self):
        request = Request.from_target("GET", "/users/42")

        assert request.method == "GET"
        assert request.path == "/users/42"
        assert request.target == "/users/42"
        assert request.params is None

    def test_query_string_is_dropped(self):
        request = Request.from_target("GET", "/users/42?expand=posts&x=1")

        assert request.path == "/users/42"
        assert request.target == "/users/42?expand=posts&x=1"

    def test_path_is_percent_decoded(self):
        request = Request.from_target("GET", "/users/j%C3%BCrgen")

        assert request.path == "/users/jürgen"

    def test_double_slash_target_is_a_path(self):
        request = Request.from_target("GET", "//users/42?x=1")

        assert request.path == "//users/42"

    def test_absolute_form_target(self):
        request = Request.from_target("GET", "http://example.com/users/42?x=1")

        assert request.path == "/users/42"

    def test_fragment_is_dropped(self):
        assert Request.from_target("GET", "/users/42#top").path == "/users/42"

    def test_empty_target_becomes_root(self):
        assert Request.from_target("GET", "").path == "/"

    def test_method_case_is_preserved(self):
        assert Request.from_target("get", "/").method == "get"

    def test_header_names_are_lower_cased(self):
        request = Request.from_target(
            "GET", "/", headers={"Content-Type": "application/json", "X-Id": "1"}
        )

        assert request.headers == {"content-type": "application/json", "x-id": "1"}

    def test_headers_from_pairs(self):
        request = Request.from_target("GET", "/", headers=[("Host", "a"), ("HOST", "b")])

        assert request.headers == {"host": "b"}

    def test_body_and_client(self):
        request = Request.from_target(
            "POST", "/users", body=b"{}", client=("127.0.0.1", 5000)
        )

        assert request.body == b"{}"
        assert request.client == ("127.0.0.1", 5000)


@pytest.mark.unit
class TestRequest:
    """Test Request accessors and immutability."""

    def test_is_frozen(self):
        request = Request(method="GET", path="/")

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.path = "/x"  # type: ignore[misc]

    def test_with_params_returns_copy(self):
        request = Request.from_target("GET", "/users/1")
        params = Params({"id": "1"})

        bound = request.with_params(params)

        assert bound is not request
        assert bound.params == params
        assert request.params is None
        assert bound.path == request.path

    def test_header_lookup_is_case_insensitive(self):
        request = Request.from_target("GET", "/", headers={"X-Token": "abc"})

        assert request.header("x-token") == "abc"
        assert request.header("X-TOKEN") == "abc"
        assert request.header("missing") is None
        assert request.header("missing", "d") == "d"

    def test_content_type(self):
        request = Request.from_target("POST", "/", headers={"Content-Type": "text/plain"})

        assert request.content_type == "text/plain"

    def test_text(self):
        assert Request(method="POST", path="/", body="hé".encode()).text() == "hé"
