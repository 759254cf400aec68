"""
Tests for Router registration and dispatch.

Tests key router functionality including:
- registration shortcuts and the route decorator
- dispatch to the first matching handler, exactly once
- parameters visible to handlers through get_param()
- the 404 response when nothing matches
- handler exceptions propagating to the caller
- freezing the route table when a server is built
"""

from unittest.mock import Mock, patch

import pytest

from pathmux import (
    MuxConfig,
    Request,
    RouteTableFrozenError,
    Router,
    ServerStartupError,
    get_param,
)
from pathmux.http import NOT_FOUND_BODY
from pathmux.testing import ResponseRecorder, dispatch


def echo_params(request, writer):
    writer.json(dict(request.params))


@pytest.mark.unit
class TestRegistration:
    """Test route registration."""

    @pytest.mark.parametrize(
        "shortcut,method",
        [
            ("get", "GET"),
            ("post", "POST"),
            ("put", "PUT"),
            ("patch", "PATCH"),
            ("delete", "DELETE"),
            ("head", "HEAD"),
            ("options", "OPTIONS"),
        ],
    )
    def test_method_shortcuts(self, shortcut, method):
        router = Router()

        route = getattr(router, shortcut)("/x", echo_params)

        assert route.method == method
        assert router.routes == (route,)

    def test_register_custom_method(self):
        router = Router()

        route = router.register("PURGE", "/cache/:key", echo_params)

        assert route.method == "PURGE"

    def test_route_decorator_returns_handler(self):
        router = Router()

        @router.route("GET", "/health")
        def health(request, writer):
            writer.text("ok")

        assert callable(health)
        assert router.routes[0].handler is health

    def test_registration_is_logged_at_trace(self, root_lg, log_stream):
        router = Router(root_lg)

        router.get("/users/:id", echo_params)

        output = log_stream.getvalue()
        assert "registered route" in output
        assert "[pattern:/users/:id]" in output
        assert "[handler:echo_params]" in output

    def test_repr(self):
        router = Router()
        router.get("/x", echo_params)

        assert repr(router) == "<Router routes=1 frozen=False>"


@pytest.mark.unit
class TestDispatch:
    """Test Router.dispatch()."""

    def test_handler_sees_params(self):
        router = Router()
        seen = {}

        def show_user(request, writer):
            seen["id"] = get_param(request, "id")
            writer.text("ok")

        router.get("/users/:id", show_user)

        recorder, route = dispatch(router, "GET", "/users/123")

        assert seen == {"id": "123"}
        assert route is router.routes[0]
        assert recorder.status == 200
        assert recorder.text() == "ok"

    def test_two_params(self):
        router = Router()
        router.get("/users/:userId/posts/:postId", echo_params)

        recorder, _ = dispatch(router, "GET", "/users/7/posts/99")

        assert recorder.json() == {"userId": "7", "postId": "99"}

    def test_trailing_slash(self):
        router = Router()
        router.get("/users/:id", echo_params)

        recorder, _ = dispatch(router, "GET", "/users/42/")

        assert recorder.json() == {"id": "42"}

    def test_leading_double_slash(self):
        router = Router()
        router.get("/users/:id", echo_params)

        recorder, route = dispatch(router, "GET", "//users/42")

        assert route is router.routes[0]
        assert recorder.json() == {"id": "42"}

    def test_query_string_does_not_affect_matching(self):
        router = Router()
        router.get("/users/:id", echo_params)

        recorder, _ = dispatch(router, "GET", "/users/42?expand=1")

        assert recorder.json() == {"id": "42"}

    def test_handler_called_exactly_once(self):
        router = Router()
        handler = Mock()
        router.get("/users/:id", handler)
        router.get("/posts/:id", handler)

        dispatch(router, "GET", "/users/1")

        handler.assert_called_once()
        request, _ = handler.call_args.args
        assert request.params == {"id": "1"}

    def test_first_registered_wins(self):
        """Test /posts/5 reaches the /users/:id handler registered first."""
        router = Router()
        users = Mock()
        posts = Mock()
        router.get("/users/:id", users)
        router.get("/posts/:id", posts)

        dispatch(router, "GET", "/posts/5")

        users.assert_called_once()
        posts.assert_not_called()
        assert users.call_args.args[0].params == {"id": "5"}

    def test_literal_segments(self):
        router = Router(literal_segments=True)
        users = Mock()
        posts = Mock()
        router.get("/users/:id", users)
        router.get("/posts/:id", posts)

        dispatch(router, "GET", "/posts/5")

        users.assert_not_called()
        posts.assert_called_once()
        assert router.literal_segments is True

    def test_no_match_writes_404(self):
        router = Router()
        handler = Mock()
        router.get("/users/:id", handler)

        recorder, route = dispatch(router, "GET", "/users")

        assert route is None
        handler.assert_not_called()
        assert recorder.status == 404
        assert recorder.text() == NOT_FOUND_BODY

    def test_wrong_method_is_404(self):
        router = Router()
        router.get("/users/:id", echo_params)

        recorder, route = dispatch(router, "POST", "/users/1")

        assert route is None
        assert recorder.status == 404

    def test_no_routes_is_404(self):
        recorder, route = dispatch(Router(), "GET", "/")

        assert route is None
        assert recorder.status == 404

    def test_404_is_logged_at_debug(self, root_lg, log_stream):
        router = Router(root_lg)

        dispatch(router, "GET", "/nothing")

        output = log_stream.getvalue()
        assert "no route matched" in output
        assert "[path:/nothing]" in output

    def test_original_request_is_not_mutated(self):
        router = Router()
        router.get("/users/:id", echo_params)
        request = Request.from_target("GET", "/users/1")
        recorder = ResponseRecorder()

        router.dispatch(request, recorder.writer())

        assert request.params is None

    def test_handler_exception_propagates(self):
        router = Router()

        def broken(request, writer):
            raise RuntimeError("boom")

        router.get("/broken", broken)
        recorder = ResponseRecorder()

        with pytest.raises(RuntimeError, match="boom"):
            router.dispatch(Request.from_target("GET", "/broken"), recorder.writer())

        assert recorder.status is None

    def test_handler_writing_nothing_gets_empty_200(self):
        router = Router()
        router.get("/noop", lambda request, writer: None)

        recorder, _ = dispatch(router, "GET", "/noop")

        assert recorder.status == 200
        assert recorder.body == b""

    def test_match_reports_route_and_params(self):
        router = Router()
        router.get("/users/:id", echo_params)

        result = router.match("GET", "/users/9")

        assert result is not None
        assert result.route.pattern == "/users/:id"
        assert result.params == {"id": "9"}
        assert router.match("GET", "/") is None


@pytest.mark.unit
class TestServing:
    """Test server construction and table freezing."""

    def test_server_freezes_table(self):
        router = Router()
        router.get("/x", echo_params)

        server = router.server("127.0.0.1:0")
        try:
            assert router.table.frozen is True
            with pytest.raises(RouteTableFrozenError):
                router.get("/y", echo_params)
        finally:
            server.close()

    def test_server_is_bound(self):
        router = Router()

        server = router.server("127.0.0.1:0")
        try:
            host, port = server.server_address
            assert host == "127.0.0.1"
            assert port > 0
        finally:
            server.close()

    def test_invalid_address(self):
        with pytest.raises(ServerStartupError):
            Router().server("no-port")

    def test_start_runs_server(self):
        router = Router()

        with patch("pathmux.router.Server") as server_class:
            server_class.return_value.bind.return_value.run.return_value = 0
            assert router.start(":8080") == 0

        args = server_class.call_args.args
        assert args[1] == ":8080"
        assert args[2] is router
        assert router.table.frozen is True


@pytest.mark.unit
class TestFromConfig:
    def test_literal_segments_from_config(self):
        router = Router.from_config(MuxConfig(literal_segments=True))

        assert router.literal_segments is True

    def test_logger_is_kept(self, root_lg):
        router = Router.from_config(MuxConfig(), root_lg)

        assert router.lg is root_lg

    def test_default_logger_is_silent(self, capsys):
        router = Router()
        router.get("/x", echo_params)
        dispatch(router, "GET", "/missing")

        assert router.lg.disabled is True
        assert capsys.readouterr().out == ""
