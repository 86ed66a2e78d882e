"""Tests for the Starlette request and route inspectors."""

import pytest
from pydantic import BaseModel
from starlette.endpoints import HTTPEndpoint
from starlette.requests import Request

from webquark.kernel.exceptions import ConfigurationException
from webquark.web.adapters.starlette import (
    StarletteHttpContext,
    StarletteRequestInspector,
    StarletteRouteInspector,
)
from webquark.web.adapters.wsgi import WsgiHttpContext
from webquark.web.context import ContextAccessor


class Order(BaseModel):
    sku: str
    quantity: int


def _make_request(
    *,
    method: str = "GET",
    path: str = "/orders/7",
    root_path: str = "",
    path_params: dict | None = None,
    query_string: bytes = b"",
    headers: list | None = None,
    client: tuple | None = ("10.0.0.5", 52100),
    scheme: str = "http",
    body: bytes | None = None,
    extra: dict | None = None,
) -> Request:
    scope = {
        "type": "http",
        "method": method,
        "scheme": scheme,
        "server": ("testserver", 80),
        "path": path,
        "root_path": root_path,
        "path_params": path_params or {},
        "query_string": query_string,
        "headers": headers or [],
        "client": client,
    }
    scope.update(extra or {})
    if body is not None:
        async def receive():
            return {"type": "http.request", "body": body, "more_body": False}
        return Request(scope, receive)
    return Request(scope)


def _accessor(request: Request) -> ContextAccessor:
    return ContextAccessor(StarletteHttpContext(request))


class TestConstruction:
    def test_requires_accessor(self):
        with pytest.raises(ConfigurationException):
            StarletteRequestInspector(None)

    def test_rejects_other_host_context(self):
        with pytest.raises(ConfigurationException):
            StarletteRequestInspector(ContextAccessor(WsgiHttpContext({})))


class TestHeaders:
    def test_lookup_is_case_insensitive(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(headers=[(b"content-type", b"text/html")])))
        assert inspector.has_header("content-type") == inspector.has_header("Content-Type")
        assert inspector.get_header("CONTENT-TYPE") == "text/html"
        assert inspector.get_content_type() == "text/html"

    def test_missing_header(self):
        inspector = StarletteRequestInspector(_accessor(_make_request()))
        assert inspector.get_header("X-Nope") is None
        assert not inspector.has_header("X-Nope")

    def test_repeated_headers_are_joined(self):
        headers = [(b"accept", b"text/html"), (b"accept", b"application/json")]
        inspector = StarletteRequestInspector(_accessor(_make_request(headers=headers)))
        assert inspector.get_header("Accept") == "text/html,application/json"
        assert inspector.get_all_headers()["accept"] == "text/html,application/json"

    def test_user_agent_and_ajax(self):
        headers = [(b"user-agent", b"pytest/1.0"), (b"x-requested-with", b"xmlhttprequest")]
        inspector = StarletteRequestInspector(_accessor(_make_request(headers=headers)))
        assert inspector.get_user_agent() == "pytest/1.0"
        assert inspector.is_ajax_request()

    def test_not_ajax_by_default(self):
        assert not StarletteRequestInspector(_accessor(_make_request())).is_ajax_request()


class TestQueryAndCookies:
    def test_query_strings(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(query_string=b"page=2&q=a+b&page=3")))
        assert inspector.get_query_string("q") == "a b"
        assert inspector.get_query_string("page") == "3"
        assert inspector.get_query_string("missing", "x") == "x"
        assert inspector.get_all_query_strings() == {"page": "3", "q": "a b"}

    def test_cookies(self):
        headers = [(b"cookie", b"session=abc; theme=dark")]
        inspector = StarletteRequestInspector(_accessor(_make_request(headers=headers)))
        assert inspector.get_cookie("theme") == "dark"
        assert inspector.has_cookie("session")
        assert not inspector.has_cookie("other")
        assert inspector.get_all_cookies() == {"session": "abc", "theme": "dark"}


class TestClientAddress:
    def test_peer_address_wins(self):
        headers = [(b"x-forwarded-for", b"203.0.113.9")]
        inspector = StarletteRequestInspector(_accessor(_make_request(headers=headers)))
        assert inspector.get_client_ip_address() == "10.0.0.5"

    def test_forwarded_for_when_no_peer(self):
        headers = [(b"x-forwarded-for", b" 203.0.113.9 , 10.0.0.1")]
        inspector = StarletteRequestInspector(_accessor(_make_request(client=None, headers=headers)))
        assert inspector.get_client_ip_address() == "203.0.113.9"

    def test_unknown(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(client=None)))
        assert inspector.get_client_ip_address() is None


class TestBody:
    @pytest.mark.asyncio
    async def test_body_can_be_read_twice(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(method="POST", body=b"hello")))
        assert await inspector.get_body_as_string() == "hello"
        assert await inspector.get_body_as_string() == "hello"

    @pytest.mark.asyncio
    async def test_json_into_model(self):
        request = _make_request(method="POST", body=b'{"sku": "A-1", "quantity": 2}')
        inspector = StarletteRequestInspector(_accessor(request))
        assert await inspector.get_body_as_json(Order) == Order(sku="A-1", quantity=2)

    @pytest.mark.asyncio
    async def test_json_without_type(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(method="POST", body=b"[1, 2]")))
        assert await inspector.get_body_as_json() == [1, 2]

    @pytest.mark.asyncio
    async def test_invalid_json_returns_default(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(method="POST", body=b"{oops")))
        assert await inspector.get_body_as_json(Order, default="none") == "none"

    @pytest.mark.asyncio
    async def test_type_without_schema_returns_default(self):
        class Untyped:
            def __init__(self, sku: str) -> None:
                self.sku = sku

        inspector = StarletteRequestInspector(_accessor(_make_request(method="POST", body=b'{"sku": "A-1"}')))
        assert await inspector.get_body_as_json(Untyped, default="none") == "none"

    @pytest.mark.asyncio
    async def test_empty_body_returns_default(self):
        inspector = StarletteRequestInspector(_accessor(_make_request(method="POST", body=b"")))
        assert await inspector.get_body_as_json(default={}) == {}

    def test_http_method(self):
        assert StarletteRequestInspector(_accessor(_make_request(method="PATCH"))).get_http_method() == "PATCH"


class TestRouteInspector:
    def test_route_values_are_stringified(self):
        request = _make_request(path_params={"id": 7, "area": "admin"})
        route = StarletteRouteInspector(_accessor(request))
        assert route.get_route_value("id") == "7"
        assert route.get_route_value("missing") is None
        assert route.get_area_name() == "admin"
        assert route.get_all_route_values() == {"id": 7, "area": "admin"}

    def test_controller_and_action_from_route_values(self):
        request = _make_request(path_params={"controller": "orders", "action": "show"})
        route = StarletteRouteInspector(_accessor(request))
        assert route.get_controller_name() == "orders"
        assert route.get_action_name() == "show"

    def test_function_endpoint(self):
        async def list_orders(request):  # noqa: ANN001
            return None

        route = StarletteRouteInspector(_accessor(_make_request(extra={"endpoint": list_orders})))
        assert route.get_controller_name() is None
        assert route.get_action_name() == "list_orders"

    def test_http_endpoint_class(self):
        class OrderEndpoint(HTTPEndpoint):
            async def get(self, request):  # noqa: ANN001
                return None

        route = StarletteRouteInspector(_accessor(_make_request(method="GET", extra={"endpoint": OrderEndpoint})))
        assert route.get_controller_name() == "OrderEndpoint"
        assert route.get_action_name() == "get"

    def test_bound_method_endpoint(self):
        class OrderController:
            async def show(self, request):  # noqa: ANN001
                return None

        endpoint = OrderController().show
        route = StarletteRouteInspector(_accessor(_make_request(extra={"endpoint": endpoint})))
        assert route.get_controller_name() == "OrderController"
        assert route.get_action_name() == "show"

    def test_no_endpoint(self):
        route = StarletteRouteInspector(_accessor(_make_request()))
        assert route.get_controller_name() is None
        assert route.get_action_name() is None

    def test_paths(self):
        route = StarletteRouteInspector(_accessor(_make_request(path="/api/orders/7", root_path="/api")))
        assert route.get_request_path() == "/orders/7"
        assert route.get_base_path() == "/api"

    def test_url_parts(self):
        request = _make_request(
            scheme="https",
            path="/orders/7",
            query_string=b"x=1",
            headers=[(b"host", b"shop.example.com:8443")],
        )
        route = StarletteRouteInspector(_accessor(request))
        assert route.get_request_scheme() == "https"
        assert route.get_host() == "shop.example.com"
        assert route.get_port() == 8443
        assert route.get_full_url() == "https://shop.example.com:8443/orders/7?x=1"

    def test_port_is_none_without_explicit_port(self):
        request = _make_request(headers=[(b"host", b"shop.example.com")])
        assert StarletteRouteInspector(_accessor(request)).get_port() is None
