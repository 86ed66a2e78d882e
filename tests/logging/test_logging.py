"""Tests for the logging port and its structlog adapter."""

import logging
from typing import Any
from wsgiref.util import setup_testing_defaults

import structlog

from webquark.core.config import Config
from webquark.logging import LoggingPort, StructlogAdapter, redact_sensitive
from webquark.logging.structlog_adapter import REDACTED
from webquark.web.adapters.wsgi import WsgiHttpContext, WsgiRequestInspector, WsgiRouteInspector
from webquark.web.context import ContextAccessor


class TestLoggingPort:
    def test_adapter_conforms(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_partial_implementation_does_not_conform(self):
        class OnlyGetLogger:
            def get_logger(self, name: str) -> Any:
                return None

        assert not isinstance(OnlyGetLogger(), LoggingPort)


class TestRedaction:
    def test_sensitive_keys_are_masked(self):
        event = {"event": "login", "Authorization": "Bearer x", "encryption_key": "k", "user": "ada"}
        result = redact_sensitive(None, "info", event)
        assert result["Authorization"] == REDACTED
        assert result["encryption_key"] == REDACTED
        assert result["user"] == "ada"


class TestStructlogAdapterConfigure:
    def test_defaults_from_framework_config(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.defaults())
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"
        assert adapter._module_levels == {}

    def test_json_format_and_levels(self):
        adapter = StructlogAdapter()
        config = Config(
            {"webquark": {"logging": {"format": "JSON", "level": {"root": "warning", "webquark.session": "debug"}}}}
        )
        adapter.configure(config)
        assert adapter._format == "json"
        assert adapter._root_level == "WARNING"
        assert adapter._module_levels == {"webquark.session": "DEBUG"}
        assert logging.getLogger("webquark.session").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_get_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("webquark.web")
        assert callable(getattr(logger, "info", None))

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("webquark.web", "ERROR")
        assert logging.getLogger("webquark.web").level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self):
        adapter = StructlogAdapter()
        adapter.set_level("webquark.crypto", "chatty")
        assert logging.getLogger("webquark.crypto").level == logging.INFO

    def teardown_method(self):
        structlog.reset_defaults()
        logging.getLogger().setLevel(logging.WARNING)
        for name in ("webquark.session", "webquark.web", "webquark.crypto"):
            logging.getLogger(name).setLevel(logging.NOTSET)


class TestRequestContext:
    def test_bind_and_clear_request(self):
        environ = {"REQUEST_METHOD": "POST", "PATH_INFO": "/orders", "REMOTE_ADDR": "10.1.2.3"}
        setup_testing_defaults(environ)
        accessor = ContextAccessor(WsgiHttpContext(environ))
        adapter = StructlogAdapter()

        adapter.bind_request(WsgiRequestInspector(accessor), WsgiRouteInspector(accessor))
        try:
            bound = structlog.contextvars.get_contextvars()
            assert bound["http_method"] == "POST"
            assert bound["path"] == "/orders"
            assert bound["client_ip"] == "10.1.2.3"
        finally:
            adapter.clear_request()

        assert "http_method" not in structlog.contextvars.get_contextvars()
