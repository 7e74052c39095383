# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx

from fluenthttp import Client, config, log
from fluenthttp.config import DEFAULT_USER_AGENT
from fluenthttp.errors import (
    ContextCancelledError,
    DeadlineExceededError,
    ErrNotOK,
    ErrorCategory,
    FluentError,
    HTTPError,
    NotOKError,
    TransportError,
    categorize_exception,
    is_not_ok,
)
from fluenthttp.http.stub import StubTransport


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("FLUENTHTTP_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("FLUENTHTTP_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("FLUENTHTTP_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_HTTP_TIMEOUT", "not-a-number")
    settings = config.load_http_settings()
    assert settings.timeout == config.HttpSettings.timeout
    assert DEFAULT_USER_AGENT in settings.user_agent

    monkeypatch.setenv("FLUENTHTTP_HTTP_TIMEOUT", "-3")
    assert config.load_http_settings().timeout == config.HttpSettings.timeout


def test_http_settings_redirects_truthy_variants(monkeypatch):
    for value in ("1", "on", "YES", "true"):
        monkeypatch.setenv("FLUENTHTTP_HTTP_REDIRECTS", value)
        assert config.load_http_settings().allow_redirects is True


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("FLUENTHTTP_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_package_logger_is_silent_by_default():
    logger = logging.getLogger(log.LOGGER_NAME)
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_setup_logging_configures_package_logger_only(monkeypatch):
    monkeypatch.setattr(log, "_installed_handler", None)
    root_handlers = list(logging.getLogger().handlers)
    logger = logging.getLogger(log.LOGGER_NAME)
    first, second = ListHandler(), ListHandler()
    try:
        assert log.setup_logging("debug", first) is logger
        assert logger.level == logging.DEBUG
        Client(StubTransport()).get("https://x.test/")
        assert any(r.name == "fluenthttp.client" for r in first.records)

        log.setup_logging("nonsense", second)
        assert logger.level == logging.WARNING
        assert first not in logger.handlers
        assert second in logger.handlers
        assert logging.getLogger().handlers == root_handlers
    finally:
        logger.removeHandler(first)
        logger.removeHandler(second)
        logger.setLevel(logging.NOTSET)


def test_http_error_message_includes_body_when_present():
    err = HTTPError(404, "404 Not Found", "GET", "https://x.test/a", b'{"error":"not found"}')
    assert str(err) == 'GET https://x.test/a: 404 Not Found: {"error":"not found"}'
    assert str(HTTPError(502, "502 Bad Gateway", "POST", "https://x.test/b")) == "POST https://x.test/b: 502 Bad Gateway"


def test_not_ok_sentinel_matching():
    err = HTTPError(500, "500 Internal Server Error", "GET", "https://x.test/")
    assert ErrNotOK is NotOKError
    assert str(NotOKError()) == "invalid status code"
    assert is_not_ok(err)
    assert not is_not_ok(None)
    assert not is_not_ok(TransportError("boom"))

    wrapped = FluentError("while syncing")
    wrapped.__cause__ = err
    assert is_not_ok(wrapped)


def test_transport_error_wrap_keeps_cause():
    cause = httpx.ReadTimeout("slow")
    err = TransportError.wrap(cause)
    assert err.__cause__ is cause
    assert err.category == ErrorCategory.TIMEOUT
    assert "ReadTimeout" in str(err)


def test_categorize_exception():
    assert categorize_exception(httpx.ConnectTimeout("t")) == ErrorCategory.TIMEOUT
    assert categorize_exception(DeadlineExceededError("late")) == ErrorCategory.TIMEOUT
    assert categorize_exception(ContextCancelledError("stop")) == ErrorCategory.CANCELLED
    assert categorize_exception(httpx.ConnectError("c")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionRefusedError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError()) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror()) == ErrorCategory.DNS_ERROR
    assert categorize_exception(RuntimeError("x")) == ErrorCategory.UNKNOWN_ERROR
