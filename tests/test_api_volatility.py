"""Tests for the /rolling_volatility and / endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from core.config import VolatilityConfig, get_config
from core.indicators.parkinson import InvalidPriceError, NonPositivePriceError
from core.market_data.errors import (
    UpstreamProtocolError,
    UpstreamStatusError,
    UpstreamTransportError,
)

TEST_CONFIG = VolatilityConfig(base_url="http://bybit.test", timeout_seconds=1.0)


@pytest.fixture
def client():
    """Create a test client with a fixed config."""
    from api.main import app

    app.dependency_overrides[get_config] = lambda: TEST_CONFIG
    yield TestClient(app)
    app.dependency_overrides.clear()


def _patch_session(mock_session_class, payload):
    mock_response = MagicMock()
    mock_response.json.return_value = payload
    mock_session = MagicMock()
    mock_session.get.return_value = mock_response
    mock_session_class.return_value = mock_session
    return mock_session


@patch("core.market_data.bybit_provider.requests.Session")
def test_rolling_volatility_end_to_end(mock_session_class, client, kline_payload):
    mock_session = _patch_session(mock_session_class, kline_payload)

    response = client.get("/rolling_volatility", params={"window": 2, "limit": 3})

    assert response.status_code == 200
    data = response.json()
    assert [row[0] for row in data] == [1704153600000, 1704240000000]
    assert all(isinstance(row[1], float) and row[1] > 0 for row in data)

    _, kwargs = mock_session.get.call_args
    assert kwargs["params"] == {"symbol": "BTCUSDT", "interval": "D", "limit": "3"}
    assert kwargs["timeout"] == 1.0


@patch("core.market_data.bybit_provider.requests.Session")
def test_rolling_volatility_default_window_with_few_candles_is_empty(mock_session_class, client, kline_payload):
    _patch_session(mock_session_class, kline_payload)

    response = client.get("/rolling_volatility")

    assert response.status_code == 200
    assert response.json() == []


@patch("api.routes.volatility.compute_rolling_volatility")
def test_rolling_volatility_passes_query_params(mock_compute, client):
    mock_compute.return_value = []

    response = client.get(
        "/rolling_volatility",
        params={"symbol": "ETHUSDT", "interval": "60", "limit": 500, "window": 14},
    )

    assert response.status_code == 200
    args, kwargs = mock_compute.call_args
    assert args == ("ETHUSDT", "60", 500, 14)
    assert kwargs["config"] is TEST_CONFIG


@patch("api.routes.volatility.compute_rolling_volatility")
def test_rolling_volatility_omitted_params_are_none(mock_compute, client):
    mock_compute.return_value = []

    client.get("/rolling_volatility")

    args, _ = mock_compute.call_args
    assert args == (None, None, None, None)


@pytest.mark.parametrize(
    "params",
    [
        {"limit": 0},
        {"limit": 1001},
        {"window": 0},
        {"limit": "abc"},
    ],
)
def test_rolling_volatility_query_validation(client, params):
    response = client.get("/rolling_volatility", params=params)

    assert response.status_code == 422


@pytest.mark.parametrize(
    "error, status, code",
    [
        (UpstreamTransportError("connection refused"), 502, "upstream_unavailable"),
        (UpstreamTransportError("timed out", timed_out=True), 504, "upstream_timeout"),
        (UpstreamProtocolError("not JSON"), 502, "upstream_protocol_error"),
        (UpstreamStatusError(10001, "params error"), 502, "upstream_protocol_error"),
        (ValueError("Unsupported interval for Bybit: '2h'"), 400, "invalid_request"),
        (NonPositivePriceError("high and low must be > 0"), 500, "invalid_price_data"),
        (InvalidPriceError("high must be >= low"), 500, "invalid_price_data"),
    ],
)
@patch("api.routes.volatility.compute_rolling_volatility")
def test_rolling_volatility_error_mapping(mock_compute, client, error, status, code):
    mock_compute.side_effect = error

    response = client.get("/rolling_volatility")

    assert response.status_code == status
    detail = response.json()["detail"]
    assert detail["error"] == code
    assert detail["message"] == str(error)


@patch("core.market_data.bybit_provider.requests.Session")
def test_rolling_volatility_upstream_status_failure(mock_session_class, client, kline_payload):
    """retCode != 0 must fail the request, never return an empty series."""
    kline_payload["retCode"] = 10001
    kline_payload["retMsg"] = "params error: symbol invalid"
    _patch_session(mock_session_class, kline_payload)

    response = client.get("/rolling_volatility")

    assert response.status_code == 502
    assert "retCode=10001" in response.json()["detail"]["message"]


@patch("core.market_data.bybit_provider.requests.Session")
def test_rolling_volatility_inverted_upstream_candle_is_server_error(mock_session_class, client):
    """A corrupt upstream row is not the caller's fault."""
    payload = {
        "retCode": 0,
        "retMsg": "OK",
        "result": {"symbol": "BTCUSDT", "category": "spot", "list": [["1704067200000", "100", "90", "100", "95", "1", "1"]]},
    }
    _patch_session(mock_session_class, payload)

    response = client.get("/rolling_volatility", params={"window": 1})

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "invalid_price_data"
    assert "high must be >= low" in detail["message"]


@pytest.mark.parametrize("params", [{"symbol": ""}, {"interval": ""}])
@patch("core.market_data.bybit_provider.requests.Session")
def test_rolling_volatility_empty_param_is_bad_request(mock_session_class, client, params):
    response = client.get("/rolling_volatility", params=params)

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "invalid_request"
    mock_session_class.return_value.get.assert_not_called()


@patch("core.market_data.bybit_provider.requests.Session")
def test_rolling_volatility_upstream_unreachable(mock_session_class, client):
    mock_session = MagicMock()
    mock_session.get.side_effect = requests.ConnectionError("Name or service not known")
    mock_session_class.return_value = mock_session

    response = client.get("/rolling_volatility")

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == "upstream_unavailable"


@patch("api.routes.volatility.compute_rolling_volatility")
def test_unexpected_error_returns_generic_500(mock_compute):
    from api.main import app

    mock_compute.side_effect = KeyError("boom")
    app.dependency_overrides[get_config] = lambda: TEST_CONFIG
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/rolling_volatility")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {
        "error": "internal_server_error",
        "message": "An unexpected error occurred",
    }


def test_chart_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    body = response.text
    assert "<title>Rolling Parkinson's Volatility</title>" in body
    assert "7-Day Rolling Parkinson's Volatility" in body
    assert "fetch('/rolling_volatility')" in body
    assert "uPlot" in body


def test_chart_page_reflects_config():
    from api.main import app

    app.dependency_overrides[get_config] = lambda: VolatilityConfig(interval="60", window=24)
    try:
        response = TestClient(app).get("/")
    finally:
        app.dependency_overrides.clear()

    assert "24-Period Rolling Parkinson's Volatility" in response.text


def test_window_label():
    from api.routes.chart import window_label

    assert window_label(7, "D") == "7-Day"
    assert window_label(7, "1d") == "7-Day"
    assert window_label(12, "60") == "12-Period"
