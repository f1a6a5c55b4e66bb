"""Tests for gamepick.relay (RelayClient)."""

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from gamepick.errors import RelayError
from gamepick.relay import RelayClient, mask_key

_TARGET = "https://api.steampowered.com/X/?key=abc&steamid=1"


def _response(status: int = 200, payload=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    resp.json.return_value = payload
    return resp


class TestRelayClientInit:
    def test_empty_base_url_raises(self):
        with pytest.raises(ValueError):
            RelayClient("")


class TestBuildUrl:
    def test_raw_appends_target(self):
        client = RelayClient("https://relay.example/raw?url=")
        assert client.build_url(_TARGET) == "https://relay.example/raw?url=" + _TARGET

    def test_encoded_quotes_target(self):
        client = RelayClient("https://relay.example/?", encode=True)
        url = client.build_url(_TARGET)
        assert url == (
            "https://relay.example/?"
            "https%3A%2F%2Fapi.steampowered.com%2FX%2F%3Fkey%3Dabc%26steamid%3D1"
        )


class TestRelay:
    def test_debug_log_hides_key_when_encoded(self, caplog):
        client = RelayClient("https://relay.example/?", encode=True)
        resp = _response(payload={})
        with caplog.at_level(logging.DEBUG, logger="gamepick.relay"):
            with patch.object(client._session, "get", return_value=resp):
                client.relay("https://api.steampowered.com/X/?key=SECRETKEY&steamid=1")
        assert "SECRETKEY" not in caplog.text
        assert "key=***" in caplog.text

    def test_returns_json_on_success(self):
        client = RelayClient("https://relay.example/raw?url=")
        resp = _response(payload={"response": {}})
        with patch.object(client._session, "get", return_value=resp) as get:
            assert client.relay(_TARGET) == {"response": {}}
        get.assert_called_once_with(
            "https://relay.example/raw?url=" + _TARGET, timeout=client.timeout
        )

    def test_non_2xx_raises_with_status_and_body(self):
        client = RelayClient()
        resp = _response(status=403, text="Forbidden")
        with patch.object(client._session, "get", return_value=resp):
            with pytest.raises(RelayError) as info:
                client.relay(_TARGET)
        assert info.value.status_code == 403
        assert info.value.body == "Forbidden"
        assert info.value.network_failure is False

    @pytest.mark.parametrize(
        "exc",
        [
            requests.ConnectionError("refused"),
            requests.Timeout("slow"),
        ],
    )
    def test_transport_failure(self, exc):
        client = RelayClient()
        with patch.object(client._session, "get", side_effect=exc):
            with pytest.raises(RelayError) as info:
                client.relay(_TARGET)
        assert info.value.network_failure is True
        assert info.value.status_code is None

    def test_invalid_json_raises(self):
        client = RelayClient()
        resp = _response(status=200, text="<html>")
        resp.json.side_effect = ValueError("no json")
        with patch.object(client._session, "get", return_value=resp):
            with pytest.raises(RelayError) as info:
                client.relay(_TARGET)
        assert info.value.status_code == 200


class TestMaskKey:
    def test_masks_key_value(self):
        assert mask_key(_TARGET) == "https://api.steampowered.com/X/?key=***&steamid=1"

    def test_masks_encoded_key_value(self):
        encoded = "https%3A%2F%2Fapi.steampowered.com%2FX%2F%3Fkey%3Dabc%26steamid%3D1"
        assert mask_key(encoded) == (
            "https%3A%2F%2Fapi.steampowered.com%2FX%2F%3Fkey%3D***%26steamid%3D1"
        )

    def test_leaves_other_urls(self):
        assert mask_key("https://example.com/?a=1") == "https://example.com/?a=1"
