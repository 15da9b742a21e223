#!/usr/bin/env python3

"""Unit tests for KlayClient with a mocked HTTP session"""

import json

import pytest
import requests
from unittest.mock import Mock

from klaytn_client.rpc import KlayClient
from klaytn_client.rpc.klay import _block_param
from klaytn_client.runtime.errors import ErrorCode, RpcError


class MockResponse:
    """Mock response for testing"""

    def __init__(self, status_code=200, json_data=None, reason="OK", raise_for_json=False):
        self.status_code = status_code
        self.reason = reason
        self._json_data = json_data
        self._raise_for_json = raise_for_json

    def json(self):
        if self._raise_for_json:
            raise json.JSONDecodeError("Invalid JSON", "", 0)
        return self._json_data


def make_client(response):
    session = Mock()
    session.post.return_value = response
    return KlayClient("http://localhost:8551/", session=session), session


def sent_payload(session):
    return session.post.call_args[1]["json"]


class TestKlayClient:

    def test_init(self):
        client = KlayClient("http://localhost:8551/")
        assert client.endpoint == "http://localhost:8551"
        assert client._timeout == 30.0
        client.close()

    def test_call_success(self):
        client, session = make_client(MockResponse(json_data={"jsonrpc": "2.0", "id": 1, "result": "0x2019"}))

        assert client.get_chain_id() == "0x2019"

        payload = sent_payload(session)
        assert payload["jsonrpc"] == "2.0"
        assert payload["method"] == "klay_chainID"
        assert payload["params"] == []
        assert "id" in payload
        assert session.post.call_args[0][0] == "http://localhost:8551"
        assert session.post.call_args[1]["timeout"] == 30.0
        assert session.post.call_args[1]["headers"] == {"Content-Type": "application/json"}

    def test_block_number_is_hex_encoded(self):
        client, session = make_client(MockResponse(json_data={"result": {"number": "0x10"}}))

        client.get_block_by_number(16, full_transactions=True)

        assert sent_payload(session)["method"] == "klay_getBlockByNumber"
        assert sent_payload(session)["params"] == ["0x10", True]

    def test_account_key_with_tag(self):
        client, session = make_client(MockResponse(json_data={"result": {"keyType": 1, "key": {}}}))

        result = client.get_account_key("0x" + "ab" * 20, "earliest")

        assert result == {"keyType": 1, "key": {}}
        assert sent_payload(session)["params"] == ["0x" + "ab" * 20, "earliest"]

    def test_send_raw_transaction(self):
        tx_hash = "0x" + "cd" * 32
        client, session = make_client(MockResponse(json_data={"result": tx_hash}))

        assert client.send_raw_transaction("0x08f8") == tx_hash
        assert sent_payload(session)["params"] == ["0x08f8"]

    def test_raw_call(self):
        client, session = make_client(MockResponse(json_data={"result": None}))

        assert client.call("klay_getTransactionByHash", ["0x00"]) is None
        assert sent_payload(session)["method"] == "klay_getTransactionByHash"

    def test_rpc_error(self):
        client, _ = make_client(MockResponse(json_data={
            "error": {"code": -32602, "message": "invalid argument 0", "data": "hex"},
        }))

        with pytest.raises(RpcError) as exc_info:
            client.get_balance("0x" + "ab" * 20)

        assert exc_info.value.rpc_code == -32602
        assert exc_info.value.data == "hex"
        assert exc_info.value.code == ErrorCode.RPC_ERROR
        assert "invalid argument 0" in str(exc_info.value)

    @pytest.mark.parametrize("error", ["boom", ["boom"], 42])
    def test_non_object_rpc_error(self, error):
        client, _ = make_client(MockResponse(json_data={"jsonrpc": "2.0", "id": 1, "error": error}))

        with pytest.raises(RpcError) as exc_info:
            client.get_balance("0x" + "ab" * 20)

        assert exc_info.value.code == ErrorCode.RPC_ERROR
        assert exc_info.value.rpc_code is None
        assert exc_info.value.data == error
        assert str(error) in exc_info.value.message

    def test_http_error(self):
        client, _ = make_client(MockResponse(status_code=503, reason="Service Unavailable"))

        with pytest.raises(RpcError) as exc_info:
            client.get_gas_price()

        assert exc_info.value.rpc_code == 503

    def test_invalid_json(self):
        client, _ = make_client(MockResponse(raise_for_json=True))

        with pytest.raises(RpcError) as exc_info:
            client.get_block_number()

        assert exc_info.value.code == ErrorCode.INVALID_RESPONSE

    def test_connection_error(self):
        session = Mock()
        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        client = KlayClient("http://localhost:8551", session=session)

        with pytest.raises(RpcError) as exc_info:
            client.get_block_number()

        assert exc_info.value.code == ErrorCode.CONNECTION_FAILED
        assert isinstance(exc_info.value.cause, requests.exceptions.ConnectionError)

    def test_context_manager_leaves_external_session_open(self):
        session = Mock()
        with KlayClient("http://localhost:8551", session=session):
            pass
        session.close.assert_not_called()


class TestBlockParam:

    @pytest.mark.parametrize("value,expected", [
        (0, "0x0"),
        (255, "0xff"),
        ("latest", "latest"),
        ("pending", "pending"),
        ("0x1a", "0x1a"),
        ("26", "0x1a"),
    ])
    def test_encoding(self, value, expected):
        assert _block_param(value) == expected

    @pytest.mark.parametrize("value", [-1, True, "safe", None, 1.5])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            _block_param(value)
