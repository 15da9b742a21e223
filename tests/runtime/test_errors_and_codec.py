"""
Tests for the error model and hex helpers.
"""

import pytest

from klaytn_client.runtime.codec import (
    add_hex_prefix,
    hex_to_bytes,
    int_to_hex,
    is_valid_address,
    is_valid_hash_strict,
    is_valid_private_key,
    strip_hex_prefix,
    to_hex,
)
from klaytn_client.runtime.errors import (
    ErrorCode,
    IndexOutOfRangeError,
    KeyringError,
    KeystoreDecryptionError,
    KeystoreError,
    KlaytnError,
    RpcError,
)


class TestErrors:

    def test_base_error(self):
        cause = ValueError("boom")
        error = KlaytnError("failed", ErrorCode.INTERNAL, {"k": "v"}, cause)
        assert str(error) == "[INTERNAL] failed | Details: {'k': 'v'} | Caused by: boom"
        assert error.to_dict() == {"code": 2, "message": "failed", "details": {"k": "v"}, "cause": "boom"}

    def test_keyring_errors_carry_codes(self):
        error = IndexOutOfRangeError("bad index")
        assert isinstance(error, KeyringError)
        assert isinstance(error, KlaytnError)
        assert error.code == ErrorCode.INDEX_OUT_OF_RANGE

    def test_decryption_error_is_keystore_error(self):
        error = KeystoreDecryptionError()
        assert isinstance(error, KeystoreError)
        assert error.code == ErrorCode.DECRYPTION_FAILED

    def test_rpc_error_details(self):
        error = RpcError("nope", rpc_code=-32000, data={"reason": "x"})
        assert error.details == {"rpcCode": -32000, "data": {"reason": "x"}}


class TestCodec:

    def test_prefix_helpers(self):
        assert add_hex_prefix("ab") == "0xab"
        assert add_hex_prefix("0xab") == "0xab"
        assert strip_hex_prefix("0Xab") == "ab"

    def test_hex_to_bytes(self):
        assert hex_to_bytes("0x0102") == b"\x01\x02"
        assert hex_to_bytes("abc") == b"\x0a\xbc"
        assert hex_to_bytes(b"\x01") == b"\x01"
        with pytest.raises(ValueError):
            hex_to_bytes("0xzz")

    def test_to_hex(self):
        assert to_hex(b"\x01\x02") == "0x0102"
        assert to_hex(b"\x01", prefix=False) == "01"
        assert int_to_hex(26) == "0x1a"

    def test_predicates(self):
        assert is_valid_address("ab" * 20)
        assert not is_valid_address("ab" * 19)
        assert is_valid_hash_strict("0x" + "00" * 32)
        assert not is_valid_hash_strict("00" * 32)
        assert is_valid_private_key("0x" + "01" * 32)
        assert not is_valid_private_key(None)
