"""
Tests for PrivateKey: parsing, public key derivation and signing.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import (
    KEY_ONE,
    KEY_ONE_ADDRESS,
    KEY_ONE_PUBLIC,
    mk_private_key,
    mk_tx_hash,
    recover_message_signer,
    recover_signer,
)

from klaytn_client.crypto.hashes import hash_message
from klaytn_client.keys import PrivateKey, SignatureData
from klaytn_client.runtime.errors import ErrorCode, InvalidChainIdError, InvalidKeyFormatError


class TestPrivateKeyParsing:

    def test_accepts_prefixed_and_bare_hex(self):
        assert PrivateKey(KEY_ONE).private_key == KEY_ONE
        assert PrivateKey(KEY_ONE[2:]).private_key == KEY_ONE

    def test_normalizes_to_lower_case(self):
        key = "0x" + "AB" * 32
        assert PrivateKey(key).private_key == "0x" + "ab" * 32

    @pytest.mark.parametrize("bad_key", [
        "0x1234",
        "0x" + "zz" * 32,
        "0x" + "11" * 33,
        "",
        None,
        12345,
    ])
    def test_rejects_malformed_keys(self, bad_key):
        with pytest.raises(InvalidKeyFormatError) as exc_info:
            PrivateKey(bad_key)
        assert exc_info.value.code == ErrorCode.INVALID_KEY_FORMAT

    def test_rejects_out_of_range_scalar(self):
        with pytest.raises(InvalidKeyFormatError):
            PrivateKey("0x" + "00" * 32)

    def test_error_message_does_not_echo_key(self):
        secret = "0x" + "ff" * 32
        with pytest.raises(InvalidKeyFormatError) as exc_info:
            PrivateKey(secret)
        assert "ff" * 32 not in str(exc_info.value)

    def test_generate(self):
        first = PrivateKey.generate()
        second = PrivateKey.generate("extra entropy")
        assert len(first.private_key) == 66
        assert first != second


class TestPrivateKeyDerivation:

    def test_public_key_of_key_one(self):
        assert PrivateKey(KEY_ONE).get_public_key() == KEY_ONE_PUBLIC

    def test_compressed_public_key(self):
        compressed = PrivateKey(KEY_ONE).get_public_key(compressed=True)
        assert compressed == "0x02" + KEY_ONE_PUBLIC[2:66]

    def test_public_key_is_deterministic(self):
        key = mk_private_key(42)
        assert PrivateKey(key).get_public_key() == PrivateKey(key).get_public_key()

    def test_derived_address(self):
        assert PrivateKey(KEY_ONE).get_derived_address() == KEY_ONE_ADDRESS

    def test_equality_and_hash(self):
        assert PrivateKey(KEY_ONE) == PrivateKey(KEY_ONE[2:])
        assert len({PrivateKey(KEY_ONE), PrivateKey(KEY_ONE)}) == 1
        assert PrivateKey(KEY_ONE) != PrivateKey(mk_private_key(2))

    def test_repr_hides_private_key(self):
        assert KEY_ONE[2:] not in repr(PrivateKey(KEY_ONE))


class TestPrivateKeySigning:

    @pytest.mark.parametrize("chain_id", [1, 1001, 8217])
    def test_sign_encodes_chain_id_in_v(self, chain_id):
        key = PrivateKey(KEY_ONE)
        tx_hash = mk_tx_hash("transfer")

        signature = key.sign(tx_hash, chain_id)

        assert isinstance(signature, SignatureData)
        assert signature.v_int in (chain_id * 2 + 35, chain_id * 2 + 36)
        assert recover_signer(signature, tx_hash, chain_id) == KEY_ONE_ADDRESS

    def test_sign_accepts_string_chain_ids(self):
        key = PrivateKey(KEY_ONE)
        tx_hash = mk_tx_hash()
        assert key.sign(tx_hash, "0x3e9") == key.sign(tx_hash, 1001)
        assert key.sign(tx_hash, "1001") == key.sign(tx_hash, 1001)

    def test_sign_rejects_invalid_chain_id(self):
        with pytest.raises(InvalidChainIdError):
            PrivateKey(KEY_ONE).sign(mk_tx_hash(), "abc")

    def test_signature_components_are_padded(self):
        signature = PrivateKey(KEY_ONE).sign(mk_tx_hash(), 1)
        assert len(signature.r) == 66
        assert len(signature.s) == 66

    def test_small_components_keep_leading_zeros(self):
        signature = SignatureData.from_components(27, 1, 0x0100)
        assert signature.v == "0x1b"
        assert signature.r == "0x" + "00" * 31 + "01"
        assert signature.s == "0x" + "00" * 30 + "0100"

    def test_sign_message_uses_v_27_or_28(self):
        key = PrivateKey(mk_private_key(7))
        message_hash = hash_message("Some data")

        signature = key.sign_message(message_hash)

        assert signature.v in ("0x1b", "0x1c")
        assert recover_message_signer(signature, message_hash) == key.get_derived_address()
