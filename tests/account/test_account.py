"""
Tests for Account and the account key descriptors.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import KEY_ONE, KEY_ONE_ADDRESS, KEY_ONE_PUBLIC, mk_address, mk_private_keys

from klaytn_client.account import (
    Account,
    AccountKeyLegacy,
    AccountKeyNil,
    AccountKeyPublic,
    AccountKeyRoleBased,
    AccountKeyWeightedMultiSig,
)
from klaytn_client.account.account_key import to_uncompressed_public_key
from klaytn_client.keys import PrivateKey
from klaytn_client.runtime.errors import (
    InvalidAddressError,
    InvalidKeyFormatError,
    InvalidWeightedMultiSigOptionsError,
)


def _public_keys(count, start=1):
    return [PrivateKey(key).get_public_key() for key in mk_private_keys(count, start)]


class TestPublicKeyNormalization:

    def test_compressed_key_is_expanded(self):
        compressed = PrivateKey(KEY_ONE).get_public_key(compressed=True)
        assert to_uncompressed_public_key(compressed) == KEY_ONE_PUBLIC

    def test_tagged_uncompressed_key(self):
        assert to_uncompressed_public_key("0x04" + KEY_ONE_PUBLIC[2:]) == KEY_ONE_PUBLIC

    def test_rejects_bad_length(self):
        with pytest.raises(ValueError):
            to_uncompressed_public_key("0x1234")


class TestAccount:

    def test_rejects_bad_address(self):
        with pytest.raises(InvalidAddressError):
            Account("0x12", AccountKeyLegacy())

    def test_legacy(self):
        account = Account.create_with_account_key_legacy(KEY_ONE_ADDRESS)
        assert account.to_dict() == {"address": KEY_ONE_ADDRESS, "accountKey": {"keyType": 1, "key": {}}}

    def test_public(self):
        account = Account.create_with_account_key_public(KEY_ONE_ADDRESS.upper()[2:], KEY_ONE_PUBLIC)
        assert account.address == KEY_ONE_ADDRESS
        assert isinstance(account.account_key, AccountKeyPublic)
        assert account.to_dict()["accountKey"] == {
            "keyType": 2,
            "key": {"x": "0x" + KEY_ONE_PUBLIC[2:66], "y": "0x" + KEY_ONE_PUBLIC[66:]},
        }

    def test_public_rejects_invalid_key(self):
        with pytest.raises(InvalidKeyFormatError):
            Account.create_with_account_key_public(KEY_ONE_ADDRESS, "0xnothex")

    def test_weighted_multi_sig_defaults(self):
        public_keys = _public_keys(3)
        account = Account.create_with_account_key_weighted_multi_sig(mk_address(), public_keys)

        key = account.account_key
        assert isinstance(key, AccountKeyWeightedMultiSig)
        assert key.threshold == 1
        data = account.to_dict()["accountKey"]
        assert data["keyType"] == 4
        assert data["key"]["threshold"] == 1
        assert [entry["weight"] for entry in data["key"]["keys"]] == [1, 1, 1]

    def test_weighted_multi_sig_limit(self):
        with pytest.raises(InvalidWeightedMultiSigOptionsError):
            Account.create_with_account_key_weighted_multi_sig(mk_address(), _public_keys(11))

    def test_role_based_shapes(self):
        role_keys = [_public_keys(2), _public_keys(1, 10), []]
        account = Account.create_with_account_key_role_based(mk_address(), role_keys)

        account_keys = account.account_key.account_keys
        assert isinstance(account.account_key, AccountKeyRoleBased)
        assert isinstance(account_keys[0], AccountKeyWeightedMultiSig)
        assert isinstance(account_keys[1], AccountKeyPublic)
        assert isinstance(account_keys[2], AccountKeyNil)
        assert account.to_dict()["accountKey"]["keyType"] == 5

    def test_role_based_with_options(self):
        role_keys = [_public_keys(2), _public_keys(3, 10), _public_keys(1, 20)]
        options = [{"threshold": 2, "weights": [1, 1]}, {"threshold": 2, "weights": [1, 1, 1]}, {}]
        account = Account.create_with_account_key_role_based(mk_address(), role_keys, options)
        assert account.account_key.account_keys[0].threshold == 2
        assert account.account_key.account_keys[1].threshold == 2
