"""
Tests for MultipleKeyring.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import (
    mk_address,
    mk_multiple_keyring,
    mk_private_key,
    mk_private_keys,
    mk_tx_hash,
    recover_message_signer,
    recover_signer,
)

from klaytn_client.account import AccountKeyWeightedMultiSig
from klaytn_client.keys import KeyRole, MultipleKeyring, PrivateKey
from klaytn_client.runtime.errors import (
    IncompleteSigningParamsError,
    IndexOutOfRangeError,
    InvalidChainIdError,
    InvalidHashFormatError,
    InvalidKeyFormatError,
    InvalidKeyListFormatError,
    InvalidOptionsShapeError,
    InvalidRoleError,
    InvalidWeightedMultiSigOptionsError,
    NoDefaultKeyError,
    RoleRequiredError,
)


class TestConstruction:

    def test_keys_are_normalized_in_order(self):
        keys = mk_private_keys(3)
        keyring = MultipleKeyring(mk_address(), keys)
        assert [key.private_key for key in keyring.keys] == keys

    def test_private_key_instances_are_reused(self):
        key = PrivateKey(mk_private_key(9))
        keyring = MultipleKeyring(mk_address(), [key, mk_private_key(10)])
        assert keyring.keys[0] is key
        assert isinstance(keyring.keys[1], PrivateKey)

    def test_rejects_non_list(self):
        with pytest.raises(InvalidKeyListFormatError):
            MultipleKeyring(mk_address(), mk_private_key(1))

    def test_propagates_key_format_error(self):
        with pytest.raises(InvalidKeyFormatError):
            MultipleKeyring(mk_address(), [mk_private_key(1), "0x1234"])

    def test_setting_none_unsets_keys(self, multiple_keyring):
        multiple_keyring.keys = None
        assert multiple_keyring.keys is None
        assert multiple_keyring.get_public_key() == []

    def test_empty_list_is_distinct_from_unset(self):
        keyring = MultipleKeyring(mk_address(), [])
        assert keyring.keys == []


class TestKeys:

    def test_public_keys_preserve_order(self, multiple_keyring):
        expected = [PrivateKey(key).get_public_key() for key in mk_private_keys(3)]
        assert multiple_keyring.get_public_key() == expected

    def test_public_keys_are_deterministic(self):
        assert mk_multiple_keyring(2).get_public_key() == mk_multiple_keyring(2).get_public_key()

    @pytest.mark.parametrize("role", [0, 1, 2])
    def test_get_key_by_role_returns_all_keys(self, multiple_keyring, role):
        assert multiple_keyring.get_key_by_role(role) == multiple_keyring.keys

    def test_get_key_by_role_rejects_last(self, multiple_keyring):
        with pytest.raises(InvalidRoleError):
            multiple_keyring.get_key_by_role(3)

    def test_get_key_by_role_requires_role(self, multiple_keyring):
        with pytest.raises(RoleRequiredError):
            multiple_keyring.get_key_by_role(None)

    def test_copy_shares_keys_but_not_list(self, multiple_keyring):
        copied = multiple_keyring.copy()
        assert copied.address == multiple_keyring.address
        assert copied.keys is not multiple_keyring.keys
        assert all(a is b for a, b in zip(copied.keys, multiple_keyring.keys))

        copied.keys.pop()
        assert len(multiple_keyring.keys) == 3


class TestSignWithKey:

    def test_signs_with_indexed_key(self, multiple_keyring):
        tx_hash = mk_tx_hash()
        signature = multiple_keyring.sign_with_key(tx_hash, 1, KeyRole.TRANSACTION_KEY, 1)
        assert recover_signer(signature, tx_hash, 1) == multiple_keyring.keys[1].get_derived_address()

    def test_out_of_bounds_index_never_signs(self, multiple_keyring, monkeypatch):
        calls = []
        monkeypatch.setattr(PrivateKey, "sign", lambda self, *args: calls.append(args))
        with pytest.raises(IndexOutOfRangeError):
            multiple_keyring.sign_with_key(mk_tx_hash(), 1, KeyRole.TRANSACTION_KEY, 3)
        assert calls == []

    def test_role_required(self, multiple_keyring):
        with pytest.raises(RoleRequiredError):
            multiple_keyring.sign_with_key(mk_tx_hash(), 1, None)

    def test_invalid_hash(self, multiple_keyring):
        with pytest.raises(InvalidHashFormatError):
            multiple_keyring.sign_with_key("0xabc", 1, KeyRole.TRANSACTION_KEY)

    def test_invalid_chain_id(self, multiple_keyring):
        with pytest.raises(InvalidChainIdError):
            multiple_keyring.sign_with_key(mk_tx_hash(), -1, KeyRole.TRANSACTION_KEY)

    @pytest.mark.parametrize("chain_id", ["0x-1", "0x-5", "0x+1"])
    def test_signed_hex_chain_id_never_signs(self, multiple_keyring, monkeypatch, chain_id):
        calls = []
        monkeypatch.setattr(PrivateKey, "sign", lambda self, *args: calls.append(args))
        with pytest.raises(InvalidChainIdError):
            multiple_keyring.sign_with_key(mk_tx_hash(), chain_id, KeyRole.TRANSACTION_KEY)
        assert calls == []

    def test_invalid_role(self, multiple_keyring):
        with pytest.raises(InvalidRoleError):
            multiple_keyring.sign_with_key(mk_tx_hash(), 1, KeyRole.LAST)

    def test_unset_keys_have_nothing_to_sign_with(self, multiple_keyring):
        multiple_keyring.keys = None
        with pytest.raises(IndexOutOfRangeError):
            multiple_keyring.sign_with_key(mk_tx_hash(), 1, KeyRole.TRANSACTION_KEY, 0)


class TestSignWithKeys:

    def test_two_keys_give_two_signatures_in_order(self):
        keyring = mk_multiple_keyring(2)
        tx_hash = mk_tx_hash("two keys")

        signatures = keyring.sign_with_keys(tx_hash, "0x1", 0)

        assert len(signatures) == 2
        signers = [recover_signer(signature, tx_hash, 1) for signature in signatures]
        assert signers == [key.get_derived_address() for key in keyring.keys]

    def test_role_required(self, multiple_keyring):
        with pytest.raises(RoleRequiredError):
            multiple_keyring.sign_with_keys(mk_tx_hash(), 1, None)

    def test_empty_keys_give_no_signatures(self):
        assert MultipleKeyring(mk_address(), []).sign_with_keys(mk_tx_hash(), 1, 0) == []


class TestSignMessage:

    def test_default_uses_first_transaction_key(self, multiple_keyring):
        result = multiple_keyring.sign_message("Hello Klaytn")
        assert result["message"] == "Hello Klaytn"
        signer = recover_message_signer(result["signature"], result["message_hash"])
        assert signer == multiple_keyring.keys[0].get_derived_address()

    def test_explicit_role_and_index(self, multiple_keyring):
        result = multiple_keyring.sign_message("Hello", KeyRole.FEE_PAYER_KEY, 2)
        signer = recover_message_signer(result["signature"], result["message_hash"])
        assert signer == multiple_keyring.keys[2].get_derived_address()

    def test_no_keys_raises_no_default_key(self):
        with pytest.raises(NoDefaultKeyError):
            MultipleKeyring(mk_address(), []).sign_message("Hello")

    def test_unset_keys_raise_no_default_key(self, multiple_keyring):
        multiple_keyring.keys = None
        with pytest.raises(NoDefaultKeyError):
            multiple_keyring.sign_message("Hello")

    def test_role_without_index(self, multiple_keyring):
        with pytest.raises(IncompleteSigningParamsError):
            multiple_keyring.sign_message("Hello", role=KeyRole.TRANSACTION_KEY)

    def test_index_without_role(self, multiple_keyring):
        with pytest.raises(IncompleteSigningParamsError):
            multiple_keyring.sign_message("Hello", index=0)

    def test_index_out_of_range(self, multiple_keyring):
        with pytest.raises(IndexOutOfRangeError):
            multiple_keyring.sign_message("Hello", KeyRole.TRANSACTION_KEY, 3)


class TestToAccount:

    def test_default_options(self, multiple_keyring):
        account = multiple_keyring.to_account()

        assert account.address == multiple_keyring.address
        account_key = account.account_key
        assert isinstance(account_key, AccountKeyWeightedMultiSig)
        assert account_key.threshold == 1
        assert [weighted.weight for weighted in account_key.weighted_public_keys] == [1, 1, 1]
        assert [weighted.public_key for weighted in account_key.weighted_public_keys] == (
            multiple_keyring.get_public_key()
        )

    def test_explicit_options(self, multiple_keyring):
        account = multiple_keyring.to_account({"threshold": 3, "weights": [1, 2, 1]})
        assert account.account_key.threshold == 3
        assert [weighted.weight for weighted in account.account_key.weighted_public_keys] == [1, 2, 1]

    def test_rejects_list_of_options(self, multiple_keyring):
        with pytest.raises(InvalidOptionsShapeError):
            multiple_keyring.to_account([{"threshold": 1, "weights": [1, 1, 1]}])

    def test_rejects_weight_count_mismatch(self, multiple_keyring):
        with pytest.raises(InvalidWeightedMultiSigOptionsError):
            multiple_keyring.to_account({"threshold": 1, "weights": [1, 1]})

    def test_rejects_threshold_above_weights(self, multiple_keyring):
        with pytest.raises(InvalidWeightedMultiSigOptionsError):
            multiple_keyring.to_account({"threshold": 4, "weights": [1, 1, 1]})

    def test_rejects_more_than_ten_keys(self):
        with pytest.raises(InvalidWeightedMultiSigOptionsError):
            mk_multiple_keyring(11).to_account()


def test_encrypt_v3_is_unsupported(multiple_keyring):
    from klaytn_client.runtime.errors import UnsupportedOperationError
    with pytest.raises(UnsupportedOperationError):
        multiple_keyring.encrypt_v3("password")


def test_klaytn_wallet_key_is_unsupported(multiple_keyring):
    from klaytn_client.runtime.errors import UnsupportedOperationError
    with pytest.raises(UnsupportedOperationError):
        multiple_keyring.get_klaytn_wallet_key()
