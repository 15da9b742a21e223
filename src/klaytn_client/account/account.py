"""
Account: an address paired with the account key that authorizes it.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..runtime.codec import add_hex_prefix, is_valid_address
from ..runtime.errors import InvalidAddressError, InvalidKeyFormatError, InvalidWeightedMultiSigOptionsError
from .account_key import (
    AccountKey,
    AccountKeyLegacy,
    AccountKeyNil,
    AccountKeyPublic,
    AccountKeyRoleBased,
    AccountKeyWeightedMultiSig,
    MAX_WEIGHTED_KEYS,
    WeightedPublicKey,
)
from .options import (
    OptionsInput,
    WeightedMultiSigOptions,
    fill_weighted_multi_sig_options_for_multi_sig,
    fill_weighted_multi_sig_options_for_role_based,
)

logger = logging.getLogger(__name__)


class Account:
    """
    Account descriptor used for account creation and key updates.
    """

    def __init__(self, address: str, account_key: AccountKey):
        """
        Args:
            address: Account address (0x optional)
            account_key: Account key descriptor
        """
        if not is_valid_address(address):
            raise InvalidAddressError(f"Invalid address: {address!r}")
        self.address = add_hex_prefix(address).lower()
        self.account_key = account_key

    @classmethod
    def create_with_account_key_legacy(cls, address: str) -> Account:
        return cls(address, AccountKeyLegacy())

    @classmethod
    def create_with_account_key_public(cls, address: str, public_key: str) -> Account:
        """Create an account authorized by one public key."""
        return cls(address, _public_key(public_key))

    @classmethod
    def create_with_account_key_weighted_multi_sig(cls, address: str, public_keys: Sequence[str],
                                                   options: OptionsInput = None) -> Account:
        """
        Create an account authorized by weighted multisig.

        Args:
            address: Account address
            public_keys: Public keys in order
            options: Threshold/weights; defaults are filled when omitted
        """
        return cls(address, _weighted_multi_sig_key(public_keys, options))

    @classmethod
    def create_with_account_key_role_based(cls, address: str, role_based_public_keys: Sequence[Sequence[str]],
                                           options: Optional[Sequence[OptionsInput]] = None) -> Account:
        """
        Create an account with one account key per role.

        A role with no keys becomes AccountKeyNil, one key becomes
        AccountKeyPublic, several keys become AccountKeyWeightedMultiSig.
        """
        key_counts = [len(keys) for keys in role_based_public_keys]
        filled = fill_weighted_multi_sig_options_for_role_based(key_counts, options)

        account_keys: List[AccountKey] = []
        for public_keys, role_options in zip(role_based_public_keys, filled):
            if len(public_keys) == 0:
                account_keys.append(AccountKeyNil())
            elif len(public_keys) == 1:
                account_keys.append(_public_key(public_keys[0]))
            else:
                account_keys.append(_weighted_multi_sig_key(public_keys, role_options))

        logger.debug(f"Built role-based account key for {address} with key counts {key_counts}")
        return cls(address, AccountKeyRoleBased(account_keys=account_keys))

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "accountKey": self.account_key.to_dict()}

    def __repr__(self) -> str:
        return f"Account(address='{self.address}', account_key={type(self.account_key).__name__})"


def _public_key(public_key: str) -> AccountKeyPublic:
    try:
        return AccountKeyPublic(public_key=public_key)
    except ValidationError as e:
        raise InvalidKeyFormatError(f"Invalid public key: {e.errors()[0]['msg']}") from e


def _weighted_multi_sig_key(public_keys: Sequence[str], options: OptionsInput) -> AccountKeyWeightedMultiSig:
    if len(public_keys) > MAX_WEIGHTED_KEYS:
        raise InvalidWeightedMultiSigOptionsError(
            f"The maximum number of public keys for AccountKeyWeightedMultiSig is {MAX_WEIGHTED_KEYS}, "
            f"got {len(public_keys)}"
        )
    filled: WeightedMultiSigOptions = fill_weighted_multi_sig_options_for_multi_sig(len(public_keys), options)
    try:
        return AccountKeyWeightedMultiSig(
            threshold=filled.threshold,
            weighted_public_keys=[
                WeightedPublicKey(weight=weight, public_key=public_key)
                for weight, public_key in zip(filled.weights, public_keys)
            ],
        )
    except ValidationError as e:
        raise InvalidWeightedMultiSigOptionsError(
            f"Invalid AccountKeyWeightedMultiSig: {e.errors()[0]['msg']}"
        ) from e


__all__ = ["Account"]
