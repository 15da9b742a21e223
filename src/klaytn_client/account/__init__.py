"""
Account descriptors for Klaytn.

Converts keyring public keys into on-chain account keys (public, weighted
multisig, role-based).
"""

from .account import Account
from .account_key import (
    AccountKey,
    AccountKeyNil,
    AccountKeyLegacy,
    AccountKeyPublic,
    AccountKeyWeightedMultiSig,
    AccountKeyRoleBased,
    WeightedPublicKey,
)
from .options import (
    WeightedMultiSigOptions,
    fill_weighted_multi_sig_options_for_multi_sig,
    fill_weighted_multi_sig_options_for_role_based,
)

__all__ = [
    "Account",
    "AccountKey",
    "AccountKeyNil",
    "AccountKeyLegacy",
    "AccountKeyPublic",
    "AccountKeyWeightedMultiSig",
    "AccountKeyRoleBased",
    "WeightedPublicKey",
    "WeightedMultiSigOptions",
    "fill_weighted_multi_sig_options_for_multi_sig",
    "fill_weighted_multi_sig_options_for_role_based",
]
