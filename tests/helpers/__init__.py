from .factories import (
    KEY_ONE,
    KEY_ONE_ADDRESS,
    KEY_ONE_PUBLIC,
    FAST_SCRYPT,
    FAST_PBKDF2,
    mk_private_key,
    mk_private_keys,
    mk_address,
    mk_tx_hash,
    mk_single_keyring,
    mk_multiple_keyring,
    mk_role_based_keyring,
)
from .signatures import recover_signer, recover_message_signer

__all__ = [
    "KEY_ONE",
    "KEY_ONE_ADDRESS",
    "KEY_ONE_PUBLIC",
    "FAST_SCRYPT",
    "FAST_PBKDF2",
    "mk_private_key",
    "mk_private_keys",
    "mk_address",
    "mk_tx_hash",
    "mk_single_keyring",
    "mk_multiple_keyring",
    "mk_role_based_keyring",
    "recover_signer",
    "recover_message_signer",
]
