"""
Keyrings for Klaytn.

A keyring pairs an address with the private key(s) that sign for it:
SingleKeyring, MultipleKeyring and RoleBasedKeyring. KeyringFactory
builds them from key material or a keystore.
"""

from .private_key import PrivateKey
from .signature_data import SignatureData
from .helper import KeyRole, decrypt_key, encrypt_key, format_encrypted
from .options import KeystoreOptions
from .abstract import AbstractKeyring
from .single import SingleKeyring
from .multiple import MultipleKeyring
from .role_based import RoleBasedKeyring
from .factory import KeyringFactory, is_klaytn_wallet_key

__all__ = [
    "PrivateKey",
    "SignatureData",
    "KeyRole",
    "KeystoreOptions",
    "AbstractKeyring",
    "SingleKeyring",
    "MultipleKeyring",
    "RoleBasedKeyring",
    "KeyringFactory",
    "is_klaytn_wallet_key",
    "encrypt_key",
    "decrypt_key",
    "format_encrypted",
]
