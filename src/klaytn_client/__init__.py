"""
Klaytn Python SDK.

Keyrings for local key management, transaction and message signing,
keystore encryption, account key conversion and a Klay JSON-RPC client.
"""

from .keys import (
    KeyRole,
    PrivateKey,
    SignatureData,
    KeystoreOptions,
    AbstractKeyring,
    SingleKeyring,
    MultipleKeyring,
    RoleBasedKeyring,
    KeyringFactory,
)
from .account import Account, WeightedMultiSigOptions
from .rpc import KlayClient
from .runtime.errors import ErrorCode, KlaytnError

__version__ = "1.0.0"

__all__ = [
    "KeyRole",
    "PrivateKey",
    "SignatureData",
    "KeystoreOptions",
    "AbstractKeyring",
    "SingleKeyring",
    "MultipleKeyring",
    "RoleBasedKeyring",
    "KeyringFactory",
    "Account",
    "WeightedMultiSigOptions",
    "KlayClient",
    "ErrorCode",
    "KlaytnError",
    "__version__",
]
