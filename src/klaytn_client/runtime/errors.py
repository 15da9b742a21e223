"""
Klaytn Error Model

This module provides the error handling framework for the Klaytn Python SDK.
Every failure raised by the keyring, account and RPC layers is a subclass of
KlaytnError and carries a stable ErrorCode.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Klaytn SDK error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    UNSUPPORTED_OPERATION = 3

    # Network errors (200-299)
    RPC_ERROR = 200
    CONNECTION_FAILED = 201
    INVALID_RESPONSE = 202

    # Signing input errors (300-399)
    INVALID_HASH_FORMAT = 300
    INVALID_CHAIN_ID = 301

    # Key/Keyring errors (700-799)
    INVALID_KEY_FORMAT = 700
    INVALID_KEY_LIST_FORMAT = 701
    INVALID_ADDRESS = 702
    ROLE_REQUIRED = 703
    INVALID_ROLE = 704
    INDEX_OUT_OF_RANGE = 705
    NO_DEFAULT_KEY = 706
    INCOMPLETE_SIGNING_PARAMS = 707

    # Account errors (800-899)
    INVALID_OPTIONS_SHAPE = 800
    INVALID_MULTISIG_OPTIONS = 801

    # Keystore errors (900-999)
    KEYSTORE_ERROR = 900
    DECRYPTION_FAILED = 901


class KlaytnError(Exception):
    """
    Base class for all Klaytn SDK errors.

    Provides structured error information: a message, an error code,
    optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Klaytn error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class UnsupportedOperationError(KlaytnError):
    """Operation is not available for this keyring variant."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_OPERATION, details)


class RpcError(KlaytnError):
    """JSON-RPC call failures (HTTP, transport, or an `error` member in the response)."""

    def __init__(self, message: str, rpc_code: Optional[int] = None, data: Any = None,
                 code: ErrorCode = ErrorCode.RPC_ERROR, cause: Optional[Exception] = None):
        details = {}
        if rpc_code is not None:
            details["rpcCode"] = rpc_code
        if data is not None:
            details["data"] = data
        super().__init__(message, code, details, cause)
        self.rpc_code = rpc_code
        self.data = data


# =============================================================================
# Keyring errors
# =============================================================================

class KeyringError(KlaytnError):
    """Base exception for keyring operations."""
    pass


class InvalidKeyFormatError(KeyringError):
    """Malformed private key string."""

    def __init__(self, message: str = "Invalid private key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY_FORMAT, details, cause)


class InvalidKeyListFormatError(KeyringError):
    """Key input for a multi-key keyring is not a list."""

    def __init__(self, message: str = "The private keys should be defined as a list",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_KEY_LIST_FORMAT, details)


class InvalidAddressError(KeyringError):
    """Malformed account address."""

    def __init__(self, message: str = "Invalid address", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_ADDRESS, details)


class RoleRequiredError(KeyringError):
    """Role parameter omitted where it is required."""

    def __init__(self, message: str = "role should be defined",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.ROLE_REQUIRED, details)


class InvalidRoleError(KeyringError):
    """Role value outside [0, KeyRole.LAST)."""

    def __init__(self, message: str = "Invalid role number", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_ROLE, details)


class IndexOutOfRangeError(KeyringError):
    """Key index outside [0, len(keys))."""

    def __init__(self, message: str = "Invalid index", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INDEX_OUT_OF_RANGE, details)


class NoDefaultKeyError(KeyringError):
    """The default (transaction) role has no key to sign with."""

    def __init__(self, message: str = "Default key does not have enough keys to sign",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.NO_DEFAULT_KEY, details)


class IncompleteSigningParamsError(KeyringError):
    """Exactly one of role/index was supplied for message signing."""

    def __init__(self, message: str = "Both role and index must be defined",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INCOMPLETE_SIGNING_PARAMS, details)


class InvalidSigningInputError(KeyringError):
    """Malformed hash or chain id passed to a signing operation."""
    pass


class InvalidHashFormatError(InvalidSigningInputError):
    """Hash is not a 0x-prefixed 32-byte hex digest."""

    def __init__(self, message: str = "Invalid transaction hash", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_HASH_FORMAT, details)


class InvalidChainIdError(InvalidSigningInputError):
    """Chain id is not a non-negative integer or numeric string."""

    def __init__(self, message: str = "Invalid chain id", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_CHAIN_ID, details)


# =============================================================================
# Account errors
# =============================================================================

class InvalidOptionsShapeError(KlaytnError):
    """Multisig options of the wrong shape for the keyring variant."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_OPTIONS_SHAPE, details)


class InvalidWeightedMultiSigOptionsError(KlaytnError):
    """Threshold/weights that cannot describe a valid weighted multisig key."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_MULTISIG_OPTIONS, details)


# =============================================================================
# Keystore errors
# =============================================================================

class KeystoreError(KlaytnError):
    """Keystore formatting and parameter errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.KEYSTORE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class KeystoreDecryptionError(KeystoreError):
    """MAC mismatch while decrypting a keystore entry."""

    def __init__(self, message: str = "Key derivation failed - possibly wrong password",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.DECRYPTION_FAILED, details)


__all__ = [
    "ErrorCode",
    "KlaytnError",
    "UnsupportedOperationError",
    "RpcError",
    "KeyringError",
    "InvalidKeyFormatError",
    "InvalidKeyListFormatError",
    "InvalidAddressError",
    "RoleRequiredError",
    "InvalidRoleError",
    "IndexOutOfRangeError",
    "NoDefaultKeyError",
    "IncompleteSigningParamsError",
    "InvalidSigningInputError",
    "InvalidHashFormatError",
    "InvalidChainIdError",
    "InvalidOptionsShapeError",
    "InvalidWeightedMultiSigOptionsError",
    "KeystoreError",
    "KeystoreDecryptionError",
]
