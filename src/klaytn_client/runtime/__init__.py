"""Runtime helpers for the Klaytn Python SDK"""

from .errors import ErrorCode, KlaytnError
from .codec import add_hex_prefix, strip_hex_prefix, hex_to_bytes, to_hex

__all__ = [
    "ErrorCode",
    "KlaytnError",
    "add_hex_prefix",
    "strip_hex_prefix",
    "hex_to_bytes",
    "to_hex",
]
