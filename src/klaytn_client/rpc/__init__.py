"""
Klay JSON-RPC client.

Thin pass-through over the node's ``klay_*`` namespace.
"""

from .klay import KlayClient, BlockNumber

__all__ = [
    "KlayClient",
    "BlockNumber",
]
