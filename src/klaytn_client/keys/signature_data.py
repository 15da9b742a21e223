"""
Signature value object returned by keyring signing operations.
"""

from __future__ import annotations
from typing import Any, Iterator, List, Sequence

from ..runtime.codec import hex_to_bytes, strip_hex_prefix


def _make_even(hex_str: str) -> str:
    body = strip_hex_prefix(hex_str)
    if len(body) % 2:
        body = "0" + body
    return "0x" + body


class SignatureData:
    """
    A (v, r, s) signature with each component as a 0x-prefixed hex string.

    Signatures produced by PrivateKey keep r and s zero-padded to 32 bytes
    (66 characters), so leading zero bytes are not trimmed. v and values
    passed to the constructor directly are only padded to an even length.

    Iterating yields v, r, s in order, so a SignatureData unpacks and compares
    like the ``[v, r, s]`` list used on the wire.
    """

    __slots__ = ("v", "r", "s")

    def __init__(self, v: str, r: str, s: str):
        self.v = _make_even(v)
        self.r = _make_even(r)
        self.s = _make_even(s)

    @classmethod
    def from_components(cls, v: int, r: int, s: int) -> SignatureData:
        """Build from integer components; r and s are padded to 32 bytes."""
        return cls(hex(v), "0x" + r.to_bytes(32, "big").hex(), "0x" + s.to_bytes(32, "big").hex())

    @classmethod
    def from_list(cls, values: Sequence[str]) -> SignatureData:
        """Build from a ``[v, r, s]`` sequence."""
        if len(values) != 3:
            raise ValueError(f"Signature must have 3 components, got {len(values)}")
        return cls(*values)

    @property
    def v_int(self) -> int:
        return int(self.v, 16)

    @property
    def r_int(self) -> int:
        return int.from_bytes(hex_to_bytes(self.r), "big")

    @property
    def s_int(self) -> int:
        return int.from_bytes(hex_to_bytes(self.s), "big")

    def to_list(self) -> List[str]:
        return [self.v, self.r, self.s]

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return 3

    def __getitem__(self, index: int) -> str:
        return self.to_list()[index]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SignatureData):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.v, self.r, self.s))

    def __repr__(self) -> str:
        return f"SignatureData(v='{self.v}', r='{self.r}', s='{self.s}')"


__all__ = ["SignatureData"]
