"""
Weighted multisig options and the default weight-filling policy.

A weighted multisig account key is satisfied when the summed weights of the
signing keys reach the threshold. When a keyring is converted to an account
without explicit options, every key gets weight 1 and the threshold is 1.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..runtime.errors import InvalidOptionsShapeError, InvalidWeightedMultiSigOptionsError

ROLE_COUNT = 3

OptionsInput = Union["WeightedMultiSigOptions", Dict[str, Any], None]


class WeightedMultiSigOptions(BaseModel):
    """
    Threshold and per-key weights for AccountKeyWeightedMultiSig.

    Both fields are set, or neither is (the empty options).
    """
    threshold: Optional[int] = Field(default=None, ge=1, description="Minimum summed weight required")
    weights: Optional[List[int]] = Field(default=None, description="Weight of each key, in key order")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_pairing(self) -> WeightedMultiSigOptions:
        if (self.threshold is None) != (self.weights is None):
            raise ValueError("threshold and weights should be defined together")
        if self.weights is not None:
            if any(weight < 1 for weight in self.weights):
                raise ValueError("weights must be positive integers")
            if sum(self.weights) < self.threshold:
                raise ValueError(
                    f"The sum of weights ({sum(self.weights)}) is less than the threshold ({self.threshold})"
                )
        return self

    @classmethod
    def from_object(cls, options: OptionsInput) -> WeightedMultiSigOptions:
        """
        Coerce user supplied options.

        Raises:
            InvalidOptionsShapeError: If options is not a dict or WeightedMultiSigOptions
            InvalidWeightedMultiSigOptionsError: If the values are inconsistent
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, dict):
            raise InvalidOptionsShapeError(
                f"Weighted multisig options must be a dict, got {type(options).__name__}"
            )
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise InvalidWeightedMultiSigOptionsError(
                f"Invalid options for AccountKeyWeightedMultiSig: {e.errors()[0]['msg']}"
            ) from e

    def is_empty(self) -> bool:
        return self.threshold is None and self.weights is None

    def to_dict(self) -> Dict[str, Any]:
        if self.is_empty():
            return {}
        return {"threshold": self.threshold, "weights": list(self.weights)}


def fill_weighted_multi_sig_options_for_multi_sig(key_count: int,
                                                  options: OptionsInput = None) -> WeightedMultiSigOptions:
    """
    Complete options for a weighted multisig key.

    Args:
        key_count: Number of public keys
        options: Partial or full options; None/empty selects the default

    Returns:
        threshold=1 and weight 1 per key by default, otherwise the validated options
    """
    if key_count < 1:
        raise InvalidWeightedMultiSigOptionsError("AccountKeyWeightedMultiSig requires at least one key")
    filled = WeightedMultiSigOptions.from_object(options)
    if filled.is_empty():
        return WeightedMultiSigOptions(threshold=1, weights=[1] * key_count)
    if len(filled.weights) != key_count:
        raise InvalidWeightedMultiSigOptionsError(
            f"The length of weights ({len(filled.weights)}) and the number of keys ({key_count}) must be the same"
        )
    return filled


def fill_weighted_multi_sig_options_for_role_based(key_counts: Sequence[int],
                                                   options: Optional[Sequence[OptionsInput]] = None
                                                   ) -> List[WeightedMultiSigOptions]:
    """
    Complete options for each role of a role-based key.

    Roles holding more than one key get filled multisig options; roles with
    zero or one key take empty options.
    """
    options = list(options) if options is not None else []
    if len(options) > ROLE_COUNT:
        raise InvalidOptionsShapeError(
            f"options for a role-based key can have at most {ROLE_COUNT} entries, got {len(options)}"
        )
    options += [None] * (ROLE_COUNT - len(options))

    filled = []
    for role, count in enumerate(key_counts):
        if count > 1:
            filled.append(fill_weighted_multi_sig_options_for_multi_sig(count, options[role]))
            continue
        role_options = WeightedMultiSigOptions.from_object(options[role])
        if not role_options.is_empty():
            raise InvalidWeightedMultiSigOptionsError(
                f"Invalid options for role {role}: a role with {count} key(s) cannot have weighted multisig options"
            )
        filled.append(role_options)
    return filled


__all__ = [
    "WeightedMultiSigOptions",
    "fill_weighted_multi_sig_options_for_multi_sig",
    "fill_weighted_multi_sig_options_for_role_based",
]
