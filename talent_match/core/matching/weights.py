"""
Weight profiles.

A WeightProfile is an immutable mapping of every tracked dimension to a
non-negative weight. Only the scored dimensions take part in aggregation;
reserved dimensions are carried so behavioral deltas for them are not lost.
"""

import math
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from talent_match.core.exceptions import ConfigurationError
from talent_match.utils.constants import (
    DEFAULT_DIMENSION_WEIGHTS,
    SCORED_DIMENSIONS,
    WEIGHT_PRESETS,
    Dimension,
)

DimensionKey = Union[Dimension, str]


def to_dimension(key: DimensionKey) -> Dimension:
    """Resolve a Dimension from a member, its value ("age") or its name ("AGE")."""
    if isinstance(key, Dimension):
        return key
    try:
        return Dimension(key)
    except ValueError:
        pass
    try:
        return Dimension[str(key).upper()]
    except KeyError:
        raise ConfigurationError(f"Unknown weight dimension: {key!r}") from None


class WeightProfile(BaseModel):
    """Per-dimension importance multipliers used in score aggregation."""

    model_config = ConfigDict(frozen=True)

    age: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.AGE]
    location: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.LOCATION]
    body_type: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.BODY_TYPE]
    cup_size: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.CUP_SIZE]
    guarantee: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.GUARANTEE]
    service: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.SERVICE]
    tattoo: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.TATTOO]
    hair_color: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.HAIR_COLOR]
    appearance: float = DEFAULT_DIMENSION_WEIGHTS[Dimension.APPEARANCE]

    @model_validator(mode="after")
    def reject_invalid_weights(self) -> "WeightProfile":
        """Negative or non-finite weights are rejected, never clamped."""
        for dimension in Dimension:
            value = getattr(self, dimension.value)
            if not math.isfinite(value):
                raise ConfigurationError(f"Weight for {dimension.name} must be finite, got {value}")
            if value < 0:
                raise ConfigurationError(f"Weight for {dimension.name} must be non-negative, got {value}")
        return self

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_defaults(cls) -> "WeightProfile":
        """Create the static default profile."""
        return cls()

    @classmethod
    def from_mapping(
        cls,
        weights: Mapping[DimensionKey, float],
        base: Optional["WeightProfile"] = None,
    ) -> "WeightProfile":
        """
        Create a profile from a dimension->weight mapping.

        Dimensions absent from the mapping keep their value from ``base``
        (the defaults when no base is given).
        """
        values: dict[str, Any] = (base or cls()).to_dict()
        for key, weight in weights.items():
            values[to_dimension(key).value] = weight
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Malformed weight profile: {e}") from e

    @classmethod
    def preset(cls, name: str) -> "WeightProfile":
        """Create a named preset ("location" or "guarantee")."""
        if name not in WEIGHT_PRESETS:
            raise ConfigurationError(
                f"Unknown weight preset: {name!r} (expected one of {sorted(WEIGHT_PRESETS)})"
            )
        return cls.from_mapping(WEIGHT_PRESETS[name])

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def weight(self, dimension: DimensionKey) -> float:
        """Get the weight of a dimension."""
        return getattr(self, to_dimension(dimension).value)

    def to_dict(self) -> dict[str, float]:
        """Convert to a dimension-value keyed dictionary."""
        return {dimension.value: self.weight(dimension) for dimension in Dimension}

    @property
    def total_weight(self) -> float:
        """Sum of the weights that take part in aggregation."""
        return sum(self.weight(d) for d in SCORED_DIMENSIONS)

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def with_deltas(
        self,
        deltas: Mapping[DimensionKey, float],
        learning_factor: float = 1.0,
    ) -> "WeightProfile":
        """Return a new profile with ``delta * learning_factor`` added per dimension."""
        values = self.to_dict()
        for key, delta in deltas.items():
            dimension = to_dimension(key)
            values[dimension.value] += delta * learning_factor
        return WeightProfile(**values)

    def scaled(self, factor: float) -> "WeightProfile":
        """Return a new profile with every weight multiplied by ``factor``."""
        if factor <= 0:
            raise ConfigurationError(f"Scale factor must be positive, got {factor}")
        return WeightProfile(**{k: v * factor for k, v in self.to_dict().items()})
