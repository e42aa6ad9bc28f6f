"""Firm model parameters and their input ranges.

The five parameters describe a single price-taking firm: a fixed cost FC,
the coefficients of the cubic cost curve TC = FC + aQ - bQ² + cQ³, and the
market price p.
"""

import math
from dataclasses import astuple, dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class FirmParameters:
    """Inputs of one model computation.

    Instances are immutable and hashable; the presentation layer replaces
    the whole value when a slider moves.
    """

    fc: float
    a: float
    b: float
    c: float
    p: float

    @classmethod
    def defaults(cls) -> "FirmParameters":
        """Reference parameters used by the classroom example."""
        return cls(fc=5.0, a=5.0, b=1.0, c=0.1, p=5.0)

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return astuple(self)

    def __repr__(self) -> str:
        return (
            f"FirmParameters(fc={self.fc}, a={self.a}, b={self.b}, "
            f"c={self.c}, p={self.p})"
        )


@dataclass(frozen=True)
class ParameterRange:
    """Slider bounds and granularity for one parameter."""

    name: str
    label: str
    minimum: float
    maximum: float
    step: float

    def contains(self, value: float) -> bool:
        """Check whether a value lies within the inclusive bounds."""
        return math.isfinite(value) and self.minimum <= value <= self.maximum


PARAMETER_RANGES: Dict[str, ParameterRange] = {
    "fc": ParameterRange("fc", "FC (fixed cost)", 0.0, 20.0, 0.1),
    "a": ParameterRange("a", "a", 0.0, 20.0, 0.1),
    "b": ParameterRange("b", "b", 0.0, 5.0, 0.01),
    "c": ParameterRange("c", "c", 0.0, 1.0, 0.01),
    "p": ParameterRange("p", "p (price)", 0.0, 20.0, 0.1),
}
