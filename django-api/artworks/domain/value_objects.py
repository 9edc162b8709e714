"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self
from uuid import UUID

from common.value_objects import parse_uuid


@dataclass(frozen=True)
class ArtworkId:
    """Unique identifier for an Artwork."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


class ArtworkCategory(Enum):
    PAINTING = "painting"
    SCULPTURE = "sculpture"
    PHOTOGRAPHY = "photography"
    DIGITAL_ART = "digital_art"
    INSTALLATION = "installation"
    OTHER = "other"


class DimensionUnit(Enum):
    CM = "cm"
    M = "m"
    MM = "mm"


@dataclass(frozen=True)
class Dimensions:
    width: Decimal | None = None
    height: Decimal | None = None
    depth: Decimal | None = None
    unit: DimensionUnit = DimensionUnit.CM

    def __post_init__(self) -> None:
        for measure in (self.width, self.height, self.depth):
            if measure is not None and measure < 0:
                raise ValueError("Dimensions cannot be negative")

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.height is None and self.depth is None
