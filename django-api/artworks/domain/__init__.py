from artworks.domain.models import Artwork, ArtworkStats
from artworks.domain.value_objects import ArtworkCategory, ArtworkId, DimensionUnit, Dimensions

__all__ = [
    "Artwork",
    "ArtworkStats",
    "ArtworkCategory",
    "ArtworkId",
    "DimensionUnit",
    "Dimensions",
]
