from artworks.handlers.views import (
    ArtworkAvailabilityView,
    ArtworkDetailView,
    ArtworkListView,
    ArtworkScanView,
    ArtworkStatsView,
    PopularArtworksView,
)

__all__ = [
    "ArtworkListView",
    "ArtworkDetailView",
    "ArtworkScanView",
    "ArtworkAvailabilityView",
    "PopularArtworksView",
    "ArtworkStatsView",
]
