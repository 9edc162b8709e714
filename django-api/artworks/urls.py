from django.urls import path

from artworks.handlers import (
    ArtworkAvailabilityView,
    ArtworkDetailView,
    ArtworkListView,
    ArtworkScanView,
    ArtworkStatsView,
    PopularArtworksView,
)

urlpatterns = [
    path("artworks", ArtworkListView.as_view(), name="artwork-list"),
    path("artworks/stats/popular", PopularArtworksView.as_view(), name="artwork-popular"),
    path("artworks/stats/overview", ArtworkStatsView.as_view(), name="artwork-stats"),
    path("artworks/qr/<str:code>", ArtworkScanView.as_view(), name="artwork-scan"),
    path("artworks/<str:artwork_id>", ArtworkDetailView.as_view(), name="artwork-detail"),
    path(
        "artworks/<str:artwork_id>/toggle-availability",
        ArtworkAvailabilityView.as_view(),
        name="artwork-toggle-availability",
    ),
]
