"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from artworks.domain import Artwork, ArtworkCategory, ArtworkId, ArtworkStats


class ArtworkStore(ABC):
    """Interface for artwork persistence operations."""

    @abstractmethod
    def list_artworks(
        self,
        query: str | None = None,
        category: ArtworkCategory | None = None,
        room: str | None = None,
    ) -> list[Artwork]:
        """Return matching artworks, newest first.

        `query` is a case-insensitive substring over title, artist and
        description.
        """
        ...

    @abstractmethod
    def get_artwork(self, artwork_id: ArtworkId) -> Artwork | None:
        ...

    @abstractmethod
    def get_by_scan_code(self, code: str) -> Artwork | None:
        ...

    @abstractmethod
    def insert_artwork(self, artwork: Artwork) -> Artwork:
        """Raises DuplicateCodeError if the scan code is already taken."""
        ...

    @abstractmethod
    def update_artwork(self, artwork: Artwork) -> Artwork:
        """Overwrite editable fields; code and counters are left alone."""
        ...

    @abstractmethod
    def delete_artwork(self, artwork_id: ArtworkId) -> None:
        ...

    @abstractmethod
    def set_availability(self, artwork_id: ArtworkId, is_available: bool) -> Artwork:
        ...

    @abstractmethod
    def record_view(self, artwork_id: ArtworkId) -> None:
        """Atomically bump the view counter."""
        ...

    @abstractmethod
    def record_scan(self, artwork_id: ArtworkId) -> None:
        """Atomically bump the scan counter."""
        ...

    @abstractmethod
    def popular_artworks(self, limit: int) -> list[Artwork]:
        """Available artworks by view count, then scan count."""
        ...

    @abstractmethod
    def artwork_stats(self) -> ArtworkStats:
        ...
