"""Domain models representing persisted state.

Django ORM models are in artworks/models.py (persistence layer).
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime

from artworks.domain.value_objects import ArtworkCategory, ArtworkId, Dimensions
from common.value_objects import Money

MIN_YEAR = -5000
MAX_ARTWORK_PRICE = Money(10000)
AUDIO_GUIDE_PATTERN = re.compile(r"^https?://.+")


@dataclass(frozen=True)
class Artwork:
    """Domain representation of a catalogued artwork."""

    id: ArtworkId
    title: str
    artist: str
    year: int
    description: str
    image: str
    category: ArtworkCategory
    room: str
    scan_code: str
    qr_image: str
    price: Money = field(default_factory=Money.zero)
    is_available: bool = True
    audio_guide: str = ""
    dimensions: Dimensions = Dimensions()
    materials: tuple[str, ...] = ()
    techniques: tuple[str, ...] = ()
    view_count: int = 0
    scan_count: int = 0
    added_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 2 <= len(self.title.strip()) <= 200:
            raise ValueError("Title must be between 2 and 200 characters")
        if not 2 <= len(self.artist.strip()) <= 100:
            raise ValueError("Artist must be between 2 and 100 characters")
        if not MIN_YEAR <= self.year <= date.today().year + 1:
            raise ValueError("Year is out of range")
        if not 10 <= len(self.description.strip()) <= 2000:
            raise ValueError("Description must be between 10 and 2000 characters")
        if not self.image.strip():
            raise ValueError("An image is required")
        if not 2 <= len(self.room.strip()) <= 100:
            raise ValueError("Room must be between 2 and 100 characters")
        if self.price.amount > MAX_ARTWORK_PRICE.amount:
            raise ValueError(f"Artwork price cannot exceed {MAX_ARTWORK_PRICE}")
        if self.audio_guide and not AUDIO_GUIDE_PATTERN.match(self.audio_guide):
            raise ValueError("Audio guide must be an http(s) URL")
        if self.view_count < 0 or self.scan_count < 0:
            raise ValueError("Counters cannot be negative")

    def age(self, current_year: int) -> int:
        return current_year - self.year

    def image_url(self, media_base_url: str) -> str:
        """Absolute images pass through; stored file names resolve under /uploads/."""
        if self.image.startswith(("http://", "https://")):
            return self.image
        return f"{media_base_url.rstrip('/')}/uploads/{self.image.lstrip('/')}"


@dataclass(frozen=True)
class ArtworkStats:
    total_artworks: int
    available_artworks: int
    total_views: int
    total_scans: int
    category_counts: tuple[tuple[str, int], ...]
    room_counts: tuple[tuple[str, int], ...]
