"""Artwork catalogue service.

Visitors browse and scan; administrators curate. Every artwork carries a
`QR...` scan code, allocated the same way purchase codes are.
"""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Any, Mapping

from artworks.domain import Artwork, ArtworkCategory, ArtworkId, ArtworkStats, DimensionUnit, Dimensions
from artworks.domain.errors import ArtworkNotFoundError, ArtworkUnavailableError
from artworks.stores.interfaces import ArtworkStore
from common.codes import UniqueCodeGenerator
from common.errors import DuplicateCodeError, InvalidIdError, ValidationFailedError
from common.qr import CodeEncoder
from common.value_objects import Money

logger = logging.getLogger(__name__)

SEARCH_MIN_LENGTH = 2
SEARCH_MAX_LENGTH = 100

EDITABLE_FIELDS = (
    "title",
    "artist",
    "year",
    "description",
    "image",
    "audio_guide",
    "category",
    "room",
    "price",
    "is_available",
    "dimensions",
    "materials",
    "techniques",
)


def parse_category(value: str | None) -> ArtworkCategory | None:
    if value in (None, ""):
        return None
    try:
        return ArtworkCategory(value)
    except ValueError as exc:
        raise ValidationFailedError(f"Unknown artwork category: {value}") from exc


def _dimensions(value: Mapping[str, Any] | None) -> Dimensions:
    if not value:
        return Dimensions()
    return Dimensions(
        width=_decimal_or_none(value.get("width")),
        height=_decimal_or_none(value.get("height")),
        depth=_decimal_or_none(value.get("depth")),
        unit=DimensionUnit(value.get("unit") or DimensionUnit.CM.value),
    )


def _decimal_or_none(value) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def _domain_values(fields: Mapping[str, Any]) -> dict[str, Any]:
    values = {}
    for name in EDITABLE_FIELDS:
        if name not in fields:
            continue
        value = fields[name]
        if name == "category":
            value = ArtworkCategory(value)
        elif name == "price":
            value = Money(value)
        elif name == "dimensions":
            value = _dimensions(value)
        elif name in ("materials", "techniques"):
            value = tuple(item.strip() for item in value if item and item.strip())
        elif name == "audio_guide":
            value = value or ""
        values[name] = value
    return values


class ArtworkService:
    """Service for artwork catalogue operations."""

    def __init__(
        self,
        store: ArtworkStore,
        codes: UniqueCodeGenerator,
        encoder: CodeEncoder,
        code_attempts: int = 3,
    ) -> None:
        self._store = store
        self._codes = codes
        self._encoder = encoder
        self._code_attempts = code_attempts

    def list_artworks(
        self,
        query: str | None = None,
        category: str | None = None,
        room: str | None = None,
    ) -> list[Artwork]:
        query = (query or "").strip() or None
        if query is not None and not SEARCH_MIN_LENGTH <= len(query) <= SEARCH_MAX_LENGTH:
            raise ValidationFailedError(
                f"Search text must be between {SEARCH_MIN_LENGTH} and {SEARCH_MAX_LENGTH} characters"
            )
        return self._store.list_artworks(query=query, category=parse_category(category), room=room or None)

    def _find(self, artwork_id: str) -> Artwork:
        try:
            parsed = ArtworkId.from_string(artwork_id)
        except ValueError as exc:
            raise InvalidIdError() from exc
        artwork = self._store.get_artwork(parsed)
        if artwork is None:
            raise ArtworkNotFoundError(artwork_id)
        return artwork

    def get_artwork(self, artwork_id: str) -> Artwork:
        """Return an artwork and count the view.

        Raises:
            InvalidIdError: If artwork_id is not a valid UUID.
            ArtworkNotFoundError: If the artwork does not exist.
        """
        artwork = self._find(artwork_id)
        self._store.record_view(artwork.id)
        return replace(artwork, view_count=artwork.view_count + 1)

    def scan(self, code: str) -> Artwork:
        """Resolve a scanned code and count the scan.

        Raises:
            ArtworkNotFoundError: If no artwork carries the code.
            ArtworkUnavailableError: If the artwork is off display.
        """
        artwork = self._store.get_by_scan_code(code.strip())
        if artwork is None:
            raise ArtworkNotFoundError(code)
        if not artwork.is_available:
            raise ArtworkUnavailableError(artwork.title)
        self._store.record_scan(artwork.id)
        return replace(artwork, scan_count=artwork.scan_count + 1)

    def create_artwork(self, fields: Mapping[str, Any], added_by: int | None) -> Artwork:
        try:
            values = _domain_values(fields)
        except (TypeError, ValueError) as exc:
            raise ValidationFailedError(str(exc)) from exc

        code = ""
        for attempt in range(1, self._code_attempts + 1):
            code = self._codes.generate()
            qr_image = self._encoder.encode(code)
            try:
                artwork = Artwork(
                    id=ArtworkId(uuid.uuid4()),
                    scan_code=code,
                    qr_image=qr_image,
                    added_by=added_by,
                    **values,
                )
            except (TypeError, ValueError) as exc:
                raise ValidationFailedError(str(exc)) from exc
            try:
                saved = self._store.insert_artwork(artwork)
            except DuplicateCodeError:
                logger.warning("Scan code %s already taken (attempt %s)", code, attempt)
                continue
            logger.info("Artwork %s (%s) added by user %s", saved.id, saved.title, added_by)
            return saved
        logger.error("Gave up allocating a scan code after %s attempts", self._code_attempts)
        raise DuplicateCodeError(code)

    def update_artwork(self, artwork_id: str, fields: Mapping[str, Any]) -> Artwork:
        current = self._find(artwork_id)
        try:
            artwork = replace(current, **_domain_values(fields))
        except (TypeError, ValueError) as exc:
            raise ValidationFailedError(str(exc)) from exc
        return self._store.update_artwork(artwork)

    def delete_artwork(self, artwork_id: str) -> None:
        artwork = self._find(artwork_id)
        self._store.delete_artwork(artwork.id)
        logger.info("Artwork %s deleted", artwork.id)

    def toggle_availability(self, artwork_id: str) -> Artwork:
        artwork = self._find(artwork_id)
        return self._store.set_availability(artwork.id, not artwork.is_available)

    def popular_artworks(self, limit: int = 10) -> list[Artwork]:
        return self._store.popular_artworks(limit)

    def stats(self) -> ArtworkStats:
        return self._store.artwork_stats()
