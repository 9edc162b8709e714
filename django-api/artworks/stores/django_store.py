"""Django ORM implementation of the ArtworkStore."""

from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q, Sum

from artworks.domain import Artwork, ArtworkCategory, ArtworkId, ArtworkStats, DimensionUnit, Dimensions
from artworks.models import Artwork as ArtworkRow
from artworks.stores.interfaces import ArtworkStore
from common.errors import DuplicateCodeError
from common.value_objects import Money


def to_domain(row: ArtworkRow) -> Artwork:
    return Artwork(
        id=ArtworkId(row.id),
        title=row.title,
        artist=row.artist,
        year=row.year,
        description=row.description,
        image=row.image,
        category=ArtworkCategory(row.category),
        room=row.room,
        scan_code=row.scan_code,
        qr_image=row.qr_image,
        price=Money(row.price),
        is_available=row.is_available,
        audio_guide=row.audio_guide,
        dimensions=Dimensions(
            width=row.width,
            height=row.height,
            depth=row.depth,
            unit=DimensionUnit(row.dimension_unit),
        ),
        materials=tuple(row.materials or ()),
        techniques=tuple(row.techniques or ()),
        view_count=row.view_count,
        scan_count=row.scan_count,
        added_by=row.added_by_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _editable(artwork: Artwork) -> dict:
    return {
        "title": artwork.title.strip(),
        "artist": artwork.artist.strip(),
        "year": artwork.year,
        "description": artwork.description.strip(),
        "image": artwork.image.strip(),
        "audio_guide": artwork.audio_guide,
        "category": artwork.category.value,
        "room": artwork.room.strip(),
        "price": artwork.price.amount,
        "is_available": artwork.is_available,
        "width": artwork.dimensions.width,
        "height": artwork.dimensions.height,
        "depth": artwork.dimensions.depth,
        "dimension_unit": artwork.dimensions.unit.value,
        "materials": list(artwork.materials),
        "techniques": list(artwork.techniques),
    }


def _counts(field: str) -> tuple[tuple[str, int], ...]:
    grouped = ArtworkRow.objects.values(field).annotate(count=Count("id")).order_by("-count", field)
    return tuple((row[field], row["count"]) for row in grouped)


class DjangoArtworkStore(ArtworkStore):
    """Relational artwork store using Django ORM."""

    def list_artworks(
        self,
        query: str | None = None,
        category: ArtworkCategory | None = None,
        room: str | None = None,
    ) -> list[Artwork]:
        rows = ArtworkRow.objects.all()
        if category is not None:
            rows = rows.filter(category=category.value)
        if room:
            rows = rows.filter(room=room)
        if query:
            rows = rows.filter(
                Q(title__icontains=query) | Q(artist__icontains=query) | Q(description__icontains=query)
            )
        return [to_domain(row) for row in rows.order_by("-created_at")]

    def get_artwork(self, artwork_id: ArtworkId) -> Artwork | None:
        row = ArtworkRow.objects.filter(pk=artwork_id.value).first()
        return to_domain(row) if row else None

    def get_by_scan_code(self, code: str) -> Artwork | None:
        row = ArtworkRow.objects.filter(scan_code=code).first()
        return to_domain(row) if row else None

    def insert_artwork(self, artwork: Artwork) -> Artwork:
        try:
            with transaction.atomic():
                row = ArtworkRow.objects.create(
                    id=artwork.id.value,
                    scan_code=artwork.scan_code,
                    qr_image=artwork.qr_image,
                    added_by_id=artwork.added_by,
                    **_editable(artwork),
                )
        except IntegrityError as exc:
            if ArtworkRow.objects.filter(scan_code=artwork.scan_code).exists():
                raise DuplicateCodeError(artwork.scan_code) from exc
            raise
        return to_domain(row)

    def update_artwork(self, artwork: Artwork) -> Artwork:
        ArtworkRow.objects.filter(pk=artwork.id.value).update(**_editable(artwork))
        return to_domain(ArtworkRow.objects.get(pk=artwork.id.value))

    def delete_artwork(self, artwork_id: ArtworkId) -> None:
        ArtworkRow.objects.filter(pk=artwork_id.value).delete()

    def set_availability(self, artwork_id: ArtworkId, is_available: bool) -> Artwork:
        ArtworkRow.objects.filter(pk=artwork_id.value).update(is_available=is_available)
        return to_domain(ArtworkRow.objects.get(pk=artwork_id.value))

    def record_view(self, artwork_id: ArtworkId) -> None:
        ArtworkRow.objects.filter(pk=artwork_id.value).update(view_count=F("view_count") + 1)

    def record_scan(self, artwork_id: ArtworkId) -> None:
        ArtworkRow.objects.filter(pk=artwork_id.value).update(scan_count=F("scan_count") + 1)

    def popular_artworks(self, limit: int) -> list[Artwork]:
        rows = ArtworkRow.objects.filter(is_available=True).order_by("-view_count", "-scan_count", "title")[:limit]
        return [to_domain(row) for row in rows]

    def artwork_stats(self) -> ArtworkStats:
        totals = ArtworkRow.objects.aggregate(
            total=Count("id"),
            available=Count("id", filter=Q(is_available=True)),
            views=Sum("view_count"),
            scans=Sum("scan_count"),
        )
        return ArtworkStats(
            total_artworks=totals["total"],
            available_artworks=totals["available"],
            total_views=totals["views"] or 0,
            total_scans=totals["scans"] or 0,
            category_counts=_counts("category"),
            room_counts=_counts("room"),
        )
