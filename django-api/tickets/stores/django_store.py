"""Django ORM implementation of the TicketStore."""

from typing import Iterable

from django.db.models import Count, F, Sum
from django.db.models.deletion import ProtectedError
from django.utils import timezone

from common.value_objects import Money
from tickets.domain import TicketCategory, TicketDefinition, TicketId, TicketStats
from tickets.domain.errors import TicketInUseError
from tickets.domain.value_objects import stock_from_count, stock_to_count
from tickets.models import Ticket
from tickets.stores.interfaces import TicketStore


def to_domain(row: Ticket) -> TicketDefinition:
    return TicketDefinition(
        id=TicketId(row.id),
        label=row.label,
        description=row.description,
        category=TicketCategory(row.category),
        price=Money(row.price),
        stock=stock_from_count(row.stock),
        is_available=row.is_available,
        validity_days=row.validity_days,
        purchase_count=row.purchase_count,
        revenue=Money(row.revenue),
        benefits=tuple(row.benefits or ()),
        restrictions=tuple(row.restrictions or ()),
        min_age=row.min_age,
        max_age=row.max_age,
        created_by=row.created_by_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _editable(ticket: TicketDefinition) -> dict:
    return {
        "label": ticket.label.strip(),
        "description": ticket.description.strip(),
        "category": ticket.category.value,
        "price": ticket.price.amount,
        "stock": stock_to_count(ticket.stock),
        "is_available": ticket.is_available,
        "validity_days": ticket.validity_days,
        "benefits": list(ticket.benefits),
        "restrictions": list(ticket.restrictions),
        "min_age": ticket.min_age,
        "max_age": ticket.max_age,
    }


class DjangoTicketStore(TicketStore):
    """Relational ticket store using Django ORM."""

    def list_tickets(
        self,
        category: TicketCategory | None = None,
        available_only: bool = True,
    ) -> list[TicketDefinition]:
        rows = Ticket.objects.all()
        if available_only:
            rows = rows.filter(is_available=True)
        if category is not None:
            rows = rows.filter(category=category.value)
        return [to_domain(row) for row in rows.order_by("price", "created_at")]

    def get_ticket(self, ticket_id: TicketId) -> TicketDefinition | None:
        row = Ticket.objects.filter(pk=ticket_id.value).first()
        return to_domain(row) if row else None

    def save_ticket(self, ticket: TicketDefinition) -> TicketDefinition:
        editable = _editable(ticket)
        row, _ = Ticket.objects.update_or_create(
            id=ticket.id.value,
            defaults=editable,
            create_defaults={
                **editable,
                "purchase_count": ticket.purchase_count,
                "revenue": ticket.revenue.amount,
                "created_by_id": ticket.created_by,
            },
        )
        return to_domain(row)

    def update_fields(self, ticket: TicketDefinition, fields: Iterable[str]) -> TicketDefinition:
        editable = _editable(ticket)
        changed = {name: editable[name] for name in fields if name in editable}
        if changed:
            Ticket.objects.filter(pk=ticket.id.value).update(**changed, updated_at=timezone.now())
        return to_domain(Ticket.objects.get(pk=ticket.id.value))

    def delete_ticket(self, ticket_id: TicketId) -> None:
        try:
            Ticket.objects.filter(pk=ticket_id.value).delete()
        except ProtectedError as exc:
            raise TicketInUseError(str(ticket_id)) from exc

    def set_availability(self, ticket_id: TicketId, is_available: bool) -> TicketDefinition:
        Ticket.objects.filter(pk=ticket_id.value).update(is_available=is_available)
        return to_domain(Ticket.objects.get(pk=ticket_id.value))

    def decrement_stock(self, ticket_id: TicketId, quantity: int) -> bool:
        row = Ticket.objects.filter(pk=ticket_id.value).values("stock").first()
        if row is None:
            return False
        if row["stock"] is None:
            return True
        updated = Ticket.objects.filter(
            pk=ticket_id.value,
            stock__isnull=False,
            stock__gte=quantity,
        ).update(stock=F("stock") - quantity)
        return updated == 1

    def increment_stock(self, ticket_id: TicketId, quantity: int) -> None:
        Ticket.objects.filter(pk=ticket_id.value, stock__isnull=False).update(
            stock=F("stock") + quantity,
        )

    def add_sale(self, ticket_id: TicketId, quantity: int, amount: Money) -> None:
        Ticket.objects.filter(pk=ticket_id.value).update(
            purchase_count=F("purchase_count") + quantity,
            revenue=F("revenue") + amount.amount,
        )

    def popular_tickets(self, limit: int) -> list[TicketDefinition]:
        rows = Ticket.objects.filter(is_available=True).order_by("-purchase_count", "price")[:limit]
        return [to_domain(row) for row in rows]

    def ticket_stats(self) -> TicketStats:
        totals = Ticket.objects.aggregate(
            total=Count("id"),
            revenue=Sum("revenue"),
        )
        per_category = (
            Ticket.objects.values("category")
            .annotate(count=Count("id"))
            .order_by("-count", "category")
        )
        return TicketStats(
            total_tickets=totals["total"] or 0,
            available_tickets=Ticket.objects.filter(is_available=True).count(),
            total_revenue=Money(totals["revenue"] or 0),
            category_counts=tuple((row["category"], row["count"]) for row in per_category),
        )
