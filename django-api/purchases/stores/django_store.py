"""Django ORM implementation of the PurchaseStore."""

from contextlib import AbstractContextManager
from datetime import datetime

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, Q, Sum

from common.errors import DuplicateCodeError
from common.value_objects import Money
from purchases.domain import (
    CustomerSnapshot,
    LineItem,
    PaymentMethod,
    PurchaseId,
    PurchaseRecord,
    PurchaseStatus,
    RequestMetadata,
    RevenueStats,
    SalesOverview,
    ValidityWindow,
)
from purchases.models import Purchase, PurchaseLine
from purchases.stores.interfaces import PurchaseStore
from tickets.domain import TicketId


def to_domain(row: Purchase) -> PurchaseRecord:
    return PurchaseRecord(
        id=PurchaseId(row.id),
        owner_id=row.owner_id,
        customer=CustomerSnapshot(
            first_name=row.customer_first_name,
            last_name=row.customer_last_name,
            email=row.customer_email,
            phone=row.customer_phone,
        ),
        lines=tuple(
            LineItem(
                ticket_id=TicketId(line.ticket_id),
                ticket_label=line.ticket_label,
                quantity=line.quantity,
                unit_price=Money(line.unit_price),
                line_total=Money(line.line_total),
            )
            for line in row.lines.all()
        ),
        subtotal=Money(row.subtotal),
        tax=Money(row.tax),
        discount=Money(row.discount),
        total=Money(row.total),
        status=PurchaseStatus(row.status),
        redemption_code=row.redemption_code,
        qr_image=row.qr_image,
        purchased_at=row.purchased_at,
        validity=ValidityWindow(row.valid_from, row.valid_until),
        payment_method=PaymentMethod(row.payment_method),
        payment_reference=row.payment_reference,
        notes=row.notes,
        metadata=RequestMetadata(ip_address=row.ip_address, user_agent=row.user_agent),
    )


def _counts(rows, field: str) -> tuple[tuple[str, int], ...]:
    grouped = rows.values(field).annotate(count=Count("id")).order_by("-count", field)
    return tuple((row[field], row["count"]) for row in grouped)


class DjangoPurchaseStore(PurchaseStore):
    """Relational purchase store using Django ORM."""

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def insert_purchase(self, record: PurchaseRecord) -> PurchaseRecord:
        try:
            # Savepoint, so a code clash leaves an enclosing transaction usable
            with transaction.atomic():
                row = Purchase.objects.create(
                    id=record.id.value,
                    owner_id=record.owner_id,
                    customer_first_name=record.customer.first_name.strip(),
                    customer_last_name=record.customer.last_name.strip(),
                    customer_email=record.customer.email.strip().lower(),
                    customer_phone=record.customer.phone.strip(),
                    subtotal=record.subtotal.amount,
                    tax=record.tax.amount,
                    discount=record.discount.amount,
                    total=record.total.amount,
                    status=record.status.value,
                    redemption_code=record.redemption_code,
                    qr_image=record.qr_image,
                    purchased_at=record.purchased_at,
                    valid_from=record.validity.valid_from,
                    valid_until=record.validity.valid_until,
                    payment_method=record.payment_method.value,
                    payment_reference=record.payment_reference,
                    notes=record.notes,
                    ip_address=record.metadata.ip_address,
                    user_agent=record.metadata.user_agent[:500],
                )
                PurchaseLine.objects.bulk_create(
                    PurchaseLine(
                        purchase=row,
                        ticket_id=line.ticket_id.value,
                        position=position,
                        ticket_label=line.ticket_label,
                        quantity=line.quantity,
                        unit_price=line.unit_price.amount,
                        line_total=line.line_total.amount,
                    )
                    for position, line in enumerate(record.lines)
                )
        except IntegrityError as exc:
            if Purchase.objects.filter(redemption_code=record.redemption_code).exists():
                raise DuplicateCodeError(record.redemption_code) from exc
            raise
        return to_domain(Purchase.objects.prefetch_related("lines").get(pk=row.pk))

    def get_purchase(self, purchase_id: PurchaseId) -> PurchaseRecord | None:
        row = Purchase.objects.prefetch_related("lines").filter(pk=purchase_id.value).first()
        return to_domain(row) if row else None

    def get_purchase_for_owner(self, purchase_id: PurchaseId, owner_id: int) -> PurchaseRecord | None:
        row = (
            Purchase.objects.prefetch_related("lines")
            .filter(pk=purchase_id.value, owner_id=owner_id)
            .first()
        )
        return to_domain(row) if row else None

    def get_by_code(self, code: str) -> PurchaseRecord | None:
        row = Purchase.objects.prefetch_related("lines").filter(redemption_code=code).first()
        return to_domain(row) if row else None

    def save_transition(self, record: PurchaseRecord, previous: PurchaseStatus) -> bool:
        updated = Purchase.objects.filter(pk=record.id.value, status=previous.value).update(
            status=record.status.value,
            notes=record.notes,
        )
        return updated == 1

    def list_for_owner(self, owner_id: int, status: PurchaseStatus | None = None) -> list[PurchaseRecord]:
        rows = Purchase.objects.prefetch_related("lines").filter(owner_id=owner_id)
        if status is not None:
            rows = rows.filter(status=status.value)
        return [to_domain(row) for row in rows.order_by("-purchased_at")]

    def sales_overview(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> SalesOverview:
        counts = Purchase.objects.aggregate(
            total=Count("id"),
            confirmed=Count("id", filter=Q(status=Purchase.Status.CONFIRMED)),
            cancelled=Count("id", filter=Q(status=Purchase.Status.CANCELLED)),
        )
        confirmed = Purchase.objects.filter(status=Purchase.Status.CONFIRMED)
        if start is not None:
            confirmed = confirmed.filter(purchased_at__gte=start)
        if end is not None:
            confirmed = confirmed.filter(purchased_at__lt=end)
        revenue = confirmed.aggregate(sales=Sum("total"), count=Count("id"), average=Avg("total"))
        return SalesOverview(
            total_purchases=counts["total"],
            confirmed_purchases=counts["confirmed"],
            cancelled_purchases=counts["cancelled"],
            revenue=RevenueStats(
                total_sales=Money(revenue["sales"] or 0),
                purchase_count=revenue["count"],
                average_purchase=Money(revenue["average"] or 0),
            ),
            status_counts=_counts(Purchase.objects.all(), "status"),
            payment_counts=_counts(Purchase.objects.all(), "payment_method"),
        )
