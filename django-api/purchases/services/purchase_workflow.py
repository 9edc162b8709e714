"""Purchase workflow - checkout, cancellation, refund and reporting.

Checkout order:
1. Price every line against the live ticket catalogue
2. Aggregate subtotal, tax and total
3. Issue a redemption code and render it as a QR image
4. Persist the record and commit stock in one transaction

A redemption-code clash on insert rolls the attempt back and is retried
with a fresh code, up to `MuseumConfig.code_attempts` times.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Mapping, Sequence

from django.utils import timezone

from common.codes import UniqueCodeGenerator
from common.config import MuseumConfig
from common.errors import DuplicateCodeError, ValidationFailedError
from common.qr import CodeEncoder
from common.value_objects import Money
from purchases.domain import (
    CustomerSnapshot,
    LineItem,
    PaymentMethod,
    PurchaseId,
    PurchaseRecord,
    PurchaseStatus,
    RequestMetadata,
    SalesOverview,
    ValidityWindow,
)
from purchases.domain.errors import (
    InvalidStateError,
    PurchaseNotFoundError,
    TicketUnavailableError,
    UnknownTicketError,
)
from purchases.domain.transitions import cancel_purchase, compute_totals, refund_purchase
from purchases.stores.interfaces import PurchaseStore
from tickets.domain import TicketDefinition, TicketId
from tickets.services import InventoryService
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineRequest:
    ticket_id: str
    quantity: int


def parse_status(value: str | None) -> PurchaseStatus | None:
    if value in (None, ""):
        return None
    try:
        return PurchaseStatus(value)
    except ValueError as exc:
        raise ValidationFailedError(f"Unknown purchase status: {value}") from exc


def parse_purchase_id(value: str) -> PurchaseId:
    """Malformed ids read as missing purchases."""
    try:
        return PurchaseId.from_string(value)
    except ValueError as exc:
        raise PurchaseNotFoundError(value) from exc


def day_bounds(start_date: date | None, end_date: date | None) -> tuple[datetime | None, datetime | None]:
    """Turn inclusive calendar dates into a half-open datetime range."""
    tz = timezone.get_current_timezone()
    start = datetime.combine(start_date, time.min, tzinfo=tz) if start_date else None
    end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=tz) if end_date else None
    return start, end


class PurchaseWorkflow:
    """Service for the purchase lifecycle."""

    def __init__(
        self,
        store: PurchaseStore,
        tickets: TicketStore,
        inventory: InventoryService,
        codes: UniqueCodeGenerator,
        encoder: CodeEncoder,
        config: MuseumConfig,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._tickets = tickets
        self._inventory = inventory
        self._codes = codes
        self._encoder = encoder
        self._config = config
        self._clock = clock

    def _price_line(self, line: LineRequest) -> tuple[TicketDefinition, LineItem]:
        try:
            ticket_id = TicketId.from_string(line.ticket_id)
        except ValueError as exc:
            raise UnknownTicketError(line.ticket_id) from exc
        ticket = self._tickets.get_ticket(ticket_id)
        if ticket is None:
            raise UnknownTicketError(line.ticket_id)
        if not self._inventory.is_available_for_purchase(ticket, line.quantity):
            raise TicketUnavailableError(ticket.label, line.quantity)
        try:
            item = LineItem.priced(ticket.id, ticket.label, line.quantity, ticket.price)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc
        return ticket, item

    def purchase(
        self,
        owner_id: int,
        customer: Mapping[str, Any],
        lines: Sequence[LineRequest],
        payment_method: str,
        notes: str = "",
        payment_reference: str = "",
        metadata: RequestMetadata | None = None,
        discount: Money | None = None,
    ) -> PurchaseRecord:
        """Check out `lines` for `owner_id`.

        `discount` comes off the taxed amount; it is never computed here.

        Raises:
            UnknownTicketError: If a line names a missing ticket.
            TicketUnavailableError: If a ticket is off sale or short of stock.
            InsufficientStockError: If stock drained between check and commit.
            EncodingFailedError: If the QR image cannot be rendered.
            DuplicateCodeError: If every code attempt collided.
        """
        if not lines:
            raise ValidationFailedError("At least one item is required")
        try:
            snapshot = CustomerSnapshot(
                first_name=customer["first_name"],
                last_name=customer["last_name"],
                email=customer["email"],
                phone=customer.get("phone") or "",
            )
            method = PaymentMethod(payment_method)
        except (KeyError, ValueError) as exc:
            raise ValidationFailedError(str(exc)) from exc

        priced = [self._price_line(line) for line in lines]
        items = tuple(item for _, item in priced)
        try:
            totals = compute_totals(items, self._config.tax_rate, discount)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc

        code = ""
        for attempt in range(1, self._config.code_attempts + 1):
            code = self._codes.generate()
            qr_image = self._encoder.encode(code)
            now = self._clock()
            record = PurchaseRecord(
                id=PurchaseId(uuid.uuid4()),
                owner_id=owner_id,
                customer=snapshot,
                lines=items,
                subtotal=totals.subtotal,
                tax=totals.tax,
                discount=totals.discount,
                total=totals.total,
                status=PurchaseStatus.CONFIRMED,
                redemption_code=code,
                qr_image=qr_image,
                purchased_at=now,
                validity=ValidityWindow(now, now + timedelta(days=self._config.purchase_validity_days)),
                payment_method=method,
                payment_reference=payment_reference,
                notes=notes,
                metadata=metadata or RequestMetadata(),
            )
            try:
                with self._store.atomic():
                    saved = self._store.insert_purchase(record)
                    for ticket, item in priced:
                        self._inventory.reserve(ticket, item.quantity)
                        self._inventory.record_sale(ticket, item.quantity, item.line_total)
            except DuplicateCodeError:
                logger.warning("Redemption code %s already taken (attempt %s)", code, attempt)
                continue
            logger.info(
                "Purchase %s confirmed for user %s: %s items, total %s",
                saved.redemption_code,
                owner_id,
                saved.total_items,
                saved.total,
            )
            return saved
        logger.error("Gave up allocating a redemption code after %s attempts", self._config.code_attempts)
        raise DuplicateCodeError(code)

    def get_purchase(self, purchase_id: str, owner_id: int) -> PurchaseRecord:
        """Return one of the owner's purchases.

        Raises:
            PurchaseNotFoundError: If absent, malformed or owned by someone else.
        """
        record = self._store.get_purchase_for_owner(parse_purchase_id(purchase_id), owner_id)
        if record is None:
            raise PurchaseNotFoundError(purchase_id)
        return record

    def list_purchases(self, owner_id: int, status: str | None = None) -> list[PurchaseRecord]:
        return self._store.list_for_owner(owner_id, parse_status(status))

    def _release_lines(self, record: PurchaseRecord) -> None:
        for line in record.lines:
            ticket = self._tickets.get_ticket(line.ticket_id)
            if ticket is not None:
                self._inventory.release(ticket, line.quantity)

    def cancel(self, purchase_id: str, owner_id: int, reason: str = "") -> PurchaseRecord:
        """Cancel a confirmed purchase and put its stock back.

        Raises:
            PurchaseNotFoundError: If the owner has no such purchase.
            InvalidStateError: If the purchase is not confirmed.
        """
        record = self.get_purchase(purchase_id, owner_id)
        cancelled = cancel_purchase(record, reason)
        with self._store.atomic():
            if not self._store.save_transition(cancelled, record.status):
                raise InvalidStateError("cancel", "no longer confirmed")
            self._release_lines(cancelled)
        logger.info("Purchase %s cancelled by user %s", record.redemption_code, owner_id)
        return cancelled

    def refund(self, purchase_id: str, reason: str = "") -> PurchaseRecord:
        """Refund a confirmed or cancelled purchase. Inventory is untouched."""
        record = self._store.get_purchase(parse_purchase_id(purchase_id))
        if record is None:
            raise PurchaseNotFoundError(purchase_id)
        refunded = refund_purchase(record, reason)
        if not self._store.save_transition(refunded, record.status):
            raise InvalidStateError("refund", "changed concurrently")
        logger.info("Purchase %s refunded", record.redemption_code)
        return refunded

    def sales_overview(self, start_date: date | None = None, end_date: date | None = None) -> SalesOverview:
        if start_date and end_date and start_date > end_date:
            raise ValidationFailedError("start_date must not be after end_date")
        start, end = day_bounds(start_date, end_date)
        return self._store.sales_overview(start, end)
