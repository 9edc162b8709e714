"""Unit tests for services against in-memory stores.

These test orchestration, rollback and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from artworks.domain.errors import ArtworkNotFoundError, ArtworkUnavailableError
from artworks.services import ArtworkService
from common.codes import UniqueCodeGenerator
from common.config import MuseumConfig
from common.errors import DuplicateCodeError, EncodingFailedError, InvalidIdError, ValidationFailedError
from common.value_objects import Money
from purchases.domain import PurchaseStatus
from purchases.domain.errors import (
    CodeNotFoundError,
    InvalidStateError,
    PurchaseNotFoundError,
    TicketUnavailableError,
    UnknownTicketError,
)
from purchases.services import LineRequest, PurchaseWorkflow, RedemptionVerifier
from tickets.domain import BoundedStock, UnlimitedStock
from tickets.domain.errors import InsufficientStockError, TicketNotFoundError
from tickets.services import InventoryService, TicketService

NOW = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)
OWNER = 7
CUSTOMER = {"first_name": "Awa", "last_name": "Diop", "email": "awa@example.com", "phone": ""}


def build_workflow(purchase_store, ticket_store, encoder, codes=None, config=None, clock=lambda: NOW):
    return PurchaseWorkflow(
        store=purchase_store,
        tickets=ticket_store,
        inventory=InventoryService(ticket_store),
        codes=codes or UniqueCodeGenerator("PUR"),
        encoder=encoder,
        config=config or MuseumConfig(),
        clock=clock,
    )


@pytest.fixture
def workflow(purchase_store, ticket_store, stub_encoder):
    return build_workflow(purchase_store, ticket_store, stub_encoder)


@pytest.fixture
def ticket(ticket_store, make_definition):
    return ticket_store.save_ticket(make_definition(price=Money(1000), stock=BoundedStock(5)))


def buy(workflow, ticket, quantity=2, owner=OWNER):
    return workflow.purchase(owner, CUSTOMER, [LineRequest(str(ticket.id), quantity)], "card")


class TestPurchaseWorkflow:
    def test_purchase_prices_and_commits_stock(self, workflow, ticket, ticket_store):
        record = buy(workflow, ticket)
        assert record.subtotal == Money(2000)
        assert record.tax == Money(360)
        assert record.total == Money(2360)
        assert record.status is PurchaseStatus.CONFIRMED
        assert record.validity.valid_until == NOW + timedelta(days=30)
        stored = ticket_store.get_ticket(ticket.id)
        assert stored.stock == BoundedStock(3)
        assert stored.purchase_count == 2
        assert stored.revenue == Money(2000)

    def test_lines_capture_ticket_label_and_price(self, workflow, ticket):
        line = buy(workflow, ticket).lines[0]
        assert line.ticket_label == ticket.label
        assert line.unit_price == Money(1000)
        assert line.line_total == Money(2000)

    def test_qr_image_encodes_the_redemption_code(self, workflow, ticket, stub_encoder):
        record = buy(workflow, ticket)
        assert stub_encoder.encoded == [record.redemption_code]
        assert record.qr_image.startswith("data:image/png;base64,")

    def test_unknown_ticket(self, workflow, purchase_store):
        with pytest.raises(UnknownTicketError):
            workflow.purchase(OWNER, CUSTOMER, [LineRequest(str(uuid.uuid4()), 1)], "card")
        assert purchase_store.records == {}

    def test_malformed_ticket_id_is_unknown(self, workflow):
        with pytest.raises(UnknownTicketError):
            workflow.purchase(OWNER, CUSTOMER, [LineRequest("abc", 1)], "card")

    def test_over_stock_leaves_everything_untouched(self, workflow, ticket, ticket_store, purchase_store):
        with pytest.raises(TicketUnavailableError):
            buy(workflow, ticket, quantity=6)
        assert purchase_store.records == {}
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(5)

    def test_unavailable_ticket(self, workflow, ticket, ticket_store):
        ticket_store.set_availability(ticket.id, False)
        with pytest.raises(TicketUnavailableError):
            buy(workflow, ticket, quantity=1)

    def test_unlimited_stock_never_changes(self, workflow, ticket_store, make_definition):
        unlimited = ticket_store.save_ticket(make_definition(stock=UnlimitedStock()))
        buy(workflow, unlimited, quantity=20)
        assert ticket_store.get_ticket(unlimited.id).stock == UnlimitedStock()

    def test_drained_stock_rolls_back_the_record(self, make_definition, stub_encoder, drained_stores):
        tickets, purchases = drained_stores
        ticket = tickets.save_ticket(make_definition(stock=BoundedStock(5)))
        with pytest.raises(InsufficientStockError):
            buy(build_workflow(purchases, tickets, stub_encoder), ticket)
        assert purchases.records == {}
        assert tickets.get_ticket(ticket.id).purchase_count == 0

    def test_encoding_failure_aborts_before_any_write(
        self, purchase_store, ticket_store, ticket, failing_encoder
    ):
        with pytest.raises(EncodingFailedError):
            buy(build_workflow(purchase_store, ticket_store, failing_encoder), ticket)
        assert purchase_store.records == {}
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(5)

    def test_code_collision_is_retried(self, purchase_store, ticket_store, ticket, stub_encoder, scripted_codes):
        workflow = build_workflow(
            purchase_store, ticket_store, stub_encoder, codes=scripted_codes("PURA", "PURA", "PURB")
        )
        buy(workflow, ticket, quantity=1)
        second = buy(workflow, ticket, quantity=1)
        assert second.redemption_code == "PURB"
        assert len(purchase_store.records) == 2
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(3)

    def test_code_collisions_give_up_after_configured_attempts(
        self, purchase_store, ticket_store, ticket, stub_encoder, scripted_codes
    ):
        workflow = build_workflow(
            purchase_store,
            ticket_store,
            stub_encoder,
            codes=scripted_codes("PURA", "PURA", "PURA"),
            config=MuseumConfig(code_attempts=2),
        )
        buy(workflow, ticket, quantity=1)
        with pytest.raises(DuplicateCodeError):
            buy(workflow, ticket, quantity=1)
        assert len(purchase_store.records) == 1
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(4)

    def test_configured_tax_rate(self, purchase_store, ticket_store, ticket, stub_encoder):
        workflow = build_workflow(
            purchase_store, ticket_store, stub_encoder, config=MuseumConfig(tax_rate=Decimal("0.10"))
        )
        assert buy(workflow, ticket).total == Money(2200)

    def test_discount_is_applied_as_given(self, workflow, ticket):
        record = workflow.purchase(
            OWNER, CUSTOMER, [LineRequest(str(ticket.id), 2)], "card", discount=Money(360)
        )
        assert record.discount == Money(360)
        assert record.total == Money(2000)

    def test_oversized_discount_leaves_stock_alone(self, workflow, ticket, ticket_store, purchase_store):
        with pytest.raises(ValidationFailedError):
            workflow.purchase(OWNER, CUSTOMER, [LineRequest(str(ticket.id), 1)], "card", discount=Money(5000))
        assert purchase_store.records == {}
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(5)

    def test_invalid_customer(self, workflow, ticket):
        with pytest.raises(ValidationFailedError):
            workflow.purchase(OWNER, {**CUSTOMER, "email": "nope"}, [LineRequest(str(ticket.id), 1)], "card")

    def test_unknown_payment_method(self, workflow, ticket):
        with pytest.raises(ValidationFailedError):
            workflow.purchase(OWNER, CUSTOMER, [LineRequest(str(ticket.id), 1)], "cheque")

    def test_cancel_releases_stock(self, workflow, ticket, ticket_store, purchase_store):
        record = buy(workflow, ticket)
        cancelled = workflow.cancel(str(record.id), OWNER, "changed plans")
        assert cancelled.status is PurchaseStatus.CANCELLED
        assert cancelled.notes.endswith("Cancelled: changed plans")
        assert purchase_store.get_purchase(record.id).status is PurchaseStatus.CANCELLED
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(5)

    def test_cancel_is_owner_scoped(self, workflow, ticket):
        record = buy(workflow, ticket)
        with pytest.raises(PurchaseNotFoundError):
            workflow.cancel(str(record.id), OWNER + 1)

    def test_cancel_twice_is_refused(self, workflow, ticket, ticket_store):
        record = buy(workflow, ticket)
        workflow.cancel(str(record.id), OWNER)
        with pytest.raises(InvalidStateError):
            workflow.cancel(str(record.id), OWNER)
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(5)

    def test_refund_leaves_inventory_alone(self, workflow, ticket, ticket_store):
        record = buy(workflow, ticket)
        refunded = workflow.refund(str(record.id), "duplicate payment")
        assert refunded.status is PurchaseStatus.REFUNDED
        assert ticket_store.get_ticket(ticket.id).stock == BoundedStock(3)

    def test_malformed_purchase_id_is_not_found(self, workflow):
        with pytest.raises(PurchaseNotFoundError):
            workflow.get_purchase("not-a-uuid", OWNER)

    def test_list_filters_by_status(self, workflow, ticket):
        first = buy(workflow, ticket, quantity=1)
        buy(workflow, ticket, quantity=1)
        workflow.cancel(str(first.id), OWNER)
        cancelled = workflow.list_purchases(OWNER, status="cancelled")
        assert [record.id for record in cancelled] == [first.id]
        assert len(workflow.list_purchases(OWNER)) == 2

    def test_list_rejects_unknown_status(self, workflow):
        with pytest.raises(ValidationFailedError):
            workflow.list_purchases(OWNER, status="lost")

    def test_sales_overview_counts_confirmed_revenue(self, workflow, ticket):
        buy(workflow, ticket, quantity=1)
        cancelled = buy(workflow, ticket, quantity=1)
        workflow.cancel(str(cancelled.id), OWNER)
        overview = workflow.sales_overview()
        assert overview.total_purchases == 2
        assert overview.cancelled_purchases == 1
        assert overview.revenue.total_sales == Money(1180)
        assert overview.revenue.purchase_count == 1

    def test_sales_overview_rejects_inverted_range(self, workflow):
        with pytest.raises(ValidationFailedError):
            workflow.sales_overview(date(2025, 3, 2), date(2025, 3, 1))


class TestRedemptionVerifier:
    def test_unknown_code(self, purchase_store):
        with pytest.raises(CodeNotFoundError):
            RedemptionVerifier(purchase_store, clock=lambda: NOW).verify("PUR000")

    def test_confirmed_purchase_is_valid(self, workflow, ticket, purchase_store):
        record = buy(workflow, ticket)
        redemption = RedemptionVerifier(purchase_store, clock=lambda: NOW).verify(record.redemption_code)
        assert redemption.result.valid
        assert redemption.record.id == record.id

    def test_cancelled_purchase_is_not_confirmed(self, workflow, ticket, purchase_store):
        record = buy(workflow, ticket)
        workflow.cancel(str(record.id), OWNER)
        result = RedemptionVerifier(purchase_store, clock=lambda: NOW).verify(record.redemption_code).result
        assert not result.valid
        assert result.reason == "not_confirmed"

    def test_lapsed_purchase_is_expired(self, workflow, ticket, purchase_store):
        record = buy(workflow, ticket)
        later = NOW + timedelta(days=31)
        result = RedemptionVerifier(purchase_store, clock=lambda: later).verify(record.redemption_code).result
        assert result.reason == "expired"


class TestTicketService:
    FIELDS = {
        "label": "Guided tour",
        "description": "One hour tour with a curator",
        "category": "guided_tour",
        "price": Decimal("2500"),
    }

    def test_get_ticket_invalid_id_raises_error(self, ticket_store):
        with pytest.raises(InvalidIdError):
            TicketService(ticket_store).get_ticket("not-a-uuid")

    def test_get_ticket_not_found_raises_error(self, ticket_store):
        with pytest.raises(TicketNotFoundError):
            TicketService(ticket_store).get_ticket(str(uuid.uuid4()))

    @pytest.mark.parametrize("stock", [-1, None])
    def test_create_maps_sentinels_to_unlimited(self, ticket_store, stock):
        created = TicketService(ticket_store).create_ticket({**self.FIELDS, "stock": stock}, created_by=1)
        assert created.stock == UnlimitedStock()
        assert created.created_by == 1

    def test_create_enforces_invariants(self, ticket_store):
        with pytest.raises(ValidationFailedError):
            TicketService(ticket_store).create_ticket({**self.FIELDS, "min_age": 16, "max_age": 10}, None)

    def test_update_replaces_editable_fields(self, ticket_store, ticket):
        updated = TicketService(ticket_store).update_ticket(str(ticket.id), {**self.FIELDS, "stock": 9})
        assert updated.label == "Guided tour"
        assert updated.stock == BoundedStock(9)

    def test_update_without_stock_keeps_stored_stock(self, ticket_store, ticket):
        ticket_store.decrement_stock(ticket.id, 2)
        updated = TicketService(ticket_store).update_ticket(str(ticket.id), {"label": "Late opening"})
        assert updated.label == "Late opening"
        assert updated.stock == BoundedStock(3)

    def test_toggle_availability(self, ticket_store, ticket):
        assert not TicketService(ticket_store).toggle_availability(str(ticket.id)).is_available

    def test_list_hides_unavailable(self, ticket_store, ticket, make_definition):
        ticket_store.save_ticket(make_definition(is_available=False))
        assert [t.id for t in TicketService(ticket_store).list_tickets()] == [ticket.id]

    def test_list_rejects_unknown_category(self, ticket_store):
        with pytest.raises(ValidationFailedError):
            TicketService(ticket_store).list_tickets(category="concert")


class TestArtworkService:
    FIELDS = {
        "title": "Les Lutteurs",
        "artist": "Ousmane Sow",
        "year": 1988,
        "description": "Monumental sculpture of Nuba wrestlers",
        "image": "lutteurs.jpg",
        "category": "sculpture",
        "room": "Salle A",
        "price": Decimal("0"),
        "dimensions": {"width": Decimal("120"), "height": Decimal("210"), "unit": "cm"},
    }

    def _service(self, store, encoder, codes=None):
        return ArtworkService(store, codes=codes or UniqueCodeGenerator("QR"), encoder=encoder)

    def test_create_assigns_scan_code(self, artwork_store, stub_encoder):
        artwork = self._service(artwork_store, stub_encoder).create_artwork(self.FIELDS, added_by=1)
        assert artwork.scan_code.startswith("QR")
        assert stub_encoder.encoded == [artwork.scan_code]
        assert artwork.dimensions.height == Decimal("210")

    def test_create_retries_taken_code(self, artwork_store, stub_encoder, scripted_codes):
        artwork_store.taken_codes.add("QRTAKEN")
        service = self._service(artwork_store, stub_encoder, scripted_codes("QRTAKEN", "QRFREE"))
        assert service.create_artwork(self.FIELDS, added_by=1).scan_code == "QRFREE"

    def test_create_rejects_bad_values(self, artwork_store, stub_encoder):
        with pytest.raises(ValidationFailedError):
            self._service(artwork_store, stub_encoder).create_artwork({**self.FIELDS, "year": -6000}, None)

    def test_get_counts_views(self, artwork_store, stub_encoder):
        service = self._service(artwork_store, stub_encoder)
        artwork = service.create_artwork(self.FIELDS, added_by=1)
        assert service.get_artwork(str(artwork.id)).view_count == 1
        assert artwork_store.get_artwork(artwork.id).view_count == 1

    def test_scan_counts_scans(self, artwork_store, stub_encoder):
        service = self._service(artwork_store, stub_encoder)
        artwork = service.create_artwork(self.FIELDS, added_by=1)
        assert service.scan(artwork.scan_code).scan_count == 1

    def test_scan_unknown_code(self, artwork_store, stub_encoder):
        with pytest.raises(ArtworkNotFoundError):
            self._service(artwork_store, stub_encoder).scan("QR000")

    def test_scan_unavailable_artwork(self, artwork_store, stub_encoder):
        service = self._service(artwork_store, stub_encoder)
        artwork = service.create_artwork({**self.FIELDS, "is_available": False}, added_by=1)
        with pytest.raises(ArtworkUnavailableError):
            service.scan(artwork.scan_code)
        assert artwork_store.get_artwork(artwork.id).scan_count == 0

    @pytest.mark.parametrize("query", ["a", "x" * 101])
    def test_search_length_is_checked(self, artwork_store, stub_encoder, query):
        with pytest.raises(ValidationFailedError):
            self._service(artwork_store, stub_encoder).list_artworks(query=query)

    def test_search_matches_artist(self, artwork_store, stub_encoder):
        service = self._service(artwork_store, stub_encoder)
        service.create_artwork(self.FIELDS, added_by=1)
        assert len(service.list_artworks(query="ousmane")) == 1
        assert service.list_artworks(query="picasso") == []
