"""Tests for the Django ORM stores against a real database.

These cover what the in-memory fakes cannot: conditional updates,
unique constraints and transaction rollback.
Run with: pytest tests/test_stores.py -v
"""

import pytest

from common.config import MuseumConfig
from common.errors import DuplicateCodeError
from purchases.models import Purchase
from purchases.services import LineRequest, PurchaseWorkflow
from purchases.stores.django_store import DjangoPurchaseStore
from tickets.domain import BoundedStock, TicketId, UnlimitedStock
from tickets.domain.errors import InsufficientStockError, TicketInUseError
from tickets.services import InventoryService, TicketService
from tickets.stores.django_store import DjangoTicketStore

CUSTOMER = {"first_name": "Awa", "last_name": "Diop", "email": "awa@example.com"}


class SaleAfterReadTicketStore(DjangoTicketStore):
    """Another request sells `quantity` units right after the first read."""

    def __init__(self, quantity: int) -> None:
        self._quantity = quantity
        self._sold = False

    def get_ticket(self, ticket_id):
        ticket = super().get_ticket(ticket_id)
        if ticket is not None and not self._sold:
            self._sold = True
            InventoryService(DjangoTicketStore()).reserve(ticket, self._quantity)
        return ticket


@pytest.fixture
def ticket_store() -> DjangoTicketStore:
    return DjangoTicketStore()


@pytest.fixture
def build_workflow(ticket_store, stub_encoder):
    def build(codes) -> PurchaseWorkflow:
        return PurchaseWorkflow(
            store=DjangoPurchaseStore(),
            tickets=ticket_store,
            inventory=InventoryService(ticket_store),
            codes=codes,
            encoder=stub_encoder,
            config=MuseumConfig(code_attempts=2),
        )

    return build


@pytest.mark.django_db
class TestDjangoTicketStore:
    def test_decrement_is_conditional(self, ticket_store, make_ticket):
        ticket = make_ticket(stock=2)
        ticket_id = TicketId(ticket.id)
        assert ticket_store.decrement_stock(ticket_id, 2) is True
        assert ticket_store.decrement_stock(ticket_id, 1) is False
        assert ticket_store.get_ticket(ticket_id).stock == BoundedStock(0)

    def test_decrement_unlimited_is_a_no_op(self, ticket_store, make_ticket):
        ticket_id = TicketId(make_ticket(stock=None).id)
        assert ticket_store.decrement_stock(ticket_id, 1000) is True
        assert isinstance(ticket_store.get_ticket(ticket_id).stock, UnlimitedStock)

    def test_increment_skips_unlimited(self, ticket_store, make_ticket):
        ticket_id = TicketId(make_ticket(stock=None).id)
        ticket_store.increment_stock(ticket_id, 3)
        assert isinstance(ticket_store.get_ticket(ticket_id).stock, UnlimitedStock)

    def test_delete_referenced_ticket_is_refused(
        self, ticket_store, build_workflow, scripted_codes, make_ticket, shopper
    ):
        ticket = make_ticket()
        build_workflow(scripted_codes("PUR1AAAAA")).purchase(
            shopper.id, CUSTOMER, [LineRequest(str(ticket.id), 1)], "cash"
        )
        with pytest.raises(TicketInUseError):
            ticket_store.delete_ticket(TicketId(ticket.id))

    def test_edit_keeps_stock_sold_after_the_read(self, make_ticket):
        ticket = make_ticket(stock=5)
        store = SaleAfterReadTicketStore(quantity=2)
        updated = TicketService(store).update_ticket(str(ticket.id), {"label": "Adult entry (weekend)"})
        assert updated.label == "Adult entry (weekend)"
        assert updated.stock == BoundedStock(3)
        ticket.refresh_from_db()
        assert ticket.stock == 3

    def test_edit_with_stock_overwrites_it(self, make_ticket):
        ticket = make_ticket(stock=5)
        TicketService(DjangoTicketStore()).update_ticket(str(ticket.id), {"stock": 40})
        ticket.refresh_from_db()
        assert ticket.stock == 40


@pytest.mark.django_db
class TestDjangoPurchaseStore:
    def test_code_clash_is_retried_with_a_fresh_code(self, build_workflow, scripted_codes, make_ticket, shopper):
        ticket = make_ticket(stock=5)
        workflow = build_workflow(scripted_codes("PUR1AAAAA", "PUR1AAAAA", "PUR2BBBBB"))
        line = [LineRequest(str(ticket.id), 1)]
        workflow.purchase(shopper.id, CUSTOMER, line, "cash")
        second = workflow.purchase(shopper.id, CUSTOMER, line, "cash")
        assert second.redemption_code == "PUR2BBBBB"
        ticket.refresh_from_db()
        assert ticket.stock == 3

    def test_gives_up_after_configured_attempts(self, build_workflow, scripted_codes, make_ticket, shopper):
        ticket = make_ticket(stock=5)
        workflow = build_workflow(scripted_codes("PUR1AAAAA", "PUR1AAAAA", "PUR1AAAAA"))
        line = [LineRequest(str(ticket.id), 1)]
        workflow.purchase(shopper.id, CUSTOMER, line, "cash")
        with pytest.raises(DuplicateCodeError):
            workflow.purchase(shopper.id, CUSTOMER, line, "cash")
        assert Purchase.objects.count() == 1
        ticket.refresh_from_db()
        assert ticket.stock == 4

    def test_failed_reservation_rolls_back_insert_and_earlier_lines(
        self, build_workflow, scripted_codes, make_ticket, shopper
    ):
        # Each line fits on its own; together they exceed the stock
        ticket = make_ticket(stock=5)
        workflow = build_workflow(scripted_codes("PUR1AAAAA"))
        lines = [LineRequest(str(ticket.id), 3), LineRequest(str(ticket.id), 3)]
        with pytest.raises(InsufficientStockError):
            workflow.purchase(shopper.id, CUSTOMER, lines, "cash")
        assert Purchase.objects.count() == 0
        ticket.refresh_from_db()
        assert ticket.stock == 5
        assert ticket.purchase_count == 0

    def test_transition_is_conditional_on_previous_status(self, build_workflow, scripted_codes, make_ticket, shopper):
        ticket = make_ticket(stock=5)
        workflow = build_workflow(scripted_codes("PUR1AAAAA"))
        record = workflow.purchase(shopper.id, CUSTOMER, [LineRequest(str(ticket.id), 2)], "cash")
        store = DjangoPurchaseStore()
        cancelled = workflow.cancel(str(record.id), shopper.id)
        assert store.save_transition(cancelled, record.status) is False
        assert store.get_purchase(record.id).status.value == "cancelled"
