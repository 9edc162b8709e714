"""Pytest configuration and shared fixtures."""

import uuid
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import Profile
from accounts.services import issue_tokens, register_user
from artworks.domain import Artwork, ArtworkStats
from artworks.stores.interfaces import ArtworkStore
from common.errors import DuplicateCodeError, EncodingFailedError
from common.qr import CodeEncoder
from common.value_objects import Money
from purchases.domain import PurchaseStatus, RevenueStats, SalesOverview
from purchases.stores.interfaces import PurchaseStore
from tickets.domain import BoundedStock, TicketCategory, TicketDefinition, TicketId, TicketStats, UnlimitedStock
from tickets.models import Ticket
from tickets.stores.interfaces import TicketStore

PASSWORD = "Secret123"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    # Throttle counters live in the cache too
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def shopper(db):
    return register_user(
        email="awa.diop@example.com",
        password=PASSWORD,
        first_name="Awa",
        last_name="Diop",
        phone="+221 77 123 45 67",
    )


@pytest.fixture
def other_shopper(db):
    return register_user(
        email="moussa.fall@example.com",
        password=PASSWORD,
        first_name="Moussa",
        last_name="Fall",
    )


@pytest.fixture
def admin_user(db):
    return register_user(
        email="curator@example.com",
        password=PASSWORD,
        first_name="Fatou",
        last_name="Sarr",
        role=Profile.Role.ADMIN,
    )


def _client_for(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user).access}")
    return client


@pytest.fixture
def shopper_client(shopper) -> APIClient:
    return _client_for(shopper)


@pytest.fixture
def other_shopper_client(other_shopper) -> APIClient:
    return _client_for(other_shopper)


@pytest.fixture
def admin_client(admin_user) -> APIClient:
    return _client_for(admin_user)


@pytest.fixture
def make_ticket(db):
    """Factory for persisted tickets. `stock=None` means unlimited."""

    def make(**overrides) -> Ticket:
        values = {
            "label": "Adult entry",
            "description": "Full-day access to the permanent collection",
            "category": Ticket.Category.ENTRY,
            "price": Decimal("1000"),
            "stock": 5,
        }
        values.update(overrides)
        return Ticket.objects.create(**values)

    return make


@pytest.fixture
def make_definition():
    """Factory for in-memory TicketDefinition values."""

    def make(**overrides) -> TicketDefinition:
        values = {
            "id": TicketId(uuid.uuid4()),
            "label": "Adult entry",
            "description": "Full-day access to the permanent collection",
            "category": TicketCategory.ENTRY,
            "price": Money(Decimal("1000")),
            "stock": BoundedStock(5),
        }
        values.update(overrides)
        return TicketDefinition(**values)

    return make


@pytest.fixture
def customer_payload() -> dict:
    return {
        "first_name": "Awa",
        "last_name": "Diop",
        "email": "awa.diop@example.com",
        "phone": "+221771234567",
    }


class InMemoryTicketStore(TicketStore):
    def __init__(self, tickets=()):
        self.tickets = {ticket.id: ticket for ticket in tickets}

    def list_tickets(self, category=None, available_only=True):
        rows = [
            ticket
            for ticket in self.tickets.values()
            if (not available_only or ticket.is_available) and (category is None or ticket.category == category)
        ]
        return sorted(rows, key=lambda ticket: ticket.price.amount)

    def get_ticket(self, ticket_id):
        return self.tickets.get(ticket_id)

    def save_ticket(self, ticket):
        self.tickets[ticket.id] = ticket
        return ticket

    def update_fields(self, ticket, fields):
        changed = {name: getattr(ticket, name) for name in fields}
        self.tickets[ticket.id] = replace(self.tickets[ticket.id], **changed)
        return self.tickets[ticket.id]

    def delete_ticket(self, ticket_id):
        self.tickets.pop(ticket_id, None)

    def set_availability(self, ticket_id, is_available):
        self.tickets[ticket_id] = replace(self.tickets[ticket_id], is_available=is_available)
        return self.tickets[ticket_id]

    def decrement_stock(self, ticket_id, quantity):
        ticket = self.tickets.get(ticket_id)
        if ticket is None:
            return False
        if isinstance(ticket.stock, UnlimitedStock):
            return True
        if ticket.stock.count < quantity:
            return False
        self.tickets[ticket_id] = replace(ticket, stock=BoundedStock(ticket.stock.count - quantity))
        return True

    def increment_stock(self, ticket_id, quantity):
        ticket = self.tickets[ticket_id]
        if isinstance(ticket.stock, BoundedStock):
            self.tickets[ticket_id] = replace(ticket, stock=BoundedStock(ticket.stock.count + quantity))

    def add_sale(self, ticket_id, quantity, amount):
        ticket = self.tickets[ticket_id]
        self.tickets[ticket_id] = replace(
            ticket,
            purchase_count=ticket.purchase_count + quantity,
            revenue=ticket.revenue + amount,
        )

    def popular_tickets(self, limit):
        rows = [ticket for ticket in self.tickets.values() if ticket.is_available]
        return sorted(rows, key=lambda ticket: -ticket.purchase_count)[:limit]

    def ticket_stats(self):
        rows = list(self.tickets.values())
        return TicketStats(
            total_tickets=len(rows),
            available_tickets=sum(1 for ticket in rows if ticket.is_available),
            total_revenue=sum((ticket.revenue for ticket in rows), Money.zero()),
            category_counts=(),
        )


class InMemoryPurchaseStore(PurchaseStore):
    """Rolls itself and the linked ticket store back when a unit of work fails."""

    def __init__(self, ticket_store: InMemoryTicketStore | None = None):
        self.records = {}
        self._ticket_store = ticket_store

    @contextmanager
    def atomic(self):
        records = dict(self.records)
        tickets = dict(self._ticket_store.tickets) if self._ticket_store else None
        try:
            yield
        except Exception:
            self.records = records
            if tickets is not None:
                self._ticket_store.tickets = tickets
            raise

    def insert_purchase(self, record):
        if any(existing.redemption_code == record.redemption_code for existing in self.records.values()):
            raise DuplicateCodeError(record.redemption_code)
        self.records[record.id] = record
        return record

    def get_purchase(self, purchase_id):
        return self.records.get(purchase_id)

    def get_purchase_for_owner(self, purchase_id, owner_id):
        record = self.records.get(purchase_id)
        return record if record is not None and record.owner_id == owner_id else None

    def get_by_code(self, code):
        return next((r for r in self.records.values() if r.redemption_code == code), None)

    def save_transition(self, record, previous):
        current = self.records.get(record.id)
        if current is None or current.status is not previous:
            return False
        self.records[record.id] = record
        return True

    def list_for_owner(self, owner_id, status=None):
        rows = [
            record
            for record in self.records.values()
            if record.owner_id == owner_id and (status is None or record.status is status)
        ]
        return sorted(rows, key=lambda record: record.purchased_at, reverse=True)

    def sales_overview(self, start=None, end=None):
        rows = list(self.records.values())
        confirmed = [
            record
            for record in rows
            if record.status is PurchaseStatus.CONFIRMED
            and (start is None or record.purchased_at >= start)
            and (end is None or record.purchased_at < end)
        ]
        sales = sum((record.total for record in confirmed), Money.zero())
        return SalesOverview(
            total_purchases=len(rows),
            confirmed_purchases=sum(1 for r in rows if r.status is PurchaseStatus.CONFIRMED),
            cancelled_purchases=sum(1 for r in rows if r.status is PurchaseStatus.CANCELLED),
            revenue=RevenueStats(
                total_sales=sales,
                purchase_count=len(confirmed),
                average_purchase=Money(sales.amount / len(confirmed)) if confirmed else Money.zero(),
            ),
            status_counts=(),
            payment_counts=(),
        )


class InMemoryArtworkStore(ArtworkStore):
    def __init__(self, taken_codes=()):
        self.artworks = {}
        self.taken_codes = set(taken_codes)

    def list_artworks(self, query=None, category=None, room=None):
        rows = list(self.artworks.values())
        if category is not None:
            rows = [a for a in rows if a.category == category]
        if room:
            rows = [a for a in rows if a.room == room]
        if query:
            needle = query.lower()
            rows = [
                a
                for a in rows
                if needle in a.title.lower() or needle in a.artist.lower() or needle in a.description.lower()
            ]
        return rows

    def get_artwork(self, artwork_id):
        return self.artworks.get(artwork_id)

    def get_by_scan_code(self, code):
        return next((a for a in self.artworks.values() if a.scan_code == code), None)

    def insert_artwork(self, artwork: Artwork):
        if artwork.scan_code in self.taken_codes:
            raise DuplicateCodeError(artwork.scan_code)
        self.taken_codes.add(artwork.scan_code)
        self.artworks[artwork.id] = artwork
        return artwork

    def update_artwork(self, artwork):
        self.artworks[artwork.id] = artwork
        return artwork

    def delete_artwork(self, artwork_id):
        self.artworks.pop(artwork_id, None)

    def set_availability(self, artwork_id, is_available):
        self.artworks[artwork_id] = replace(self.artworks[artwork_id], is_available=is_available)
        return self.artworks[artwork_id]

    def record_view(self, artwork_id):
        artwork = self.artworks[artwork_id]
        self.artworks[artwork_id] = replace(artwork, view_count=artwork.view_count + 1)

    def record_scan(self, artwork_id):
        artwork = self.artworks[artwork_id]
        self.artworks[artwork_id] = replace(artwork, scan_count=artwork.scan_count + 1)

    def popular_artworks(self, limit):
        rows = [a for a in self.artworks.values() if a.is_available]
        return sorted(rows, key=lambda a: (-a.view_count, -a.scan_count))[:limit]

    def artwork_stats(self):
        rows = list(self.artworks.values())
        return ArtworkStats(
            total_artworks=len(rows),
            available_artworks=sum(1 for a in rows if a.is_available),
            total_views=sum(a.view_count for a in rows),
            total_scans=sum(a.scan_count for a in rows),
            category_counts=(),
            room_counts=(),
        )


class StubEncoder(CodeEncoder):
    def __init__(self):
        self.encoded = []

    def encode(self, text):
        self.encoded.append(text)
        return "data:image/png;base64,c3R1Yg=="


class FailingEncoder(CodeEncoder):
    def encode(self, text):
        raise EncodingFailedError()


class ScriptedCodes:
    """Hands out a fixed sequence of codes."""

    def __init__(self, *codes):
        self._codes = list(codes)

    def generate(self):
        return self._codes.pop(0)


@pytest.fixture
def ticket_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def purchase_store(ticket_store) -> InMemoryPurchaseStore:
    return InMemoryPurchaseStore(ticket_store)


@pytest.fixture
def artwork_store() -> InMemoryArtworkStore:
    return InMemoryArtworkStore()


@pytest.fixture
def stub_encoder() -> StubEncoder:
    return StubEncoder()


@pytest.fixture
def failing_encoder() -> FailingEncoder:
    return FailingEncoder()


@pytest.fixture
def scripted_codes():
    return ScriptedCodes


class DrainedTicketStore(InMemoryTicketStore):
    """Another request empties stock between the check and the commit."""

    def decrement_stock(self, ticket_id, quantity):
        return False


@pytest.fixture
def drained_stores() -> tuple[DrainedTicketStore, InMemoryPurchaseStore]:
    tickets = DrainedTicketStore()
    return tickets, InMemoryPurchaseStore(tickets)
