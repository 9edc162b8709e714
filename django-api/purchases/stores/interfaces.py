"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from purchases.domain import PurchaseId, PurchaseRecord, PurchaseStatus, SalesOverview


class PurchaseStore(ABC):
    """Interface for purchase persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Unit of work: writes made inside commit or roll back together,
        including writes made through other stores."""
        ...

    @abstractmethod
    def insert_purchase(self, record: PurchaseRecord) -> PurchaseRecord:
        """Persist a new purchase with its lines.

        Raises:
            DuplicateCodeError: If the redemption code is already taken.
        """
        ...

    @abstractmethod
    def get_purchase(self, purchase_id: PurchaseId) -> PurchaseRecord | None:
        ...

    @abstractmethod
    def get_purchase_for_owner(self, purchase_id: PurchaseId, owner_id: int) -> PurchaseRecord | None:
        """Return the purchase only if `owner_id` owns it."""
        ...

    @abstractmethod
    def get_by_code(self, code: str) -> PurchaseRecord | None:
        ...

    @abstractmethod
    def save_transition(self, record: PurchaseRecord, previous: PurchaseStatus) -> bool:
        """Write status and notes if the stored status is still `previous`.

        Returns False when another request changed the status first.
        """
        ...

    @abstractmethod
    def list_for_owner(self, owner_id: int, status: PurchaseStatus | None = None) -> list[PurchaseRecord]:
        """Return the owner's purchases, newest first."""
        ...

    @abstractmethod
    def sales_overview(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> SalesOverview:
        """Counts over all purchases; revenue over confirmed ones in [start, end)."""
        ...
