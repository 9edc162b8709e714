"""Redemption verifier - checks a presented code at the gate."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from django.utils import timezone

from purchases.domain import PurchaseRecord, ValidationResult
from purchases.domain.errors import CodeNotFoundError
from purchases.domain.transitions import validate_purchase
from purchases.stores.interfaces import PurchaseStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redemption:
    record: PurchaseRecord
    result: ValidationResult


class RedemptionVerifier:
    """Read-only lookup; verifying a code never changes the purchase."""

    def __init__(self, store: PurchaseStore, clock: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._clock = clock

    def verify(self, code: str) -> Redemption:
        """Raises CodeNotFoundError if no purchase carries `code`."""
        record = self._store.get_by_code(code.strip())
        if record is None:
            raise CodeNotFoundError(code)
        result = validate_purchase(record, self._clock())
        if not result.valid:
            logger.info("Code %s rejected: %s", record.redemption_code, result.reason)
        return Redemption(record=record, result=result)
