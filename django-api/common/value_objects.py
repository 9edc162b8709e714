"""Domain primitives shared across apps."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Self
from uuid import UUID

CENTS = Decimal("0.01")


def parse_uuid(value: str) -> UUID:
    """Parse a UUID, raising ValueError on malformed input."""
    return UUID(str(value))


@dataclass(frozen=True)
class Money:
    """Non-negative amount, always held to two decimal places."""

    amount: Decimal

    def __post_init__(self) -> None:
        try:
            amount = Decimal(str(self.amount))
        except InvalidOperation as exc:
            raise ValueError("Money amount must be a number") from exc
        if not amount.is_finite():
            raise ValueError("Money amount must be finite")
        if amount < 0:
            raise ValueError("Money amount cannot be negative")
        object.__setattr__(self, "amount", amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls) -> Self:
        return cls(Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def times(self, quantity: int) -> "Money":
        return Money(self.amount * quantity)

    def scaled(self, rate: Decimal) -> "Money":
        return Money(self.amount * rate)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
