"""Money and Quantity, the two value types that flow through orders.

Both are frozen and validate on construction, so an order line can
never hold a negative price or a zero quantity.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fulfillment.domain.exceptions import InvalidInput

CENT = Decimal("0.01")

# Quantities and IDs are stored in 32-bit INTEGER columns
MAX_DB_INT = 2**31 - 1


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Prices are stored as NUMERIC(12, 2); ``Money.of`` rounds user input
    to whole cents so what is snapshotted is what gets persisted.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidInput(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidInput(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise InvalidInput(f"Money amount cannot be negative, got {self.amount}")

    @classmethod
    def of(cls, amount: str | int | Decimal, currency: str = "USD") -> Money:
        """Parse user input (``"15"``, ``"9.5"``, ``Decimal``) into cents."""
        try:
            value = Decimal(str(amount).strip())
            if value.is_finite():
                value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        except (InvalidOperation, ValueError) as exc:
            raise InvalidInput(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str = "USD") -> Money:
        return cls(Decimal("0.00"), currency)

    @classmethod
    def sum(cls, amounts: Iterable[Money]) -> Money:
        total = cls.zero()
        for amount in amounts:
            total = total + amount
        return total

    def __add__(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise InvalidInput(f"Cannot combine {self.currency} with {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Quantity:
    """Units of one product on an order line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not pass as 1
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidInput(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidInput(f"Quantity must be positive, got {self.value}")
        if self.value > MAX_DB_INT:
            raise InvalidInput(f"Quantity must not exceed {MAX_DB_INT}, got {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
