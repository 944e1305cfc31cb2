"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Self
from uuid import UUID

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class _Identifier:
    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OwnerId(_Identifier):
    """Unique identifier for a business Owner."""


@dataclass(frozen=True)
class BusinessId(_Identifier):
    """Unique identifier for a Business."""


@dataclass(frozen=True)
class EventId(_Identifier):
    """Unique identifier for an Event."""


@dataclass(frozen=True)
class FacilityId(_Identifier):
    """Unique identifier for a Facility."""


@dataclass(frozen=True)
class EventFacilityId(_Identifier):
    """Unique identifier for a facility offered at an event."""


@dataclass(frozen=True)
class ApplicationId(_Identifier):
    """Unique identifier for a FacilityApplication."""


@dataclass(frozen=True)
class PaymentId(_Identifier):
    """Unique identifier for a Payment."""


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        amount = Decimal(self.amount)
        if amount < 0:
            raise ValueError("Money amount cannot be negative")
        object.__setattr__(self, "amount", amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def times(self, quantity: int) -> "Money":
        return Money(self.amount * quantity)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def covers(self, quantity: "Quantity") -> bool:
        return self.value >= quantity.value


@dataclass(frozen=True)
class Quantity:
    """Number of units requested by an application. Always at least one."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Quantity must be at least 1")
