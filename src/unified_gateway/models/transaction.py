"""Canonical transaction domain models."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Operation(str, Enum):
    """Canonical transaction operations."""

    PURCHASE = "purchase"
    AUTHORIZE = "authorize"
    CAPTURE = "capture"
    VOID = "void"
    REFUND = "refund"
    CREDIT = "credit"
    VERIFY = "verify"
    STORE = "store"
    UNSTORE = "unstore"


# Operations whose amount must be strictly positive before anything is sent.
AMOUNT_REQUIRED_OPERATIONS = frozenset(
    {
        Operation.PURCHASE,
        Operation.AUTHORIZE,
        Operation.CAPTURE,
        Operation.REFUND,
        Operation.CREDIT,
    }
)


@dataclass(frozen=True)
class CreditCard:
    """
    Card details supplied by the caller.

    The core never validates the number (no Luhn check); it only places
    these values into whichever provider fields need them.
    """

    number: str
    month: int
    year: int
    verification_value: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def last_four(self) -> str:
        return self.number[-4:]

    def expiry_mmyy(self) -> str:
        """Expiry as MMYY, e.g. 0919 for September 2019."""
        return f"{self.month:02d}{self.year % 100:02d}"


# A raw card, or a reference to a card previously stored with the provider.
PaymentSource = Union[CreditCard, str]


def validate_amount(amount: int) -> int:
    """
    Check that an amount is a non-negative integer of minor units.

    Raises:
        TypeError: amount is not an int (floats and bools are rejected)
        ValueError: amount is negative
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Amount must be an integer of minor units, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    return amount


def format_amount(amount: int) -> str:
    """Format minor units as a decimal string with two places (100 -> "1.00")."""
    major, minor = divmod(validate_amount(amount), 100)
    return f"{major}.{minor:02d}"
