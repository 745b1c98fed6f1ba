"""Domain Types - identity types, field bounds, and time helpers for expenses.

Invariants:
    - UserId, ExpenseId wrap UUIDs; the nil UUID counts as "empty"
    - Field bounds are defined once here and shared by validators, schemas, and the ORM
    - All timestamps handled by the domain are timezone-aware UTC

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ExpenseId = NewType("ExpenseId", UUID)

EMPTY_ID = UUID(int=0)


# ─── Field Bounds ────────────────────────────────────────────────

DEFAULT_CURRENCY = "CAD"
CURRENCY_CODE_LENGTH = 3
CATEGORY_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 250
# Storage column is wider than the validated contract (DESCRIPTION_MAX_LENGTH wins)
DESCRIPTION_COLUMN_LENGTH = 500
AMOUNT_PRECISION = 18
AMOUNT_SCALE = 2
MAX_EXPENSE_AGE_YEARS = 5

_AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)
# Exclusive upper bound on |amount| that fits Numeric(AMOUNT_PRECISION, AMOUNT_SCALE)
AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)


def is_empty_id(value: UUID | None) -> bool:
    """True for None and the nil UUID."""
    return value is None or value == EMPTY_ID


def amount_fits_storage(amount: Decimal) -> bool:
    """Finite and, once rounded, strictly inside +/- AMOUNT_LIMIT."""
    amount = Decimal(amount)
    if not amount.is_finite() or abs(amount) >= AMOUNT_LIMIT:
        return False
    return abs(_round(amount)) < AMOUNT_LIMIT


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount to storage precision (2 fractional digits, half-up).

    Raises ValueError for amounts the amount column cannot hold.
    """
    if not amount_fits_storage(amount):
        raise ValueError(f"Amount must be less than {AMOUNT_LIMIT:,} in magnitude.")
    return _round(Decimal(amount))


def _round(amount: Decimal) -> Decimal:
    return amount.quantize(_AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


# ─── Time ────────────────────────────────────────────────────────

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def years_before(moment: datetime, years: int) -> datetime:
    """Same calendar instant `years` earlier. Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)
