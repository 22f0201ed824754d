"""
Partner ownership ledger rules.

A piece of owned equipment can be shared among partners. Each partner holds
between 1% and 99%, a partner appears at most once per equipment and the
partner percentages add up to at most 100%. Whatever is left is the company
share, which is derived from the rows and never stored.

The checks here are pure functions over the current rows of one equipment
record. They return a ``LedgerCheck`` instead of raising, so callers decide
how to surface a failure. The partner ownership service runs the same checks
again against rows read under a lock before it writes.

Rows can be anything exposing ``id``, ``partner_id`` and ``percentage``:
``EquipmentPartner`` instances or ``LedgerRow`` tuples.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Iterable, NamedTuple, Optional

MIN_PERCENTAGE = Decimal('1')
MAX_PERCENTAGE = Decimal('99')
FULL_OWNERSHIP = Decimal('100')

_CENT = Decimal('0.01')


class LedgerFailure(str, Enum):
    INVALID_PERCENTAGE = 'InvalidPercentage'
    OUT_OF_RANGE = 'OutOfRange'
    DUPLICATE_PARTNER = 'DuplicatePartner'
    EXCEEDS_TOTAL = 'ExceedsTotal'
    ROW_NOT_FOUND = 'RowNotFound'
    NEGATIVE_COMPANY_SHARE = 'NegativeCompanyShare'


class LedgerRow(NamedTuple):
    id: Any
    partner_id: Any
    percentage: Decimal


@dataclass(frozen=True)
class LedgerCheck:
    """Outcome of a ledger check. ``reason`` is None when ``ok``."""

    ok: bool
    reason: Optional[LedgerFailure] = None
    message: str = ''
    current_total: Optional[Decimal] = None

    @property
    def code(self) -> Optional[str]:
        return self.reason.value if self.reason else None


APPROVED = LedgerCheck(ok=True)


def format_percentage(value: Decimal) -> str:
    """``Decimal('30.00')`` -> ``'30'``, ``Decimal('12.50')`` -> ``'12.5'``."""
    return format(value.normalize(), 'f')


def parse_percentage(value) -> Optional[Decimal]:
    """
    Parse a percentage from a number or numeric string.

    Returns the value exactly as given, or None if it is not a finite number.
    The checks below run on this value; rounding happens only when storing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    if not parsed.is_finite():
        return None
    return parsed


def stored_percentage(value) -> Decimal:
    """
    Round an accepted percentage to the stored two decimal places.

    Only call this after ``can_add`` or ``can_update`` approved the value. The
    bounds and existing rows are whole cents, so rounding an accepted value
    never pushes it out of range or past 100 in total.
    """
    return parse_percentage(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def total_percentage(rows: Iterable) -> Decimal:
    return sum((Decimal(str(row.percentage)) for row in rows), Decimal('0'))


def company_share(rows: Iterable) -> Decimal:
    """
    The unallocated share, ``100 - sum(percentages)``.

    Not clamped: a negative value means the ledger is already inconsistent.
    """
    return FULL_OWNERSHIP - total_percentage(rows)


def _check_percentage(value):
    percentage = parse_percentage(value)
    if percentage is None:
        return None, LedgerCheck(
            ok=False,
            reason=LedgerFailure.INVALID_PERCENTAGE,
            message="Percentage must be a number",
        )
    if not MIN_PERCENTAGE <= percentage <= MAX_PERCENTAGE:
        return None, LedgerCheck(
            ok=False,
            reason=LedgerFailure.OUT_OF_RANGE,
            message="Percentage must be between 1 and 99",
        )
    return percentage, None


def can_add(current_rows: Iterable, proposed_partner_id, proposed_percentage) -> LedgerCheck:
    """
    Check whether a partner can be added with ``proposed_percentage``.

    Checks run in order: the percentage parses, it lies in [1, 99], the
    partner has no row yet, and the new total stays at or below 100.
    """
    rows = list(current_rows)

    percentage, failure = _check_percentage(proposed_percentage)
    if failure is not None:
        return failure

    if any(str(row.partner_id) == str(proposed_partner_id) for row in rows):
        return LedgerCheck(
            ok=False,
            reason=LedgerFailure.DUPLICATE_PARTNER,
            message="This partner already has a share in this equipment",
        )

    current_total = total_percentage(rows)
    if current_total + percentage > FULL_OWNERSHIP:
        return LedgerCheck(
            ok=False,
            reason=LedgerFailure.EXCEEDS_TOTAL,
            message=f"Total would exceed 100% (current: {format_percentage(current_total)}%)",
            current_total=current_total,
        )

    return APPROVED


def can_update(current_rows: Iterable, target_row_id, new_percentage) -> LedgerCheck:
    """
    Check whether row ``target_row_id`` can be changed to ``new_percentage``.

    The row's own current percentage does not count against the new value;
    ``current_total`` on failure is the total of the other partners.
    """
    rows = list(current_rows)

    percentage, failure = _check_percentage(new_percentage)
    if failure is not None:
        return failure

    target = next((row for row in rows if str(row.id) == str(target_row_id)), None)
    if target is None:
        return LedgerCheck(
            ok=False,
            reason=LedgerFailure.ROW_NOT_FOUND,
            message="Ownership row not found",
        )

    others_total = total_percentage(row for row in rows if row is not target)
    if others_total + percentage > FULL_OWNERSHIP:
        return LedgerCheck(
            ok=False,
            reason=LedgerFailure.EXCEEDS_TOTAL,
            message=f"Total would exceed 100% (others: {format_percentage(others_total)}%)",
            current_total=others_total,
        )

    return APPROVED


def check_company_share(current_rows: Iterable) -> LedgerCheck:
    """Flag a ledger whose partners hold more than 100% in total."""
    rows = list(current_rows)
    share = company_share(rows)
    if share < 0:
        return LedgerCheck(
            ok=False,
            reason=LedgerFailure.NEGATIVE_COMPANY_SHARE,
            message=f"Partner shares add up to more than 100% (company share: {format_percentage(share)}%)",
            current_total=total_percentage(rows),
        )
    return APPROVED
