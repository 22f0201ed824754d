"""
Ownership-type transition guard.

Decides what an equipment write has to carry or clear given the current
ownership type and the requested changes:

- owned equipment never keeps supplier or rents, so they are cleared;
- rented equipment needs a supplier and positive monthly and daily rents;
- going from owned to rented drops every partner share of the equipment.

``plan_ownership_change`` does not touch the database. The equipment
management service applies the plan inside the transaction that updates
the row.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

from apps.equipment.models import OwnershipType

from .exceptions import MissingRentalFieldsError, InvalidRentalFieldsError

RENTAL_FIELDS = ('supplier_id', 'monthly_rent', 'daily_rent')
RENT_FIELDS = ('monthly_rent', 'daily_rent')


@dataclass(frozen=True)
class OwnershipChange:
    from_type: Optional[str]
    to_type: str
    changes: Dict[str, Any] = field(default_factory=dict)
    drop_partner_rows: bool = False

    @property
    def is_transition(self):
        return self.from_type is not None and self.from_type != self.to_type


def plan_ownership_change(*, current_type: Optional[str], changes: Dict[str, Any]) -> OwnershipChange:
    """
    Resolve the rental fields of a create or update.

    Args:
        current_type: Ownership type stored today, None for a new record
        changes: Requested field values keyed by model attribute
            (``ownership_type``, ``supplier_id``, ``monthly_rent``,
            ``daily_rent`` and any others, which pass through untouched)

    Returns:
        OwnershipChange with the changes to apply

    Raises:
        MissingRentalFieldsError: If the result would be rented without a
            supplier, monthly rent or daily rent
        InvalidRentalFieldsError: If a rent is not positive
    """
    target = changes.get('ownership_type') or current_type or OwnershipType.OWNED
    resolved = dict(changes)

    if target == OwnershipType.OWNED:
        for name in RENTAL_FIELDS:
            resolved[name] = None
        return OwnershipChange(from_type=current_type, to_type=target, changes=resolved)

    # Rented: fields already on a rented row may be omitted, never nulled
    missing = [
        name for name in RENTAL_FIELDS
        if (name in changes and changes[name] in (None, ''))
        or (name not in changes and current_type != OwnershipType.RENTED)
    ]
    if missing:
        raise MissingRentalFieldsError(missing)

    for name in RENT_FIELDS:
        if name in changes and Decimal(str(changes[name])) <= 0:
            raise InvalidRentalFieldsError(f"{name} must be positive")

    return OwnershipChange(
        from_type=current_type,
        to_type=target,
        changes=resolved,
        drop_partner_rows=current_type == OwnershipType.OWNED,
    )
