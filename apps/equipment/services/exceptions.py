"""
Domain-specific exceptions for equipment app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class EquipmentServiceError(Exception):
    """Base exception for all equipment service errors."""
    pass


class EquipmentNotFoundError(EquipmentServiceError):
    """Raised when equipment does not exist or belongs to another company."""
    pass


class DuplicateSerialNumberError(EquipmentServiceError):
    """Raised when the company already has equipment with this serial number."""
    pass


class MissingRentalFieldsError(EquipmentServiceError):
    """Raised when rented equipment lacks supplier, monthly or daily rent."""

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(
            "Rented equipment requires: " + ", ".join(self.fields)
        )


class InvalidRentalFieldsError(EquipmentServiceError):
    """Raised for non-positive rents or a supplier of another company."""
    pass


class EquipmentTypeNotFoundError(EquipmentServiceError):
    """Raised when an equipment type does not exist or is not visible."""
    pass


class DuplicateEquipmentTypeError(EquipmentServiceError):
    """Raised when the company already has a type with this name."""
    pass


class EquipmentTypeInUseError(EquipmentServiceError):
    """Raised when deleting a type that equipment still uses."""
    pass


class SystemEquipmentTypeError(EquipmentServiceError):
    """Raised when trying to delete a system default type."""
    pass


class EquipmentNotOwnedError(EquipmentServiceError):
    """Raised when adding a partner share to rented equipment."""
    pass


class EquipmentPartnerNotFoundError(EquipmentServiceError):
    """Raised when an ownership row does not exist (or was just removed)."""
    pass


class OwnershipRuleError(EquipmentServiceError):
    """
    Raised when a ledger check rejects a write.

    Carries the ``LedgerCheck`` so views can report the failure code and
    the current total.
    """

    def __init__(self, check):
        self.check = check
        super().__init__(check.message)

    @property
    def code(self):
        return self.check.code

    @property
    def current_total(self):
        return self.check.current_total
