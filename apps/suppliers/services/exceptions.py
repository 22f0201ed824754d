"""
Domain-specific exceptions for suppliers app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class SuppliersServiceError(Exception):
    """Base exception for all suppliers service errors."""
    pass


class SupplierNotFoundError(SuppliersServiceError):
    """Raised when a supplier does not exist or belongs to another company."""
    pass


class DuplicateSupplierError(SuppliersServiceError):
    """Raised when a company already has a supplier with this name."""
    pass


class SupplierInUseError(SuppliersServiceError):
    """Raised when deleting a supplier that equipment still references."""
    pass
