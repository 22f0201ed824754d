"""
Domain-specific exceptions for customers app.
"""


class CustomersServiceError(Exception):
    """Base exception for all customers service errors."""
    pass


class CustomerNotFoundError(CustomersServiceError):
    """Raised when a customer does not exist, is deleted or belongs to another company."""
    pass


class ContactNotFoundError(CustomersServiceError):
    pass


class SiteNotFoundError(CustomersServiceError):
    pass
