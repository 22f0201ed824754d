"""
Domain-specific exceptions for partners app.
"""


class PartnersServiceError(Exception):
    """Base exception for all partners service errors."""
    pass


class PartnerNotFoundError(PartnersServiceError):
    """Raised when a partner does not exist or belongs to another company."""
    pass


class DuplicatePartnerNameError(PartnersServiceError):
    """Raised when a company already has a partner with this name."""
    pass
