"""
Domain-specific exceptions for companies app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class CompaniesServiceError(Exception):
    """Base exception for all companies service errors."""
    pass


class CompanyNotFoundError(CompaniesServiceError):
    """Raised when a company does not exist or the user is not a member."""
    pass


class InsufficientPermissionsError(CompaniesServiceError):
    """Raised when a member lacks the role required for an action."""
    pass
