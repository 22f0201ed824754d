"""
Domain-specific exceptions for workers app.
"""


class WorkersServiceError(Exception):
    """Base exception for all workers service errors."""
    pass


class WorkerNotFoundError(WorkersServiceError):
    """Raised when a worker does not exist or belongs to another company."""
    pass


class InvalidSalaryError(WorkersServiceError):
    """Raised when neither the monthly nor the daily salary is positive."""
    pass


class SkillNotFoundError(WorkersServiceError):
    """Raised when a skill row does not exist or is not visible."""
    pass


class DuplicateSkillError(WorkersServiceError):
    """Raised when the worker already has this skill."""
    pass


class CatalogEntryNotFoundError(WorkersServiceError):
    """Raised for an unknown software, brand or equipment type."""
    pass


class DuplicateCatalogEntryError(WorkersServiceError):
    """Raised when a visible software or brand already has this name."""
    pass
