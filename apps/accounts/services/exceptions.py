"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailTakenError(AccountsServiceError):
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password. The two are not told apart."""
    pass


class InactiveAccountError(AccountsServiceError):
    pass


class InvalidProfileError(AccountsServiceError):
    """Profile update with an empty full name."""
    pass
