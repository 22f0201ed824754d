"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailTakenError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidProfileError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .user_profile import update_profile

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailTakenError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidProfileError',
    # Services
    'register_user',
    'authenticate_user',
    'update_profile',
]
