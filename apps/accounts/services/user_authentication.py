"""Sign-in."""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


def mask_email(email: str) -> str:
    """``jana.novak@example.com`` -> ``j***@example.com``."""
    local, sep, domain = email.strip().partition('@')
    if not sep:
        return '***'
    return f"{local[:1]}***@{domain}"


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check email and password and stamp ``last_login``.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Account is deactivated
    """
    user = User.objects.filter(email__iexact=email.strip()).first()
    if user is None or not user.check_password(password):
        logger.warning("Failed sign-in for %s", mask_email(email))
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    User.objects.filter(id=user.id).update(last_login=timezone.now())
    user.refresh_from_db(fields=['last_login'])
    return user
