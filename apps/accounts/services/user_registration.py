"""Sign-up."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import EmailTakenError

User = get_user_model()

logger = logging.getLogger(__name__)


def register_user(*, email: str, password: str, full_name: str, phone: str = '') -> User:
    """
    Create an account. The user belongs to no company until they onboard
    one or are added to one.

    Raises:
        EmailTakenError: If an account already uses the email (case-insensitive)
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise EmailTakenError("An account with this email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                full_name=full_name,
                phone=phone or '',
            )
    except IntegrityError:
        raise EmailTakenError("An account with this email already exists")

    logger.info("Registered user %s", user.id)
    return user
