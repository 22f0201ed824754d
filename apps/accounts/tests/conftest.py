import pytest

from apps.accounts.models import User


@pytest.fixture
def user_inactive(db):
    """Deactivated account with a valid password."""
    return User.objects.create_user(
        email='former@example.com',
        password='TestPass123!',
        full_name='Former Employee',
        is_active=False,
    )


@pytest.fixture
def registration_data():
    return {
        'email': 'Jana.Novak@Example.com',
        'full_name': 'Jana Novak',
        'phone': '+420 777 000 111',
        'password': 'SurveyPass2024!',
        'password_confirm': 'SurveyPass2024!',
    }
