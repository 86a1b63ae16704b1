import pytest
from django.contrib.auth import get_user_model

from accounts import roles
from accounts.models import UserProfile

pytestmark = pytest.mark.django_db


def test_new_user_gets_participant_profile():
    user = get_user_model().objects.create_user(
        username="amina@example.com", email="amina@example.com", password="Passw0rd1"
    )
    profile = UserProfile.objects.get(user=user)
    assert profile.role == roles.PARTICIPANT
    assert profile.full_name == "amina"


def test_profile_is_not_duplicated_on_resave():
    user = get_user_model().objects.create_user(username="x@example.com", email="x@example.com")
    user.first_name = "X"
    user.save()
    assert UserProfile.objects.filter(user=user).count() == 1


def test_display_name_falls_back_to_username():
    user = get_user_model().objects.create_user(username="x@example.com", email="x@example.com")
    user.uprofile.full_name = ""
    assert user.uprofile.display_name == "x@example.com"
