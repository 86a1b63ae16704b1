# conftest.py
import os

import pytest

# make sure tests never try to talk to real Algolia
os.environ.setdefault("DJANGO_DISABLE_ALGOLIA", "1")

PASSWORD = "Passw0rd1"


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def make_profile(db, django_user_model):
    """
    make_profile(role="founder", email=..., full_name=...) -> UserProfile
    The user's username is the e-mail, like accounts created at signup.
    """
    counter = {"n": 0}

    def _make(role="participant", email=None, full_name=None, school_id=None):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        user = django_user_model.objects.create_user(
            username=email, email=email, password=PASSWORD
        )
        profile = user.uprofile
        profile.role = role
        profile.full_name = full_name or f"{role.title()} {counter['n']}"
        profile.school_id = school_id
        profile.save()
        return profile

    return _make


@pytest.fixture
def login(client):
    def _login(profile):
        client.force_login(profile.user)
        return client

    return _login


@pytest.fixture
def founder(make_profile, settings):
    return make_profile("founder", email=settings.FOUNDER_EMAIL, full_name="Founder")


@pytest.fixture
def admin_profile(make_profile):
    return make_profile("admin", full_name="Admin")


@pytest.fixture
def secretary(make_profile):
    return make_profile("general_secretary", full_name="Secretary", school_id=1)


@pytest.fixture
def participant(make_profile):
    return make_profile("participant", full_name="Delegate")


@pytest.fixture
def make_conference(db):
    """make_conference(creator, committees=[dict(...)], **fields) -> Conference"""
    from conferences.models import Committee, Conference

    def _make(creator=None, committees=None, **fields):
        fields.setdefault("name_ru", "Тестовая конференция")
        fields.setdefault("name_en", "Test Conference")
        fields.setdefault("location", "Almaty")
        fields.setdefault("status", Conference.PUBLISHED)
        conference = Conference.objects.create(creator=creator, **fields)
        for i, committee in enumerate(committees or [], start=1):
            row = dict(committee)
            row.setdefault("priority", i)
            Committee.objects.create(conference=conference, **row)
        return conference

    return _make


@pytest.fixture
def make_application(db):
    """make_application(conference, applicant, primary=..., status=...) -> DelegateApplication"""
    from applications.models import DelegateApplication

    def _make(
        conference,
        applicant,
        primary=None,
        secondary=None,
        tertiary=None,
        status=DelegateApplication.APPROVED,
        **fields,
    ):
        fields.setdefault("full_name", applicant.display_name)
        fields.setdefault("email", applicant.email)
        return DelegateApplication.objects.create(
            conference=conference,
            applicant=applicant,
            primary_committee=primary,
            secondary_committee=secondary,
            tertiary_committee=tertiary,
            status=status,
            **fields,
        )

    return _make
