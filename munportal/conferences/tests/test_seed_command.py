from io import StringIO

import pytest
from django.core.management import call_command

from applications.models import DelegateApplication
from conferences.models import Committee, Conference

pytestmark = pytest.mark.django_db


def test_seed_creates_published_conferences_with_applications():
    out = StringIO()
    call_command("seed_conferences", "--count", "2", "--delegates", "3", stdout=out)

    assert Conference.objects.published().count() == 2
    assert Committee.objects.count() == 8
    assert DelegateApplication.objects.count() == 6
    assert "Created 2 conferences" in out.getvalue()


def test_seed_reuses_accounts():
    call_command("seed_conferences", "--count", "1", "--delegates", "2", stdout=StringIO())
    call_command("seed_conferences", "--count", "1", "--delegates", "2", stdout=StringIO())

    assert Conference.objects.count() == 2
    assert DelegateApplication.objects.count() == 4
