from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone

from conferences.models import Conference
from portal import views

pytestmark = pytest.mark.django_db


def test_index_shows_latest_four_published(client, secretary, make_conference):
    made = [make_conference(creator=secretary, name_en=f"MUN {i}") for i in range(5)]
    make_conference(creator=secretary, status=Conference.PENDING)

    response = client.get(reverse("portal:index"))

    assert response.status_code == 200
    assert response.templates[0].name == "portal/index.html"
    assert response.context["conferences"] == list(reversed(made))[:4]


def test_home_fetch_is_retried_once(secretary, make_conference):
    conference = make_conference(creator=secretary)
    real_published = Conference.objects.published
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise DatabaseError("blip")
        return real_published()

    with patch.object(Conference.objects, "published", side_effect=flaky), patch(
        "portal.views.time.sleep"
    ) as sleep:
        result = views.latest_conferences()

    assert result == [conference]
    assert len(calls) == 2
    sleep.assert_called_once()


def test_home_degrades_to_empty_list(client):
    with patch.object(Conference.objects, "published", side_effect=DatabaseError("down")), patch(
        "portal.views.time.sleep"
    ):
        response = client.get(reverse("portal:index"))

    assert response.status_code == 200
    assert response.context["conferences"] == []


def test_calendar_window(client, secretary, make_conference):
    today = timezone.localdate()
    soon = make_conference(creator=secretary, start_date=today + timedelta(days=10))
    make_conference(creator=secretary, start_date=today + timedelta(days=120))
    make_conference(creator=secretary, start_date=today - timedelta(days=1))
    make_conference(creator=secretary, status=Conference.PENDING, start_date=today + timedelta(days=5))

    response = client.get(reverse("portal:calendar"))

    assert response.status_code == 200
    assert list(response.context["conferences"]) == [soon]


def test_about_page(client):
    response = client.get(reverse("portal:about"))
    assert response.status_code == 200


def test_permission_denied_view_renders_message(rf):
    from django.core.exceptions import PermissionDenied

    response = views.permission_denied_view(rf.get("/"), PermissionDenied("Nope."))
    assert response.status_code == 403
    assert b"Nope." in response.content


def test_secretariat_defaults_to_astana(client, make_profile):
    astana = make_profile("general_secretary", full_name="Aida", school_id=2)
    make_profile("general_secretary", full_name="Bolat", school_id=1)

    response = client.get(reverse("portal:secretariat"))

    assert response.status_code == 200
    assert response.context["region"] == 2
    assert list(response.context["members"]) == [astana]


def test_secretariat_filters_region_and_role(client, make_profile):
    deputy = make_profile("deputy", full_name="Arman", school_id=1)
    general = make_profile("general_secretary", full_name="Zhanna", school_id=1)
    make_profile("admin", full_name="Admin", school_id=1)
    make_profile("participant", full_name="Delegate", school_id=1)
    make_profile("deputy", full_name="Elsewhere", school_id=3)

    response = client.get(reverse("portal:secretariat"), {"region": "1"})

    assert response.context["region"] == 1
    # general secretaries come before deputies
    assert list(response.context["members"]) == [general, deputy]
    content = response.content.decode()
    assert reverse("accounts:profile_detail", args=[general.user_id]) in content
    assert "Elsewhere" not in content


@pytest.mark.parametrize("region", ["999", "abc", "-1"])
def test_secretariat_unknown_region_falls_back(client, region):
    response = client.get(reverse("portal:secretariat"), {"region": region})

    assert response.status_code == 200
    assert response.context["region"] == 2
    assert b"There is no secretariat for this city yet." in response.content


def test_home_gives_up_after_second_failure():
    with patch.object(
        Conference.objects, "published", side_effect=DatabaseError("down")
    ) as published, patch("portal.views.time.sleep") as sleep:
        assert views.latest_conferences() == []

    assert published.call_count == 2
    sleep.assert_called_once()
