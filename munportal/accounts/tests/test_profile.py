import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from accounts.forms import ProfileForm

from .conftest import make_image_bytes

pytestmark = pytest.mark.django_db


def test_png_with_alpha_is_stored_as_jpeg(participant):
    upload = SimpleUploadedFile("avatar.png", make_image_bytes(), content_type="image/png")
    form = ProfileForm(
        data={"full_name": "New Name", "bio": "", "phone": ""},
        files={"photo": upload},
        instance=participant,
    )
    assert form.is_valid(), form.errors
    saved = form.save()

    assert saved.photo.name.lower().endswith(".jpg")
    assert f"profile-{participant.user_id}" in saved.photo.name


def test_non_image_is_rejected(participant):
    upload = SimpleUploadedFile("avatar.png", b"not-an-image-at-all", content_type="image/png")
    form = ProfileForm(
        data={"full_name": "A", "bio": "", "phone": ""},
        files={"photo": upload},
        instance=participant,
    )
    assert not form.is_valid()
    assert "photo" in form.errors


def test_disallowed_content_type_is_rejected(participant):
    upload = SimpleUploadedFile("avatar.gif", make_image_bytes("GIF", mode="RGB"), content_type="image/gif")
    form = ProfileForm(
        data={"full_name": "A", "bio": "", "phone": ""},
        files={"photo": upload},
        instance=participant,
    )
    assert not form.is_valid()
    assert "photo" in form.errors


def test_oversized_photo_is_rejected(participant, settings):
    settings.PROFILE_PHOTO_MAX_BYTES = 10
    upload = SimpleUploadedFile("avatar.png", make_image_bytes(), content_type="image/png")
    form = ProfileForm(
        data={"full_name": "A", "bio": "", "phone": ""},
        files={"photo": upload},
        instance=participant,
    )
    assert not form.is_valid()
    assert "smaller than" in form.errors["photo"][0]


def test_no_upload_keeps_photo_empty(participant):
    form = ProfileForm(data={"full_name": "A", "bio": "hi", "phone": ""}, files={}, instance=participant)
    assert form.is_valid(), form.errors
    assert not form.save().photo


def test_profile_edit_requires_login(client):
    response = client.get(reverse("accounts:profile_edit"))
    assert response.status_code == 302
    assert reverse("accounts:login") in response["Location"]
    assert "next=" in response["Location"]


def test_profile_edit_saves_and_redirects(login, participant):
    client = login(participant)
    response = client.post(
        reverse("accounts:profile_edit"),
        {"full_name": "Dias Omarov", "bio": "Debater", "phone": "87011234567"},
    )
    assert response.status_code == 302
    participant.refresh_from_db()
    assert participant.full_name == "Dias Omarov"
    assert participant.bio == "Debater"


def test_dashboard_lists_own_applications(login, participant, secretary, make_conference, make_application):
    conference = make_conference(creator=secretary, committees=[{"name": "UNESCO"}])
    make_application(conference, participant, primary=conference.committees.first())

    response = login(participant).get(reverse("accounts:dashboard"))

    assert response.status_code == 200
    assert list(response.context["applications"])[0].conference == conference
    assert response.context["my_conferences"] == []


def test_dashboard_counts_applications_for_organizers(login, participant, secretary, make_conference, make_application):
    conference = make_conference(creator=secretary, committees=[{"name": "UNESCO"}])
    make_application(conference, participant, status="pending")

    response = login(secretary).get(reverse("accounts:dashboard"))

    mine = list(response.context["my_conferences"])
    assert mine == [conference]
    assert mine[0].application_count == 1
    assert mine[0].pending_count == 1


def test_public_profile_page(client, secretary):
    response = client.get(reverse("accounts:profile_detail", args=[secretary.user_id]))
    assert response.status_code == 200
    assert response.context["profile"] == secretary


def test_search_suggests_close_matches(client, make_profile):
    make_profile(full_name="Aigerim Bekova")
    make_profile(full_name="Aigerim Tulegenova")
    make_profile(full_name="Timur Ismailov")

    response = client.get(reverse("accounts:search"), {"q": "aige"})

    assert response.status_code == 200
    assert len(response.context["users"]) == 2
    assert len(response.context["suggestions"]) == 2


def test_short_query_gives_no_suggestions(client, make_profile):
    make_profile(full_name="Aigerim Bekova")
    response = client.get(reverse("accounts:search"), {"q": "ai"})
    assert response.context["suggestions"] == []
