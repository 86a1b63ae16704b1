from unittest.mock import MagicMock, patch

import pytest
from django.core.exceptions import PermissionDenied

from conferences import services
from conferences.forms import CommitteeFormSet, ConferenceForm
from conferences.models import Conference
from news.models import NewsArticle

pytestmark = pytest.mark.django_db


def _forms(data):
    form = ConferenceForm(data)
    formset = CommitteeFormSet(data)
    assert form.is_valid(), form.errors
    assert formset.is_valid(), (formset.errors, formset.non_form_errors())
    return form, formset


def test_secretary_conference_waits_for_approval(secretary, conference_post):
    conference = services.create_conference(secretary, *_forms(conference_post()))

    assert conference.status == Conference.PENDING
    assert conference.creator == secretary
    committee = conference.committees.get()
    assert committee.name == "Security Council"
    assert committee.countries == ["USA", "UK", "France"]
    assert conference.languages == ["ru", "en"]


def test_founder_conference_is_published(founder, conference_post):
    conference = services.create_conference(founder, *_forms(conference_post()))
    assert conference.status == Conference.PUBLISHED


def test_participant_cannot_create(participant, conference_post):
    with pytest.raises(PermissionDenied):
        services.create_conference(participant, *_forms(conference_post()))
    assert not Conference.objects.exists()


def test_admin_approves(admin_profile, secretary, make_conference):
    conference = make_conference(creator=secretary, status=Conference.PENDING)

    services.approve_conference(conference, admin_profile)

    conference.refresh_from_db()
    assert conference.status == Conference.PUBLISHED
    assert conference.approved_by == admin_profile
    assert conference.approved_at is not None


def test_secretary_cannot_approve(secretary, make_conference):
    conference = make_conference(creator=secretary, status=Conference.PENDING)
    with pytest.raises(PermissionDenied):
        services.approve_conference(conference, secretary)


def test_reject(founder, secretary, make_conference):
    conference = make_conference(creator=secretary, status=Conference.PENDING)
    services.reject_conference(conference, founder)
    conference.refresh_from_db()
    assert conference.status == Conference.REJECTED


def test_closing_registration_announces_it(secretary, make_conference):
    conference = make_conference(creator=secretary, name_en="Astana MUN", date_en="May 5")

    article = services.set_registration_open(conference, secretary, False)

    conference.refresh_from_db()
    assert conference.registration_open is False
    assert article is not None
    assert NewsArticle.objects.count() == 1
    assert article.title_en == "Registration for Astana MUN is closed"
    assert article.title_ru and article.title_kk
    assert article.content_ru and article.content_kk and article.content_en


def test_reopening_registration_posts_nothing(secretary, make_conference):
    conference = make_conference(creator=secretary, registration_open=False)
    assert services.set_registration_open(conference, secretary, True) is None
    assert not NewsArticle.objects.exists()


def test_other_secretary_cannot_toggle(secretary, make_profile, make_conference):
    conference = make_conference(creator=secretary)
    other = make_profile("general_secretary")
    with pytest.raises(PermissionDenied):
        services.set_registration_open(conference, other, False)


def test_admin_cannot_toggle_someone_elses_registration(
    admin_profile, secretary, make_conference
):
    conference = make_conference(creator=secretary)
    with pytest.raises(PermissionDenied):
        services.set_registration_open(conference, admin_profile, False)

    conference.refresh_from_db()
    assert conference.registration_open is True
    assert not NewsArticle.objects.exists()


def test_founder_can_toggle_any_registration(founder, secretary, make_conference):
    conference = make_conference(creator=secretary)
    services.set_registration_open(conference, founder, False)

    conference.refresh_from_db()
    assert conference.registration_open is False


def test_delete_by_creator(secretary, make_conference):
    conference = make_conference(creator=secretary, committees=[{"name": "GA"}])
    services.delete_conference(conference, secretary)
    assert not Conference.objects.exists()


def test_admin_cannot_delete_others_conference(admin_profile, secretary, make_conference):
    conference = make_conference(creator=secretary)
    with pytest.raises(PermissionDenied):
        services.delete_conference(conference, admin_profile)


@pytest.fixture
def record_api(settings):
    settings.ALGOLIA_ENABLED = True
    save_record, delete_record = MagicMock(), MagicMock()
    with patch("conferences.search._record_api", return_value=(save_record, delete_record)):
        yield save_record, delete_record


def test_search_sync_follows_publication(founder, secretary, make_conference, record_api):
    save_record, delete_record = record_api
    conference = make_conference(creator=secretary, status=Conference.PENDING)

    services.reject_conference(conference, founder)
    delete_record.assert_called_once_with(conference)
    services.approve_conference(conference, founder)
    save_record.assert_called_once_with(conference)


def test_deleting_removes_from_search(secretary, make_conference, record_api):
    _, delete_record = record_api
    conference = make_conference(creator=secretary)
    services.delete_conference(conference, secretary)
    assert delete_record.call_count == 1


def test_search_failures_do_not_break_approval(founder, secretary, make_conference, record_api):
    save_record, _ = record_api
    save_record.side_effect = RuntimeError("boom")
    conference = make_conference(creator=secretary, status=Conference.PENDING)

    services.approve_conference(conference, founder)

    conference.refresh_from_db()
    assert conference.status == Conference.PUBLISHED


def test_search_is_skipped_when_disabled(founder, secretary, make_conference, settings):
    settings.ALGOLIA_ENABLED = False
    conference = make_conference(creator=secretary, status=Conference.PENDING)
    with patch("conferences.search._record_api") as record_api:
        services.approve_conference(conference, founder)
    record_api.assert_not_called()
