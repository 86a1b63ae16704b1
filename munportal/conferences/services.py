# conferences/services.py
"""
Conference lifecycle operations.

Views call these after their own checks; the checks are repeated here so
that no caller can publish, approve or delete a conference with an
insufficient role.
"""
import logging

from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.utils import timezone

from accounts import roles
from news.models import NewsArticle

from .models import Conference
from .search import algolia_delete, algolia_save

logger = logging.getLogger(__name__)


def initial_status_for(profile):
    """Founders publish directly; everyone else waits for approval."""
    return Conference.PUBLISHED if profile.role == roles.FOUNDER else Conference.PENDING


def create_conference(profile, form, formset):
    """
    Save a validated ConferenceForm and its CommitteeFormSet.

    ``formset`` must have been built without an instance; it is re-bound to
    the new conference before saving.
    """
    if not roles.can_create_conference(profile.role):
        raise PermissionDenied("You are not allowed to create conferences.")

    with transaction.atomic():
        conference = form.save(commit=False)
        conference.creator = profile
        conference.status = initial_status_for(profile)
        conference.save()

        formset.instance = conference
        formset.save()

    logger.info(
        "Conference %s created by profile %s with status %s",
        conference.pk,
        profile.pk,
        conference.status,
    )
    algolia_save(conference)
    return conference


def update_conference(profile, conference, form, formset):
    if not can_edit_conference(profile, conference):
        raise PermissionDenied("You are not allowed to modify this conference.")

    with transaction.atomic():
        conference = form.save()
        formset.save()

    logger.info("Conference %s updated by profile %s", conference.pk, profile.pk)
    algolia_save(conference)
    return conference


def approve_conference(conference, profile):
    if not roles.can_approve_conference(profile.role):
        raise PermissionDenied("Only the founder or an administrator can approve conferences.")

    conference.status = Conference.PUBLISHED
    conference.approved_by = profile
    conference.approved_at = timezone.now()
    conference.save(update_fields=["status", "approved_by", "approved_at", "updated_at"])
    logger.info("Conference %s approved by profile %s", conference.pk, profile.pk)
    algolia_save(conference)
    return conference


def reject_conference(conference, profile):
    if not roles.can_approve_conference(profile.role):
        raise PermissionDenied("Only the founder or an administrator can reject conferences.")

    conference.status = Conference.REJECTED
    conference.save(update_fields=["status", "updated_at"])
    logger.info("Conference %s rejected by profile %s", conference.pk, profile.pk)
    algolia_save(conference)
    return conference


def can_edit_conference(profile, conference):
    if profile is None:
        return False
    return profile.role == roles.FOUNDER or (
        conference.creator_id is not None and conference.creator_id == profile.pk
    )


def set_registration_open(conference, profile, is_open):
    """
    Open or close delegate registration. Closing it publishes a news article
    announcing the closure in all three languages. Returns that article, or
    None when nothing was announced.
    """
    if not can_edit_conference(profile, conference):
        raise PermissionDenied("You are not allowed to change this conference.")

    was_open = conference.registration_open
    conference.registration_open = is_open
    conference.save(update_fields=["registration_open", "updated_at"])
    logger.info(
        "Registration for conference %s is now %s",
        conference.pk,
        "open" if is_open else "closed",
    )

    if was_open and not is_open:
        return announce_registration_closed(conference, author=profile)
    return None


def announce_registration_closed(conference, author=None):
    location = conference.location
    return NewsArticle.objects.create(
        title_ru=f"Регистрация на {conference.localized('name', 'ru')} закрыта",
        title_kk=f"{conference.localized('name', 'kk')} тіркелуі жабылды",
        title_en=f"Registration for {conference.localized('name', 'en')} is closed",
        content_ru=(
            f"Регистрация на конференцию {conference.localized('name', 'ru')} "
            f"официально закрыта. Конференция состоится "
            f"{conference.localized('date', 'ru')} в {location}. Всем "
            f"зарегистрированным делегатам будет отправлена дополнительная "
            f"информация. Желаем успехов всем участникам!"
        ),
        content_kk=(
            f"{conference.localized('name', 'kk')} конференциясына тіркелу ресми "
            f"түрде жабылды. Конференция {conference.localized('date', 'kk')} күні "
            f"{location} өтеді. Барлық тіркелген делегаттарға қосымша ақпарат "
            f"жіберіледі. Барлық қатысушыларға сәттілік тілейміз!"
        ),
        content_en=(
            f"Registration for {conference.localized('name', 'en')} conference is "
            f"officially closed. The conference will take place on "
            f"{conference.localized('date', 'en')} at {location}. Additional "
            f"information will be sent to all registered delegates. We wish all "
            f"participants success!"
        ),
        author=author,
    )


def delete_conference(conference, profile):
    if not can_edit_conference(profile, conference):
        raise PermissionDenied("You are not allowed to delete this conference.")

    conference_id = conference.pk
    algolia_delete(conference)
    conference.delete()
    logger.info("Conference %s deleted by profile %s", conference_id, profile.pk)
