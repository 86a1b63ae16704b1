import logging
import time
from datetime import timedelta

from django.db import DatabaseError
from django.db.models import Case, IntegerField, Value, When
from django.shortcuts import render
from django.utils import timezone

from accounts import roles
from accounts.models import UserProfile
from conferences.models import Conference

from .i18n import current_language

logger = logging.getLogger(__name__)

HOME_CONFERENCE_LIMIT = 4
CALENDAR_DAYS = 90
RETRY_DELAY_SECONDS = 0.5
DEFAULT_SECRETARIAT_REGION = 2  # Astana
SECRETARIAT_ROLES = (roles.GENERAL_SECRETARY, roles.DEPUTY)


def latest_conferences(limit=HOME_CONFERENCE_LIMIT, retry_delay=RETRY_DELAY_SECONDS):
    """
    Latest published conferences for the home page. A database error is
    retried once after ``retry_delay`` seconds; a second failure gives [].
    """
    try:
        return list(Conference.objects.published()[:limit])
    except DatabaseError:
        logger.warning("Loading home page conferences failed, retrying")
        time.sleep(retry_delay)

    try:
        return list(Conference.objects.published()[:limit])
    except DatabaseError:
        logger.exception("Could not load conferences for the home page")
        return []


def index(request):
    return render(request, "portal/index.html", {"conferences": latest_conferences()})


def about(request):
    return render(request, "portal/about.html")


def calendar(request):
    today = timezone.localdate()
    conferences = Conference.objects.published().filter(
        start_date__gte=today,
        start_date__lte=today + timedelta(days=CALENDAR_DAYS),
    ).order_by("start_date", "time", "id")
    return render(
        request,
        "portal/calendar.html",
        {"conferences": conferences, "today": today, "days": CALENDAR_DAYS},
    )


def permission_denied_view(request, exception):
    message = str(exception) or "You do not have permission to access this page."

    context = {"error_message": message}
    return render(request, "portal/403.html", context, status=403)


def _selected_region(request):
    region = request.GET.get("region", "")
    if region.isdigit() and int(region) in roles.REGIONS:
        return int(region)
    return DEFAULT_SECRETARIAT_REGION


def secretariat(request):
    """General and deputy secretaries bound to one region."""
    region = _selected_region(request)
    members = (
        UserProfile.objects.filter(school_id=region, role__in=SECRETARIAT_ROLES)
        .select_related("user")
        .annotate(
            rank=Case(
                When(role=roles.GENERAL_SECRETARY, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        )
        .order_by("rank", "full_name", "id")
    )
    language = current_language()
    regions = [
        (pk, roles.region_name(pk, language)) for pk in sorted(roles.REGIONS)
    ]
    return render(
        request,
        "portal/secretariat.html",
        {"members": members, "region": region, "regions": regions},
    )
