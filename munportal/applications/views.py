import logging

from django.contrib import messages
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError
from django.db.models import Count
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from accounts import roles
from accounts.decorators import custom_login_required, get_profile
from conferences.models import Conference

from . import services
from .forms import ApplicationForm, AssignmentOverrideForm, RegistrationForm, StatusForm
from .models import DelegateApplication

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."


def _inbox_url(conference_id):
    return f"{reverse('applications:inbox')}?conference={conference_id}"


def _first_error(exc):
    return exc.messages[0] if exc.messages else str(exc)


@custom_login_required
def apply(request, conference_id):
    conference = get_object_or_404(Conference.objects.published(), id=conference_id)
    profile = get_profile(request)

    if not conference.registration_open:
        messages.error(request, "Registration for this conference is closed.")
        return redirect("conferences:conference_detail", conference_id=conference.id)

    if DelegateApplication.objects.filter(conference=conference, applicant=profile).exists():
        messages.info(request, "You have already applied to this conference.")
        return redirect("accounts:dashboard")

    if request.method == "POST":
        form = ApplicationForm(request.POST, conference=conference)
        if form.is_valid():
            try:
                services.submit_application(conference, profile, form)
            except ValidationError as exc:
                messages.error(request, _first_error(exc))
            except DatabaseError:
                logger.exception("Could not save application for conference %s", conference.pk)
                messages.error(request, GENERIC_ERROR)
            else:
                messages.success(request, "Your application has been submitted.")
                return redirect("accounts:dashboard")
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        form = ApplicationForm(
            conference=conference,
            initial={
                "full_name": profile.full_name,
                "email": request.user.email,
                "phone": profile.phone,
            },
        )

    return render(
        request,
        "applications/apply.html",
        {"form": form, "conference": conference},
    )


@custom_login_required
def inbox(request):
    profile = get_profile(request)
    if not roles.can_open_inbox(profile.role):
        raise PermissionDenied("You are not allowed to review applications.")

    conferences = Conference.objects.all()
    if profile.role not in (roles.FOUNDER, roles.ADMIN):
        conferences = conferences.filter(creator=profile)

    selected = None
    conference_id = request.GET.get("conference")
    if conference_id and conference_id.isdigit():
        selected = get_object_or_404(conferences, id=int(conference_id))
    else:
        selected = conferences.first()

    applications = []
    committees = []
    if selected is not None:
        committees = selected.committees.annotate(
            assigned_count=Count("assigned_applications")
        )
        applications = [
            (application, AssignmentOverrideForm(
                conference=selected,
                prefix=f"a{application.pk}",
                initial={
                    "committee": application.assigned_committee_id,
                    "country": application.assigned_country,
                },
            ))
            for application in selected.applications.select_related(
                "applicant",
                "primary_committee",
                "secondary_committee",
                "tertiary_committee",
                "assigned_committee",
            )
        ]

    return render(
        request,
        "applications/inbox.html",
        {
            "conferences": conferences,
            "selected": selected,
            "committees": committees,
            "applications": applications,
            "status_choices": DelegateApplication.STATUS_CHOICES,
        },
    )


@require_POST
@custom_login_required
def update_status(request, application_id):
    application = get_object_or_404(
        DelegateApplication.objects.select_related("conference"), id=application_id
    )
    form = StatusForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Unknown status.")
        return redirect(_inbox_url(application.conference_id))

    try:
        services.set_application_status(
            application, get_profile(request), form.cleaned_data["status"]
        )
    except DatabaseError:
        logger.exception("Could not update application %s", application.pk)
        messages.error(request, GENERIC_ERROR)
    else:
        messages.success(request, f"{application.full_name}: {application.get_status_display()}.")
    return redirect(_inbox_url(application.conference_id))


@require_POST
@custom_login_required
def auto_assign(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    try:
        result = services.run_auto_assignment(conference, profile=get_profile(request))
    except DatabaseError:
        logger.exception("Auto-assignment failed for conference %s", conference.pk)
        messages.error(
            request,
            "Auto-assignment could not be completed. Some placements may have "
            "been saved; please run it again.",
        )
    else:
        messages.success(
            request,
            f"Auto-assignment finished: {result.placed} placed, "
            f"{result.unplaced} unplaced, {len(result.changes)} updated.",
        )
    return redirect(_inbox_url(conference.id))


@require_POST
@custom_login_required
def override_assignment(request, application_id):
    application = get_object_or_404(
        DelegateApplication.objects.select_related("conference"), id=application_id
    )
    form = AssignmentOverrideForm(
        request.POST, conference=application.conference, prefix=f"a{application.pk}"
    )
    if not form.is_valid():
        messages.error(request, "Choose a committee from this conference.")
        return redirect(_inbox_url(application.conference_id))

    try:
        services.override_assignment(
            application,
            get_profile(request),
            committee=form.cleaned_data["committee"],
            country=form.cleaned_data["country"],
        )
    except ValidationError as exc:
        messages.error(request, _first_error(exc))
    except DatabaseError:
        logger.exception("Could not override placement of application %s", application.pk)
        messages.error(request, GENERIC_ERROR)
    else:
        messages.success(request, f"Placement for {application.full_name} saved.")
    return redirect(_inbox_url(application.conference_id))


@custom_login_required
def badges(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    if not roles.can_manage_applications(get_profile(request), conference):
        raise PermissionDenied("You are not allowed to print badges for this conference.")

    placed = (
        conference.applications.filter(
            status=DelegateApplication.APPROVED, assigned_committee__isnull=False
        )
        .select_related("conference", "assigned_committee")
        .order_by("assigned_committee__priority", "assigned_committee_id", "full_name")
    )
    pdf_bytes = services.build_badges_pdf(list(placed))
    if pdf_bytes is None:
        messages.info(request, "No delegates have been placed yet.")
        return redirect(_inbox_url(conference.id))

    response = HttpResponse(pdf_bytes, content_type="application/pdf")
    response["Content-Disposition"] = f'attachment; filename="badges-{conference.id}.pdf"'
    return response


def register(request):
    """Committee-less sign-up form."""
    if request.method == "POST":
        form = RegistrationForm(request.POST)
        if form.is_valid():
            registration = form.save(commit=False)
            if request.user.is_authenticated:
                registration.user = request.user
            try:
                registration.save()
            except DatabaseError:
                logger.exception("Could not save registration")
                messages.error(request, GENERIC_ERROR)
            else:
                messages.success(request, "Thank you! Your registration has been received.")
                return redirect("portal:index")
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        initial = {}
        if request.user.is_authenticated:
            profile = get_profile(request)
            initial = {"full_name": profile.full_name, "email": request.user.email}
        form = RegistrationForm(initial=initial)

    return render(request, "applications/register.html", {"form": form})
