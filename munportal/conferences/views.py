import logging
from functools import wraps

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.db import DatabaseError
from django.db.models import Q
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts import roles
from accounts.decorators import (
    custom_login_required,
    get_profile,
    role_required,
    safe_next,
)

from . import services
from .forms import CommitteeFormSet, ConferenceForm
from .models import Conference

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong while saving. Please try again."


# --- Auth / ownership decorators --------------------------------------------


def creator_owns_conference(view_func):
    """
    Decorator to ensure that the logged-in profile created the conference
    (the founder may act on any conference).
    """

    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        conference_id = kwargs.get("conference_id")
        if conference_id is None:
            raise PermissionDenied("No conference ID provided.")

        conference = get_object_or_404(Conference, id=conference_id)
        if not services.can_edit_conference(get_profile(request), conference):
            raise PermissionDenied("You are not allowed to modify this conference.")

        return view_func(request, *args, **kwargs)

    return _wrapped_view


def _can_view(request, conference):
    if conference.is_published:
        return True
    if not request.user.is_authenticated:
        return False
    profile = get_profile(request)
    return services.can_edit_conference(profile, conference) or roles.can_approve_conference(
        profile.role
    )


# --- Views ------------------------------------------------------------------


def conference_list(request):
    query = (request.GET.get("q") or "").strip()
    conferences = Conference.objects.published()
    if query:
        conferences = conferences.filter(
            Q(name_ru__icontains=query)
            | Q(name_kk__icontains=query)
            | Q(name_en__icontains=query)
            | Q(location__icontains=query)
        )
    return render(
        request,
        "conferences/conference_list.html",
        {"conferences": conferences, "query": query},
    )


def conference_detail(request, conference_id):
    conference = get_object_or_404(
        Conference.objects.select_related("creator"), id=conference_id
    )
    if not _can_view(request, conference):
        raise Http404("No such conference.")

    profile = get_profile(request) if request.user.is_authenticated else None
    return render(
        request,
        "conferences/conference_detail.html",
        {
            "conference": conference,
            "committees": conference.committees.all(),
            "can_edit": services.can_edit_conference(profile, conference),
            "can_manage": roles.can_manage_conference(profile, conference),
        },
    )


@custom_login_required
@role_required(roles.can_create_conference, "You are not allowed to create conferences.")
def create_conference(request):
    profile = get_profile(request)
    if request.method == "POST":
        form = ConferenceForm(request.POST)
        formset = CommitteeFormSet(request.POST)
        if form.is_valid() and formset.is_valid():
            try:
                conference = services.create_conference(profile, form, formset)
            except DatabaseError:
                logger.exception("Could not create conference for profile %s", profile.pk)
                messages.error(request, GENERIC_ERROR)
            else:
                if conference.is_published:
                    messages.success(request, "Conference published.")
                else:
                    messages.success(request, "Conference submitted for approval.")
                return redirect("conferences:conference_detail", conference_id=conference.id)
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        form = ConferenceForm()
        formset = CommitteeFormSet()

    return render(
        request,
        "conferences/conference_form.html",
        {"form": form, "formset": formset},
    )


@custom_login_required
@creator_owns_conference
def edit_conference(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    if request.method == "POST":
        form = ConferenceForm(request.POST, instance=conference)
        formset = CommitteeFormSet(request.POST, instance=conference)
        if form.is_valid() and formset.is_valid():
            try:
                services.update_conference(get_profile(request), conference, form, formset)
            except DatabaseError:
                logger.exception("Could not update conference %s", conference.pk)
                messages.error(request, GENERIC_ERROR)
            else:
                messages.success(request, "Conference updated successfully!")
                return redirect("conferences:conference_detail", conference_id=conference.id)
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        form = ConferenceForm(instance=conference)
        formset = CommitteeFormSet(instance=conference)

    return render(
        request,
        "conferences/conference_form.html",
        {"form": form, "formset": formset, "conference": conference},
    )


@custom_login_required
@creator_owns_conference
def delete_conference(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    if request.method == "POST":
        services.delete_conference(conference, get_profile(request))
        messages.success(request, "Conference deleted.")
        return redirect("accounts:dashboard")
    return render(request, "conferences/delete_conference.html", {"conference": conference})


@require_POST
@custom_login_required
def toggle_registration(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    is_open = not conference.registration_open
    try:
        article = services.set_registration_open(conference, get_profile(request), is_open)
    except DatabaseError:
        logger.exception("Could not toggle registration for conference %s", conference.pk)
        messages.error(request, GENERIC_ERROR)
    else:
        messages.success(request, "Registration status updated.")
        if article is not None:
            messages.info(request, "A news article announcing the closure was published.")
    return redirect(safe_next(request, "accounts:dashboard"))


@custom_login_required
@role_required(roles.can_approve_conference, "Only the founder or an administrator can review conferences.")
def approvals(request):
    conferences = (
        Conference.objects.pending()
        .select_related("creator")
        .prefetch_related("committees")
    )
    return render(request, "conferences/approvals.html", {"conferences": conferences})


@require_POST
@custom_login_required
def approve_conference(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    services.approve_conference(conference, get_profile(request))
    messages.success(request, "Conference approved.")
    return redirect(safe_next(request, "conferences:approvals"))


@require_POST
@custom_login_required
def reject_conference(request, conference_id):
    conference = get_object_or_404(Conference, id=conference_id)
    services.reject_conference(conference, get_profile(request))
    messages.success(request, "Conference rejected.")
    return redirect(safe_next(request, "conferences:approvals"))
