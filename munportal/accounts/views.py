# accounts/views.py
import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login as auth_login
from django.contrib.auth import logout as auth_logout
from django.contrib.auth import views as auth_views
from django.db import DatabaseError
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from applications.models import DelegateApplication, Registration
from conferences.models import Conference

from . import roles
from .decorators import (
    custom_login_required,
    get_profile,
    role_required,
    safe_next,
)
from .forms import AdminProfileForm, EmailAuthenticationForm, ProfileForm, SignupForm
from .models import UserProfile

logger = logging.getLogger(__name__)

SEARCH_SUGGESTION_LIMIT = 5


class EmailLoginView(auth_views.LoginView):
    template_name = "accounts/login.html"
    authentication_form = EmailAuthenticationForm

    def form_valid(self, form):
        # if someone is already logged in in this session, start clean
        if self.request.user.is_authenticated:
            auth_logout(self.request)
        resp = super().form_valid(form)
        logger.info("User %s logged in", form.get_user().pk)
        return resp


def signup(request):
    if request.method == "POST":
        if request.user.is_authenticated:
            auth_logout(request)

        form = SignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            auth_login(request, user, backend="django.contrib.auth.backends.ModelBackend")
            logger.info("New account %s with role %s", user.pk, user.uprofile.role)
            messages.success(request, "Account created. Welcome to MUN Portal!")
            return redirect(safe_next(request, "accounts:dashboard"))
        messages.error(request, "Please fix the errors below.")
    else:
        form = SignupForm()

    return render(
        request,
        "accounts/signup.html",
        {"form": form, "next": request.GET.get("next", "")},
    )


def logout_then_home(request):
    auth_logout(request)
    return redirect(getattr(settings, "LOGOUT_REDIRECT_URL", "/"))


@custom_login_required
def dashboard(request):
    profile = get_profile(request)

    registrations = Registration.objects.filter(user=request.user)
    applications = DelegateApplication.objects.filter(applicant=profile).select_related(
        "conference",
        "primary_committee",
        "secondary_committee",
        "tertiary_committee",
        "assigned_committee",
    )

    my_conferences = []
    if roles.can_create_conference(profile.role):
        my_conferences = (
            Conference.objects.filter(creator=profile)
            .annotate(
                application_count=Count("applications"),
                pending_count=Count(
                    "applications",
                    filter=Q(applications__status=DelegateApplication.PENDING),
                ),
            )
            .order_by("-created_at")
        )

    return render(
        request,
        "accounts/dashboard.html",
        {
            "profile": profile,
            "registrations": registrations,
            "applications": applications,
            "my_conferences": my_conferences,
        },
    )


@custom_login_required
def profile_edit(request):
    profile = get_profile(request)

    if request.method == "POST":
        form = ProfileForm(request.POST, request.FILES, instance=profile)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception("Could not save profile %s", profile.pk)
                messages.error(request, "Something went wrong. Please try again.")
            else:
                messages.success(request, "Profile updated successfully.")
                return redirect(safe_next(request, "accounts:dashboard"))
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        form = ProfileForm(instance=profile)

    return render(
        request,
        "accounts/profile_edit.html",
        {"form": form, "next": request.GET.get("next", "")},
    )


def profile_detail(request, user_id):
    profile = get_object_or_404(UserProfile.objects.select_related("user"), user_id=user_id)
    return render(request, "accounts/profile_detail.html", {"profile": profile})


def search_users(request):
    query = (request.GET.get("q") or "").strip()
    users = UserProfile.objects.select_related("user").order_by("full_name")
    if query:
        users = users.filter(full_name__icontains=query)

    suggestions = []
    if len(query) >= 3:
        found = list(users[: SEARCH_SUGGESTION_LIMIT + 1])
        if 0 < len(found) <= SEARCH_SUGGESTION_LIMIT:
            suggestions = found

    return render(
        request,
        "accounts/search.html",
        {"query": query, "users": users, "suggestions": suggestions},
    )


@custom_login_required
@role_required(roles.can_administer_users, "Only the founder can manage users.")
def admin_panel(request):
    query = (request.GET.get("q") or "").strip()
    role = request.GET.get("role") or ""

    profiles = UserProfile.objects.select_related("user").order_by("-created_at")
    if query:
        profiles = profiles.filter(
            Q(full_name__icontains=query)
            | Q(bio__icontains=query)
            | Q(phone__icontains=query)
            | Q(user__email__icontains=query)
        )
    if role:
        profiles = profiles.filter(role=role)

    rows = [(p, AdminProfileForm(instance=p, prefix=f"p{p.pk}")) for p in profiles]
    return render(
        request,
        "accounts/admin_panel.html",
        {
            "rows": rows,
            "query": query,
            "role": role,
            "role_choices": roles.ROLE_CHOICES,
        },
    )


@require_POST
@custom_login_required
@role_required(roles.can_administer_users, "Only the founder can manage users.")
def admin_update_profile(request, profile_id):
    profile = get_object_or_404(UserProfile, pk=profile_id)
    form = AdminProfileForm(request.POST, instance=profile, prefix=f"p{profile.pk}")
    if form.is_valid():
        try:
            form.save()
        except DatabaseError:
            logger.exception("Could not update profile %s", profile.pk)
            messages.error(request, "Error updating user. Please try again.")
        else:
            logger.info(
                "Profile %s now has role %s, region %s",
                profile.pk,
                profile.role,
                profile.school_id,
            )
            messages.success(request, "User updated.")
    else:
        messages.error(request, "Invalid role or region.")
    return redirect("accounts:admin_panel")
