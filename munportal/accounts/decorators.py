# accounts/decorators.py
from functools import wraps
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth import REDIRECT_FIELD_NAME
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect, resolve_url
from django.utils.http import url_has_allowed_host_and_scheme

from .models import UserProfile


def get_profile(request):
    """The logged-in user's profile, created on the spot if it went missing."""
    profile, _ = UserProfile.objects.get_or_create(user=request.user)
    return profile


def safe_next(request, default):
    """The `next` parameter when it points back at this site, else `default`."""
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}
    ):
        return next_url
    return default


def custom_login_required(
    view_func=None,
    redirect_field_name=REDIRECT_FIELD_NAME,
    login_url=None,
    extra_params=None,
):
    """
    Decorator for views that checks that the user is logged in, redirecting
    to the log-in page if necessary. Adds custom query parameters to the
    redirect URL.

    Args:
        extra_params (dict): A dictionary of parameters to add to the redirect URL.
    """

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            if request.user.is_authenticated:
                return view_func(request, *args, **kwargs)

            path = request.get_full_path()
            resolved_login_url = resolve_url(login_url or settings.LOGIN_URL)

            login_url_parts = {redirect_field_name: path}
            if extra_params:
                login_url_parts.update(extra_params)

            return redirect(f"{resolved_login_url}?{urlencode(login_url_parts)}")

        return _wrapped_view

    if view_func:
        return decorator(view_func)
    return decorator


def role_required(capability, message="You do not have permission to perform this action."):
    """
    Gate a view on a capability check from accounts.roles, e.g.
    ``@role_required(can_create_conference)``. Must sit under
    custom_login_required.
    """

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            profile = get_profile(request)
            if not capability(profile.role):
                raise PermissionDenied(message)
            return view_func(request, *args, **kwargs)

        return _wrapped_view

    return decorator
