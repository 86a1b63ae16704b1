# accounts/context_processors.py
from . import roles


def current_profile(request):
    """
    Injects the logged-in user's profile and what it may do into every
    template. These flags only decide which controls are shown; the views
    check permissions again.
    """
    user = getattr(request, "user", None)
    profile = None
    if user is not None and user.is_authenticated:
        profile = getattr(user, "uprofile", None)

    role = getattr(profile, "role", None)
    return {
        "current_profile": profile,
        "auth_role": role,
        "perms_ui": {
            "create_conference": roles.can_create_conference(role),
            "approve_conference": roles.can_approve_conference(role),
            "create_news": roles.can_create_news(role),
            "manage_news": roles.can_manage_news(role),
            "administer_users": roles.can_administer_users(role),
            "open_inbox": roles.can_open_inbox(role),
        },
    }
