from django import template
from django.utils.translation import get_language

from accounts import roles
from accounts.models import UserProfile

register = template.Library()


def _language(context):
    request = context.get("request")
    lang = getattr(request, "LANGUAGE_CODE", None) or get_language() or "ru"
    return lang.split("-")[0]


@register.simple_tag(takes_context=True)
def get_profile(context):
    """
    Usage: {% get_profile as prof %}
    Returns the UserProfile for the logged-in user or None.
    """
    request = context.get("request")
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    try:
        return UserProfile.objects.get(user=user)
    except UserProfile.DoesNotExist:
        return None


@register.simple_tag(takes_context=True)
def localized(context, obj, field):
    """
    Usage: {% localized conference "name" %}
    Picks name_ru / name_kk / name_en for the request language.
    """
    if obj is None:
        return ""
    return obj.localized(field, _language(context))


@register.simple_tag(takes_context=True)
def role_label(context, role):
    return roles.role_label(role, _language(context))


@register.simple_tag(takes_context=True)
def region_name(context, school_id):
    return roles.region_name(school_id, _language(context))
