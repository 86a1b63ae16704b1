# accounts/signals.py
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import UserProfile


def default_full_name(user):
    if user.first_name or user.last_name:
        return f"{user.first_name} {user.last_name}".strip()
    return (user.email or user.username).split("@")[0] or "User"


@receiver(post_save, sender=User)
def ensure_user_profile(sender, instance, created, **kwargs):
    """
    Always make sure a UserProfile exists. New profiles start as participants;
    elevated roles are only granted by the signup verification code or by the
    founder's admin panel.
    """
    UserProfile.objects.get_or_create(
        user=instance, defaults={"full_name": default_full_name(instance)}
    )
