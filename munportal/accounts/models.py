from django.contrib.auth.models import User
from django.db import models

from .roles import (
    PARTICIPANT,
    ROLE_CHOICES,
    SECRETARY_TYPE_CHOICES,
    region_name,
    role_label,
)


class UserProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="uprofile")
    full_name = models.CharField(max_length=120, blank=True)
    bio = models.TextField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    photo = models.ImageField(upload_to="profile_photos/", blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=PARTICIPANT)
    school_id = models.PositiveIntegerField(
        null=True, blank=True, help_text="Region / school the profile is bound to."
    )
    secretary_type = models.CharField(
        max_length=10, choices=SECRETARY_TYPE_CHOICES, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["full_name", "id"]

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    @property
    def display_name(self):
        return self.full_name or self.user.username

    @property
    def email(self):
        return self.user.email

    @property
    def photo_url(self):
        return self.photo.url if self.photo else ""

    def role_label(self, language="ru"):
        return role_label(self.role, language)

    def region_name(self, language="ru"):
        return region_name(self.school_id, language)
