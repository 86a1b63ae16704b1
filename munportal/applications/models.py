from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from accounts.models import UserProfile
from conferences.models import Committee, Conference


class DelegateApplication(models.Model):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (REJECTED, "Rejected"),
    ]

    conference = models.ForeignKey(
        Conference, on_delete=models.CASCADE, related_name="applications"
    )
    applicant = models.ForeignKey(
        UserProfile, on_delete=models.CASCADE, related_name="applications"
    )

    full_name = models.CharField(max_length=120)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    motivation = models.TextField(blank=True)

    primary_committee = models.ForeignKey(
        Committee,
        on_delete=models.SET_NULL,
        related_name="primary_applications",
        null=True,
        blank=True,
    )
    secondary_committee = models.ForeignKey(
        Committee,
        on_delete=models.SET_NULL,
        related_name="secondary_applications",
        null=True,
        blank=True,
    )
    tertiary_committee = models.ForeignKey(
        Committee,
        on_delete=models.SET_NULL,
        related_name="tertiary_applications",
        null=True,
        blank=True,
    )

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING)

    # Set only by the auto-assignment run or a manual override.
    assigned_committee = models.ForeignKey(
        Committee,
        on_delete=models.SET_NULL,
        related_name="assigned_applications",
        null=True,
        blank=True,
    )
    assigned_country = models.CharField(max_length=100, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["conference", "applicant"],
                name="unique_application_per_conference",
            )
        ]

    def __str__(self):
        return f"{self.full_name} -> {self.conference}"

    @property
    def badge_code(self):
        return f"MUN-{self.conference_id}-{self.pk}"


class Registration(models.Model):
    """Committee-less sign-up kept from the first version of the site."""

    conference = models.CharField(max_length=200)
    full_name = models.CharField(max_length=120)
    school = models.CharField(max_length=200)
    email = models.EmailField()
    grade = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(8), MaxValueValidator(12)]
    )
    motivation = models.TextField(blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="registrations",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.full_name} ({self.conference})"
