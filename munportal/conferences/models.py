from django.core.validators import MinValueValidator
from django.db import models

from accounts.models import UserProfile
from portal.i18n import MultilingualMixin


class ConferenceQuerySet(models.QuerySet):
    def published(self):
        return self.filter(status=Conference.PUBLISHED)

    def pending(self):
        return self.filter(status=Conference.PENDING)


class Conference(MultilingualMixin, models.Model):
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (PUBLISHED, "Published"),
        (REJECTED, "Rejected"),
    ]

    creator = models.ForeignKey(
        UserProfile, on_delete=models.SET_NULL, related_name="creates", null=True
    )

    name_ru = models.CharField(max_length=200)
    name_kk = models.CharField(max_length=200, blank=True)
    name_en = models.CharField(max_length=200, blank=True)
    date_ru = models.CharField(max_length=100, blank=True)
    date_kk = models.CharField(max_length=100, blank=True)
    date_en = models.CharField(max_length=100, blank=True)
    description_ru = models.TextField(blank=True)
    description_kk = models.TextField(blank=True)
    description_en = models.TextField(blank=True)
    conditions_ru = models.TextField(blank=True)
    conditions_kk = models.TextField(blank=True)
    conditions_en = models.TextField(blank=True)

    start_date = models.DateField(null=True, blank=True)
    time = models.TimeField(null=True, blank=True)
    location = models.CharField(max_length=255)
    city = models.PositiveIntegerField(null=True, blank=True, help_text="Region id.")
    organizer_contact = models.CharField(max_length=255, blank=True)

    registration_fee_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    registration_fee_currency = models.CharField(max_length=3, default="KZT")
    languages = models.JSONField(default=list, blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING)
    registration_open = models.BooleanField(default=True)

    approved_by = models.ForeignKey(
        UserProfile,
        on_delete=models.SET_NULL,
        related_name="approves",
        null=True,
        blank=True,
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ConferenceQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name_ru

    @property
    def is_published(self):
        return self.status == self.PUBLISHED

    @property
    def accepts_applications(self):
        return self.is_published and self.registration_open

    @property
    def start_date_str(self):
        """ISO-8601 string for Algolia / search."""
        return self.start_date.isoformat() if self.start_date else None


class Committee(models.Model):
    conference = models.ForeignKey(
        Conference, on_delete=models.CASCADE, related_name="committees"
    )
    name = models.CharField(max_length=200)
    topic = models.CharField(max_length=255, blank=True)
    capacity = models.PositiveIntegerField(default=15, validators=[MinValueValidator(1)])
    priority = models.PositiveIntegerField(default=1)
    countries = models.JSONField(default=list, blank=True)
    languages = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["priority", "id"]

    def __str__(self):
        return f"{self.conference.name_ru} - {self.name}"
