from django.db import models

from accounts.models import UserProfile
from portal.i18n import MultilingualMixin


class NewsArticle(MultilingualMixin, models.Model):
    title_ru = models.CharField(max_length=255)
    title_kk = models.CharField(max_length=255, blank=True)
    title_en = models.CharField(max_length=255, blank=True)
    content_ru = models.TextField()
    content_kk = models.TextField(blank=True)
    content_en = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    published = models.BooleanField(default=True)

    author = models.ForeignKey(
        UserProfile, on_delete=models.SET_NULL, related_name="writes", null=True, blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title_ru
