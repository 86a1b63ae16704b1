from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "user", "role", "school_id", "created_at")
    list_filter = ("role", "school_id")
    search_fields = ("full_name", "user__email", "phone")
