from django.contrib import admin

from .models import DelegateApplication, Registration


@admin.register(DelegateApplication)
class DelegateApplicationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "full_name",
        "conference",
        "status",
        "assigned_committee",
        "assigned_country",
        "created_at",
    )
    list_filter = ("status", "conference")
    search_fields = ("full_name", "email")


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "conference", "school", "grade", "created_at")
    search_fields = ("full_name", "email", "school", "conference")
