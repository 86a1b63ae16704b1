from django.contrib import admin

from .models import Committee, Conference


class CommitteeInline(admin.TabularInline):
    model = Committee
    extra = 0


@admin.register(Conference)
class ConferenceAdmin(admin.ModelAdmin):
    list_display = ("id", "name_ru", "status", "registration_open", "creator", "start_date")
    list_filter = ("status", "registration_open")
    search_fields = ("name_ru", "name_kk", "name_en", "location")
    inlines = [CommitteeInline]


@admin.register(Committee)
class CommitteeAdmin(admin.ModelAdmin):
    list_display = ("id", "conference", "name", "capacity", "priority")
    list_filter = ("conference",)
    search_fields = ("name", "conference__name_ru")
