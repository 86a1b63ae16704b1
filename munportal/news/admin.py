from django.contrib import admin

from .models import NewsArticle


@admin.register(NewsArticle)
class NewsArticleAdmin(admin.ModelAdmin):
    list_display = ("id", "title_ru", "author", "published", "created_at")
    list_filter = ("published",)
    search_fields = ("title_ru", "title_kk", "title_en")
