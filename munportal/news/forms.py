from django import forms

from .models import NewsArticle


class NewsArticleForm(forms.ModelForm):
    class Meta:
        model = NewsArticle
        fields = [
            "title_ru",
            "title_kk",
            "title_en",
            "content_ru",
            "content_kk",
            "content_en",
            "image_url",
            "published",
        ]
        widgets = {
            "content_ru": forms.Textarea(attrs={"rows": 6, "class": "form-control"}),
            "content_kk": forms.Textarea(attrs={"rows": 6, "class": "form-control"}),
            "content_en": forms.Textarea(attrs={"rows": 6, "class": "form-control"}),
        }
