import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render

from accounts import roles
from accounts.decorators import custom_login_required, get_profile, role_required

from .forms import NewsArticleForm
from .models import NewsArticle

logger = logging.getLogger(__name__)

FOUNDER_ONLY = "Only the founder can create or change news."


def news_list(request):
    articles = NewsArticle.objects.filter(published=True).select_related("author")
    return render(request, "news/news_list.html", {"articles": articles})


def news_detail(request, article_id):
    article = get_object_or_404(NewsArticle, id=article_id)
    if not article.published:
        user = request.user
        if not (user.is_authenticated and roles.can_manage_news(get_profile(request).role)):
            raise Http404("No such article.")
    return render(request, "news/news_detail.html", {"article": article})


@custom_login_required
@role_required(roles.can_manage_news, "Only the founder or a general secretary can manage news.")
def manage_news(request):
    articles = NewsArticle.objects.select_related("author")
    return render(
        request,
        "news/manage_news.html",
        {"articles": articles, "can_edit": roles.can_create_news(get_profile(request).role)},
    )


@custom_login_required
@role_required(roles.can_create_news, FOUNDER_ONLY)
def create_news(request):
    if request.method == "POST":
        form = NewsArticleForm(request.POST)
        if form.is_valid():
            article = form.save(commit=False)
            article.author = get_profile(request)
            try:
                article.save()
            except DatabaseError:
                logger.exception("Could not save news article")
                messages.error(request, "Failed to create news. Please try again.")
            else:
                logger.info("News article %s created", article.pk)
                messages.success(request, "News created.")
                return redirect("news:news_list")
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        form = NewsArticleForm()
    return render(request, "news/news_form.html", {"form": form})


@custom_login_required
@role_required(roles.can_create_news, FOUNDER_ONLY)
def edit_news(request, article_id):
    article = get_object_or_404(NewsArticle, id=article_id)
    if request.method == "POST":
        form = NewsArticleForm(request.POST, instance=article)
        if form.is_valid():
            form.save()
            messages.success(request, "News updated.")
            return redirect("news:news_detail", article_id=article.id)
        messages.error(request, "Please fix the errors below.")
    else:
        form = NewsArticleForm(instance=article)
    return render(request, "news/news_form.html", {"form": form, "article": article})


@custom_login_required
@role_required(roles.can_create_news, FOUNDER_ONLY)
def delete_news(request, article_id):
    article = get_object_or_404(NewsArticle, id=article_id)
    if request.method == "POST":
        article.delete()
        logger.info("News article %s deleted", article_id)
        messages.success(request, "News deleted.")
        return redirect("news:manage_news")
    return render(request, "news/delete_news.html", {"article": article})
