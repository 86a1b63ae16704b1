from django.urls import path

from . import views

app_name = "news"
urlpatterns = [
    path("", views.news_list, name="news_list"),
    path("manage/", views.manage_news, name="manage_news"),
    path("create/", views.create_news, name="create_news"),
    path("<int:article_id>/", views.news_detail, name="news_detail"),
    path("<int:article_id>/edit/", views.edit_news, name="edit_news"),
    path("<int:article_id>/delete/", views.delete_news, name="delete_news"),
]
