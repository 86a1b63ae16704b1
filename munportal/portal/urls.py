from django.urls import path

from . import views

app_name = "portal"
urlpatterns = [
    path("", views.index, name="index"),
    path("about/", views.about, name="about"),
    path("calendar/", views.calendar, name="calendar"),
    path("secretariat/", views.secretariat, name="secretariat"),
]
