from django.urls import path

from . import views

app_name = "applications"
urlpatterns = [
    path("inbox/", views.inbox, name="inbox"),
    path("register/", views.register, name="register"),
    path("conference/<int:conference_id>/apply/", views.apply, name="apply"),
    path("conference/<int:conference_id>/assign/", views.auto_assign, name="auto_assign"),
    path("conference/<int:conference_id>/badges/", views.badges, name="badges"),
    path("<int:application_id>/status/", views.update_status, name="update_status"),
    path("<int:application_id>/placement/", views.override_assignment, name="override_assignment"),
]
