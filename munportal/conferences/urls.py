from django.urls import path

from . import views

app_name = "conferences"
urlpatterns = [
    path("", views.conference_list, name="conference_list"),
    path("create/", views.create_conference, name="create_conference"),
    path("approvals/", views.approvals, name="approvals"),
    path("<int:conference_id>/", views.conference_detail, name="conference_detail"),
    path("<int:conference_id>/edit/", views.edit_conference, name="edit_conference"),
    path("<int:conference_id>/delete/", views.delete_conference, name="delete_conference"),
    path(
        "<int:conference_id>/registration/toggle/",
        views.toggle_registration,
        name="toggle_registration",
    ),
    path("<int:conference_id>/approve/", views.approve_conference, name="approve_conference"),
    path("<int:conference_id>/reject/", views.reject_conference, name="reject_conference"),
]
