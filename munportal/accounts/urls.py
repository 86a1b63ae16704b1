from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    # Auth
    path("login/", views.EmailLoginView.as_view(), name="login"),
    path("signup/", views.signup, name="signup"),
    path("logout/", views.logout_then_home, name="logout"),
    # Profile
    path("dashboard/", views.dashboard, name="dashboard"),
    path("profile/edit/", views.profile_edit, name="profile_edit"),
    path("profile/<int:user_id>/", views.profile_detail, name="profile_detail"),
    path("search/", views.search_users, name="search"),
    # Founder panel
    path("admin-panel/", views.admin_panel, name="admin_panel"),
    path(
        "admin-panel/<int:profile_id>/",
        views.admin_update_profile,
        name="admin_update_profile",
    ),
]
