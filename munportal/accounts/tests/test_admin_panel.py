from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse

from accounts import roles
from accounts.models import UserProfile


def _profile(username, role=roles.PARTICIPANT, full_name=""):
    from django.contrib.auth.models import User

    user = User.objects.create_user(username=username, email=username, password="Passw0rd1")
    profile = user.uprofile
    profile.role = role
    profile.full_name = full_name or username
    profile.save()
    return profile


class AdminPanelTests(TestCase):
    def setUp(self):
        self.founder = _profile("founder@munportal.org", roles.FOUNDER, "Founder")
        self.member = _profile("member@example.com", full_name="Member")

    def test_founder_sees_every_user(self):
        self.client.force_login(self.founder.user)
        response = self.client.get(reverse("accounts:admin_panel"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context["rows"]), 2)

    def test_filter_by_role(self):
        self.client.force_login(self.founder.user)
        response = self.client.get(reverse("accounts:admin_panel"), {"role": roles.FOUNDER})
        self.assertEqual([p for p, _ in response.context["rows"]], [self.founder])

    def test_other_roles_get_403(self):
        admin = _profile("admin@example.com", roles.ADMIN)
        self.client.force_login(admin.user)
        response = self.client.get(reverse("accounts:admin_panel"))
        self.assertEqual(response.status_code, 403)
        self.assertTemplateUsed(response, "portal/403.html")

    def test_founder_changes_role_and_region(self):
        self.client.force_login(self.founder.user)
        prefix = f"p{self.member.pk}"
        response = self.client.post(
            reverse("accounts:admin_update_profile", args=[self.member.pk]),
            {f"{prefix}-role": roles.DEPUTY, f"{prefix}-school_id": "24"},
        )
        self.assertRedirects(response, reverse("accounts:admin_panel"))
        self.member.refresh_from_db()
        self.assertEqual(self.member.role, roles.DEPUTY)
        self.assertEqual(self.member.school_id, 24)

    def test_store_failure_shows_generic_message(self):
        self.client.force_login(self.founder.user)
        prefix = f"p{self.member.pk}"
        with patch.object(UserProfile, "save", side_effect=DatabaseError("down")):
            response = self.client.post(
                reverse("accounts:admin_update_profile", args=[self.member.pk]),
                {f"{prefix}-role": roles.ADMIN, f"{prefix}-school_id": ""},
                follow=True,
            )
        messages = [str(m) for m in response.context["messages"]]
        self.assertIn("Error updating user. Please try again.", messages)
