from django.test import TestCase
from rest_framework.test import APIClient

from prep_api.testing import make_subject, make_user
from .models import Profile


class ProfileTests(TestCase):
    def setUp(self):
        self.user = make_user(email="ada@example.com", username="ada")
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def test_profile_created_with_user(self):
        self.assertTrue(Profile.objects.filter(user=self.user).exists())
        res = self.client.get("/api/auth/me/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["user"]["email"], "ada@example.com")
        self.assertEqual(res.data["selected_subjects"], [])

    def test_subject_selection(self):
        make_subject("English")
        make_subject("Physics")
        res = self.client.put("/api/auth/subjects/", {"subjects": ["physics", "English"]}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["profile"]["selected_subjects"], ["English", "Physics"])

    def test_unknown_subject_changes_nothing(self):
        make_subject("English")
        res = self.client.put("/api/auth/subjects/", {"subjects": ["English", "Latin"]}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data, {"ok": False, "error": "Unknown subject: Latin"})
        self.assertEqual(self.user.profile.selected_subjects.count(), 0)

    def test_goal_score_bounds(self):
        res = self.client.patch("/api/auth/goal-score/", {"goal_score": 320}, format="json")
        self.assertEqual(res.data["goal_score"], 320)
        res = self.client.patch("/api/auth/goal-score/", {"goal_score": 401}, format="json")
        self.assertEqual(res.status_code, 400)
        res = self.client.patch("/api/auth/goal-score/", {"goal_score": "abc"}, format="json")
        self.assertEqual(res.status_code, 400)


class TokenTests(TestCase):
    def setUp(self):
        make_user(email="ben@example.com", username="ben")

    def test_login_with_email_or_username(self):
        client = APIClient()
        res = client.post("/api/auth/token/", {"email": "ben@example.com", "password": "pass1234"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertIn("access", res.data)

        res = client.post("/api/auth/token/", {"username": "ben", "password": "pass1234"}, format="json")
        self.assertEqual(res.status_code, 200)

        client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        self.assertEqual(client.get("/api/auth/me/").status_code, 200)

    def test_bad_password(self):
        res = APIClient().post("/api/auth/token/", {"username": "ben", "password": "nope"}, format="json")
        self.assertEqual(res.status_code, 401)
        self.assertFalse(res.data["ok"])
