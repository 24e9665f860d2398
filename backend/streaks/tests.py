from datetime import date, timedelta

from django.test import TestCase
from rest_framework.test import APIClient

from prep_api.testing import make_user
from .models import DailyActivity, Streak
from .utils import current_streak, record_activity, record_outcome


class RecordOutcomeTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.today = date(2024, 3, 14)

    def test_first_activity_starts_at_one(self):
        streak = record_outcome(self.user, True, today=self.today)
        self.assertEqual(streak.count, 1)
        self.assertEqual(streak.last_active, self.today)

    def test_yesterday_increments_by_one(self):
        Streak.objects.create(user=self.user, count=4, last_active=self.today - timedelta(days=1))
        streak = record_outcome(self.user, False, today=self.today)
        self.assertEqual(streak.count, 5)
        self.assertEqual(streak.last_active, self.today)

    def test_three_days_ago_resets(self):
        Streak.objects.create(user=self.user, count=9, last_active=self.today - timedelta(days=3))
        streak = record_outcome(self.user, True, today=self.today)
        self.assertEqual(streak.count, 1)

    def test_same_day_is_a_no_op(self):
        Streak.objects.create(user=self.user, count=2, last_active=self.today)
        record_outcome(self.user, True, today=self.today)
        record_outcome(self.user, False, today=self.today)
        self.assertEqual(Streak.objects.get(user=self.user).count, 2)

    def test_consecutive_days(self):
        for offset in range(5):
            streak = record_outcome(self.user, True, today=self.today + timedelta(days=offset))
        self.assertEqual(streak.count, 5)
        self.assertEqual(Streak.objects.filter(user=self.user).count(), 1)


class CurrentStreakTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.today = date(2024, 3, 14)

    def test_reported_through_yesterday_only(self):
        self.assertEqual(current_streak(self.user, self.today), 0)
        Streak.objects.create(user=self.user, count=6, last_active=self.today - timedelta(days=1))
        self.assertEqual(current_streak(self.user, self.today), 6)
        self.assertEqual(current_streak(self.user, self.today + timedelta(days=1)), 0)


class DailyActivityTests(TestCase):
    def test_counters_accumulate(self):
        user = make_user()
        today = date(2024, 3, 14)
        record_activity(user, True, 30, today=today)
        activity = record_activity(user, False, 15, today=today)
        self.assertEqual(activity.questions_answered, 2)
        self.assertEqual(activity.correct_answers, 1)
        self.assertEqual(activity.time_spent, 45)
        self.assertEqual(DailyActivity.objects.count(), 1)


class StreakStatusApiTests(TestCase):
    def test_status_for_new_user(self):
        client = APIClient()
        client.force_authenticate(make_user())
        res = client.get("/api/streak/status/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["streak_count"], 0)
        self.assertIsNone(res.data["last_active"])
        self.assertFalse(res.data["today"]["active"])
        self.assertGreaterEqual(res.data["time_left_seconds"], 0)
