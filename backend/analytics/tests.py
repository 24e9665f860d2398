from datetime import date

from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from prep_api.testing import make_question, make_subject, make_topic, make_user
from question_bank.services import QuestionService
from .services import AnalyticsService, StudyPlanService, rank_weak_topics


def answer(user, question, correct, n=1):
    for _ in range(n):
        QuestionService().submit_attempt(user, question.id, "A" if correct else "B", time_taken=10)


class RankWeakTopicsTests(SimpleTestCase):
    def test_minimum_sample_and_order(self):
        rows = [
            {"topic": "a", "total": 2, "accuracy": 0.0},
            {"topic": "b", "total": 3, "accuracy": 50.0},
            {"topic": "c", "total": 10, "accuracy": 50.0},
            {"topic": "d", "total": 4, "accuracy": 25.0},
            {"topic": "e", "total": 9, "accuracy": 90.0},
        ]
        ranked = rank_weak_topics(rows, limit=3)
        self.assertEqual([r["topic"] for r in ranked], ["d", "c", "b"])

    def test_small_topics_never_appear(self):
        rows = [{"topic": str(i), "total": i % 4, "accuracy": float(i)} for i in range(20)]
        for r in rank_weak_topics(rows, limit=20):
            self.assertGreaterEqual(r["total"], 3)


class WeakTopicsTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.math = make_subject("Mathematics")
        self.algebra = make_topic(self.math, "Algebra")
        self.geometry = make_topic(self.math, "Geometry")
        self.calculus = make_topic(self.math, "Calculus")

    def test_ranking(self):
        answer(self.user, make_question(self.math, self.algebra), correct=True, n=3)
        answer(self.user, make_question(self.math, self.algebra), correct=False, n=1)
        answer(self.user, make_question(self.math, self.geometry), correct=False, n=3)
        answer(self.user, make_question(self.math, self.calculus), correct=False, n=2)

        ranked = AnalyticsService().weak_topics(self.user)
        self.assertEqual([r["topic"] for r in ranked], ["Geometry", "Algebra"])
        self.assertEqual(ranked[0]["accuracy"], 0.0)
        self.assertEqual(ranked[1]["accuracy"], 75.0)
        self.assertEqual(ranked[1]["subject"], "Mathematics")

    def test_other_users_do_not_leak(self):
        other = make_user()
        answer(other, make_question(self.math, self.algebra), correct=False, n=5)
        self.assertEqual(AnalyticsService().weak_topics(self.user), [])


class OverviewTests(TestCase):
    def test_overall_and_subjects(self):
        user = make_user()
        math = make_subject("Mathematics")
        english = make_subject("English")
        answer(user, make_question(math, None), correct=True, n=2)
        answer(user, make_question(english, None), correct=False, n=1)

        data = AnalyticsService().overview(user)
        self.assertEqual(data["overall"]["total_questions"], 3)
        self.assertEqual(data["overall"]["correct_answers"], 2)
        self.assertEqual(data["overall"]["accuracy"], 67)
        self.assertEqual(data["overall"]["current_streak"], 1)
        subjects = {row["subject"]: row for row in data["subject_performance"]}
        self.assertEqual(subjects["Mathematics"]["accuracy"], 100)
        self.assertEqual(subjects["English"]["correct"], 0)
        self.assertEqual(len(data["daily_trends"]), 1)

    def test_subject_breakdown_skips_unknown(self):
        user = make_user()
        make_subject("Physics")
        rows = AnalyticsService().subject_breakdown(user, ["Physics", "Astrology"])
        self.assertEqual(rows, [{"subject": "Physics", "total": 0, "correct": 0, "accuracy": 0, "avg_time": 0}])


class StudyPlanTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.subjects = [make_subject(n) for n in ("Biology", "Chemistry", "Physics")]
        self.user.profile.selected_subjects.set(self.subjects)

    def test_sunday_plan(self):
        plan = StudyPlanService().daily_plan(self.user, date(2024, 3, 17))
        types = [t["type"] for t in plan["tasks"]]
        self.assertEqual(types, ["practice", "flashcards", "practice", "mock_exam"])
        # Sunday rotates to the first subject.
        self.assertEqual(plan["tasks"][2]["subject"], "Biology")
        self.assertEqual(plan["total_estimated_time"], 15 + 20 + 30 + 120)

    def test_weekday_plan_with_weak_topic(self):
        topic = make_topic(self.subjects[1], "Moles")
        answer(self.user, make_question(self.subjects[1], topic), correct=False, n=3)
        plan = StudyPlanService().daily_plan(self.user, date(2024, 3, 19))
        titles = [t["title"] for t in plan["tasks"]]
        self.assertIn("Focus on Moles", titles)
        self.assertNotIn("Weekly Mock Exam", titles)
        # Tuesday is day 2.
        self.assertEqual(plan["tasks"][-1]["subject"], "Physics")
        self.assertEqual(plan["total_estimated_time"], 15 + 25 + 20 + 30)


class AnalyticsApiTests(TestCase):
    def test_endpoints(self):
        client = APIClient()
        client.force_authenticate(make_user())
        self.assertEqual(client.get("/api/analytics/overview/").status_code, 200)
        self.assertEqual(client.get("/api/analytics/weak-topics/").data["weak_topics"], [])
        self.assertEqual(client.get("/api/analytics/subjects/").status_code, 400)
        self.assertTrue(client.get("/api/study-plan/today/").data["ok"])
