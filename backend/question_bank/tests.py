from datetime import timedelta
from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from prep_api.exceptions import InvalidInput, NotFound
from prep_api.testing import make_question, make_subject, make_topic, make_user
from streaks.models import DailyActivity, Streak
from .models import Difficulty, QuestionAttempt, UserProgress
from .selection import apply_spaced_repetition, difficulty_order, is_due, topic_proficiency
from .services import AdaptiveQuestionSelector, QuestionService, build_filters
from .stores import QuestionFilters


def fake_attempt(question_id, topic_id, is_correct, attempted_at):
    return SimpleNamespace(
        question_id=question_id,
        question=SimpleNamespace(topic_id=topic_id),
        is_correct=is_correct,
        attempted_at=attempted_at,
    )


class ProficiencyTests(SimpleTestCase):
    def setUp(self):
        self.now = timezone.now()

    def test_ratio_per_topic(self):
        attempts = [
            fake_attempt(1, 10, True, self.now),
            fake_attempt(2, 10, False, self.now),
            fake_attempt(3, 20, True, self.now),
        ]
        self.assertEqual(topic_proficiency(attempts), {10: 0.5, 20: 1.0})

    def test_attempts_without_topic_are_ignored(self):
        attempts = [fake_attempt(1, None, True, self.now), fake_attempt(2, 10, False, self.now)]
        self.assertEqual(topic_proficiency(attempts), {10: 0.0})

    def test_empty_history(self):
        self.assertEqual(topic_proficiency([]), {})

    def test_every_ratio_is_a_fraction(self):
        attempts = [fake_attempt(i, i % 3, i % 2 == 0, self.now) for i in range(17)]
        for value in topic_proficiency(attempts).values():
            self.assertGreaterEqual(value, 0.0)
            self.assertLessEqual(value, 1.0)


class DifficultyOrderTests(SimpleTestCase):
    def test_no_history_is_easy_first(self):
        self.assertEqual(difficulty_order({}), "asc")

    def test_low_proficiency_is_easy_first(self):
        self.assertEqual(difficulty_order({1: 0.2, 2: 0.3}), "asc")

    def test_high_proficiency_is_hard_first(self):
        self.assertEqual(difficulty_order({1: 0.9, 2: 1.0}), "desc")

    def test_middle_band_is_easy_first(self):
        self.assertEqual(difficulty_order({1: 0.6}), "asc")
        self.assertEqual(difficulty_order({1: 0.8}), "asc")


class SpacedRepetitionTests(SimpleTestCase):
    def setUp(self):
        self.now = timezone.now()

    def test_never_attempted_is_due(self):
        self.assertTrue(is_due([], self.now))

    def test_one_correct_answer_a_day_ago_is_not_due(self):
        history = [fake_attempt(1, 10, True, self.now - timedelta(days=1))]
        self.assertFalse(is_due(history, self.now))

    def test_one_correct_answer_two_days_ago_is_due(self):
        history = [fake_attempt(1, 10, True, self.now - timedelta(days=2))]
        self.assertTrue(is_due(history, self.now))
        history = [fake_attempt(1, 10, True, self.now - timedelta(days=5))]
        self.assertTrue(is_due(history, self.now))

    def test_two_correct_answers_need_four_days(self):
        history = [
            fake_attempt(1, 10, True, self.now - timedelta(days=3)),
            fake_attempt(1, 10, True, self.now - timedelta(days=9)),
        ]
        self.assertFalse(is_due(history, self.now))
        history[0].attempted_at = self.now - timedelta(days=4)
        self.assertTrue(is_due(history, self.now))

    def test_wrong_answer_comes_back_after_a_day(self):
        history = [fake_attempt(1, 10, False, self.now - timedelta(hours=23))]
        self.assertFalse(is_due(history, self.now))
        history = [fake_attempt(1, 10, False, self.now - timedelta(days=1))]
        self.assertTrue(is_due(history, self.now))

    def test_filter_keeps_order_and_drops_recent(self):
        questions = [SimpleNamespace(id=1), SimpleNamespace(id=2), SimpleNamespace(id=3)]
        recent = [fake_attempt(2, 10, True, self.now - timedelta(hours=2))]
        kept = apply_spaced_repetition(questions, recent, self.now)
        self.assertEqual([q.id for q in kept], [1, 3])


class FakeAttemptStore:
    def __init__(self, attempts):
        self.attempts = attempts
        self.limits = []

    def find_recent_attempts(self, user, limit):
        self.limits.append(limit)
        return self.attempts[:limit]


class FakeQuestionStore:
    def __init__(self, questions):
        self.questions = questions
        self.calls = []

    def find_candidates(self, filters, descending, limit):
        self.calls.append({"descending": descending, "limit": limit})
        return self.questions[:limit]


class AdaptiveSelectorWithFakesTests(SimpleTestCase):
    def setUp(self):
        self.now = timezone.now()
        self.user = SimpleNamespace(pk=1)

    def test_never_more_than_count_and_never_excluded(self):
        questions = [SimpleNamespace(id=i) for i in range(1, 40)]
        selector = AdaptiveQuestionSelector(FakeAttemptStore([]), FakeQuestionStore(questions), window=50)
        for count in (1, 3, 10):
            picked = selector.select(self.user, QuestionFilters(exclude_ids=[1, 2, 5]), count, now=self.now)
            self.assertLessEqual(len(picked), count)
            self.assertFalse({1, 2, 5} & {q.id for q in picked})

    def test_fetches_twice_the_count(self):
        store = FakeQuestionStore([SimpleNamespace(id=i) for i in range(1, 10)])
        AdaptiveQuestionSelector(FakeAttemptStore([]), store, window=50).select(
            self.user, QuestionFilters(), 4, now=self.now
        )
        self.assertEqual(store.calls[0]["limit"], 8)

    def test_strong_history_asks_for_hard_first(self):
        attempts = [fake_attempt(100 + i, 7, True, self.now - timedelta(days=30)) for i in range(5)]
        store = FakeQuestionStore([SimpleNamespace(id=1)])
        AdaptiveQuestionSelector(FakeAttemptStore(attempts), store, window=50).select(
            self.user, QuestionFilters(), 1, now=self.now
        )
        self.assertTrue(store.calls[0]["descending"])

    def test_window_limits_history(self):
        attempts_store = FakeAttemptStore([])
        AdaptiveQuestionSelector(attempts_store, FakeQuestionStore([]), window=12).select(
            self.user, QuestionFilters(), 5, now=self.now
        )
        self.assertEqual(attempts_store.limits, [12])

    def test_count_out_of_range(self):
        selector = AdaptiveQuestionSelector(FakeAttemptStore([]), FakeQuestionStore([]), window=50)
        with self.assertRaises(InvalidInput):
            selector.select(self.user, QuestionFilters(), 0)
        with self.assertRaises(InvalidInput):
            selector.select(self.user, QuestionFilters(), 51)

    def test_empty_pool_returns_empty_list(self):
        selector = AdaptiveQuestionSelector(FakeAttemptStore([]), FakeQuestionStore([]), window=50)
        self.assertEqual(selector.select(self.user, QuestionFilters(), 5, now=self.now), [])


class AdaptiveSelectorTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.math = make_subject("Mathematics")
        self.algebra = make_topic(self.math, "Algebra")
        self.hard = make_question(self.math, self.algebra, difficulty=Difficulty.HARD)
        self.easy = make_question(self.math, self.algebra, difficulty=Difficulty.EASY)
        self.medium = make_question(self.math, self.algebra, difficulty=Difficulty.MEDIUM)

    def test_new_user_gets_easy_first(self):
        picked = AdaptiveQuestionSelector().select(self.user, build_filters(subject="mathematics"), 3)
        self.assertEqual([q.id for q in picked], [self.easy.id, self.medium.id, self.hard.id])

    def test_recently_answered_question_is_skipped(self):
        QuestionService().submit_attempt(self.user, self.easy.id, "A")
        picked = AdaptiveQuestionSelector().select(self.user, build_filters(subject="Mathematics"), 3)
        self.assertNotIn(self.easy.id, [q.id for q in picked])

    def test_archived_questions_are_never_served(self):
        self.easy.status = "ARCHIVED"
        self.easy.save()
        picked = AdaptiveQuestionSelector().select(self.user, build_filters(), 10)
        self.assertNotIn(self.easy.id, [q.id for q in picked])

    def test_unknown_filter_names(self):
        with self.assertRaises(InvalidInput):
            build_filters(subject="Astrology")
        with self.assertRaises(InvalidInput):
            build_filters(subject="Mathematics", topic="Poetry")


class SubmitAttemptTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.math = make_subject()
        self.algebra = make_topic(self.math)
        self.question = make_question(self.math, self.algebra)

    def test_correctness_is_recomputed(self):
        service = QuestionService()
        right = service.submit_attempt(self.user, self.question.id, "A", time_taken=12)
        wrong = service.submit_attempt(self.user, self.question.id, "B", time_taken=8)
        self.assertTrue(right.is_correct)
        self.assertFalse(wrong.is_correct)

    def test_progress_activity_and_streak_are_recorded(self):
        QuestionService().submit_attempt(self.user, self.question.id, "A", time_taken=12)
        progress = UserProgress.objects.get(user=self.user, topic=self.algebra)
        self.assertEqual(progress.mastery_score, 1)
        self.assertEqual(progress.total_questions, 1)
        self.assertIsNotNone(progress.last_reviewed)
        activity = DailyActivity.objects.get(user=self.user)
        self.assertEqual(activity.questions_answered, 1)
        self.assertEqual(Streak.objects.get(user=self.user).count, 1)

    def test_wrong_answer_does_not_raise_mastery(self):
        QuestionService().submit_attempt(self.user, self.question.id, "C")
        self.assertEqual(UserProgress.objects.get(user=self.user).mastery_score, 0)

    def test_question_without_topic_skips_progress(self):
        loose = make_question(self.math, None)
        QuestionService().submit_attempt(self.user, loose.id, "A")
        self.assertFalse(UserProgress.objects.exists())
        self.assertEqual(QuestionAttempt.objects.count(), 1)

    def test_invalid_option(self):
        with self.assertRaises(InvalidInput):
            QuestionService().submit_attempt(self.user, self.question.id, "Z")
        self.assertFalse(QuestionAttempt.objects.exists())

    def test_missing_question(self):
        with self.assertRaises(NotFound):
            QuestionService().submit_attempt(self.user, 999999, "A")


class DiagnosticTests(TestCase):
    def test_unknown_subjects_are_omitted(self):
        math = make_subject("Mathematics")
        for i in range(7):
            make_question(math, None, is_diagnostic=True, order=i)
        groups = QuestionService().diagnostic_questions(["Mathematics", "Alchemy"])
        self.assertEqual([g["subject"] for g in groups], ["Mathematics"])
        self.assertEqual(len(groups[0]["questions"]), 5)


class QuestionApiTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.client = APIClient()
        self.client.force_authenticate(self.user)
        self.math = make_subject()
        self.question = make_question(self.math, make_topic(self.math))

    def test_adaptive_hides_answers(self):
        res = self.client.get("/api/questions/adaptive/", {"count": 5})
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["ok"])
        self.assertNotIn("correct_option_id", res.data["questions"][0])

    def test_attempt_reveals_answer(self):
        res = self.client.post(
            "/api/questions/attempts/",
            {"question_id": self.question.id, "selected_option": "B"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["attempt"]["is_correct"])
        self.assertEqual(res.data["question"]["correct_option_id"], "A")

    def test_error_shapes(self):
        res = self.client.get("/api/questions/adaptive/", {"count": 0})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["ok"], False)
        self.assertIn("count", res.data["error"])

        res = self.client.get("/api/questions/424242/")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data, {"ok": False, "error": "Question not found"})

    def test_requires_login(self):
        res = APIClient().get("/api/subjects/")
        self.assertEqual(res.status_code, 401)
