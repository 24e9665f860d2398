from datetime import timedelta

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from prep_api.exceptions import InvalidInput, NotFound
from prep_api.testing import make_subject, make_topic, make_user
from .models import Flashcard, FlashcardReview
from .scheduling import MIN_EASE, next_schedule
from .services import FlashcardService


class SchedulerTests(SimpleTestCase):
    def test_transition_table(self):
        cases = [
            ((1, 2.5, "again"), (1, 2.3)),
            ((1, 2.5, "hard"), (1, 2.35)),
            ((1, 2.5, "good"), (3, 2.5)),
            ((1, 2.5, "easy"), (3, 2.65)),
            ((6, 2.5, "hard"), (7, 2.35)),
            ((6, 2.5, "good"), (15, 2.5)),
            ((10, 2.0, "easy"), (26, 2.15)),
            ((30, 1.4, "again"), (1, 1.3)),
        ]
        for (interval, ease, response), expected in cases:
            with self.subTest(response=response, interval=interval, ease=ease):
                self.assertEqual(next_schedule(interval, ease, response), expected)

    def test_ease_and_interval_floors_hold_over_long_sequences(self):
        interval, ease = 1, 2.5
        for response in ["again", "hard"] * 20 + ["good", "easy", "again", "hard"] * 10:
            interval, ease = next_schedule(interval, ease, response)
            self.assertGreaterEqual(ease, MIN_EASE)
            self.assertGreaterEqual(interval, 1)

    def test_unknown_response(self):
        with self.assertRaises(ValueError):
            next_schedule(1, 2.5, "maybe")


class ReviewTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.subject = make_subject("Biology")
        self.card = Flashcard.objects.create(subject=self.subject, prompt="Cell powerhouse?", answer="Mitochondria")
        self.now = timezone.now()

    def test_first_review_starts_from_defaults(self):
        review = FlashcardService().review(self.user, self.card.id, "good", 1500, now=self.now)
        self.assertEqual(review.interval, 3)
        self.assertEqual(review.ease_factor, 2.5)
        self.assertTrue(review.recall_success)
        self.assertEqual(review.next_review, self.now + timedelta(days=3))

    def test_next_review_builds_on_latest_row(self):
        service = FlashcardService()
        service.review(self.user, self.card.id, "good", now=self.now)
        review = service.review(self.user, self.card.id, "easy", now=self.now + timedelta(days=3))
        self.assertEqual(review.interval, 10)
        self.assertEqual(review.ease_factor, 2.65)
        self.assertEqual(FlashcardReview.objects.filter(user=self.user).count(), 2)

    def test_again_is_a_failed_recall(self):
        review = FlashcardService().review(self.user, self.card.id, "AGAIN", now=self.now)
        self.assertFalse(review.recall_success)
        self.assertEqual(review.interval, 1)

    def test_bad_input(self):
        with self.assertRaises(InvalidInput):
            FlashcardService().review(self.user, self.card.id, "perfect")
        with self.assertRaises(NotFound):
            FlashcardService().review(self.user, 987654, "good")

    def test_concurrent_reviews_either_order_is_accepted(self):
        # Two reviews landing together: whichever committed last decides the schedule.
        service = FlashcardService()
        service.review(self.user, self.card.id, "good", now=self.now)
        service.review(self.user, self.card.id, "again", now=self.now)
        latest = service.reviews.latest_review(self.user, self.card)
        self.assertIn((latest.response, latest.interval), {("good", 3), ("again", 1)})


class DueSelectorTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.bio = make_subject("Biology")
        self.chem = make_subject("Chemistry")
        self.user.profile.selected_subjects.set([self.bio])
        self.now = timezone.now()
        self.cards = [
            Flashcard.objects.create(subject=self.bio, prompt=f"p{i}", answer=f"a{i}") for i in range(4)
        ]
        Flashcard.objects.create(subject=self.chem, prompt="other", answer="subject")

    def _review(self, card, response, created_at, next_review, ease=2.5):
        return FlashcardReview.objects.create(
            user=self.user,
            flashcard=card,
            response=response,
            recall_success=response in ("good", "easy"),
            interval=1,
            ease_factor=ease,
            next_review=next_review,
            created_at=created_at,
        )

    def test_due_ordering_and_stats(self):
        new_card, overdue, future, mastered = self.cards
        self._review(overdue, "hard", self.now - timedelta(days=5), self.now - timedelta(days=1))
        self._review(future, "good", self.now - timedelta(days=1), self.now + timedelta(days=2))
        self._review(mastered, "easy", self.now - timedelta(days=2), self.now + timedelta(days=9), ease=2.65)

        result = FlashcardService().due_for_review(self.user, now=self.now)
        self.assertEqual([c.id for c, _ in result["flashcards"]], [new_card.id, overdue.id])
        self.assertEqual(result["stats"]["new"], 1)
        self.assertEqual(result["stats"]["mastered"], 1)
        self.assertEqual(result["stats"]["learning"], 2)
        self.assertEqual(result["stats"]["total"], 4)

    def test_only_latest_review_counts(self):
        card = self.cards[0]
        self._review(card, "good", self.now - timedelta(days=10), self.now - timedelta(days=7))
        self._review(card, "easy", self.now - timedelta(days=1), self.now + timedelta(days=6))
        due_ids = [c.id for c, _ in FlashcardService().due_for_review(self.user, now=self.now)["flashcards"]]
        self.assertNotIn(card.id, due_ids)

    def test_review_without_next_date_is_due(self):
        card = self.cards[0]
        self._review(card, "good", self.now - timedelta(days=1), None)
        due_ids = [c.id for c, _ in FlashcardService().due_for_review(self.user, now=self.now)["flashcards"]]
        self.assertIn(card.id, due_ids)

    def test_limit_and_no_subjects(self):
        result = FlashcardService().due_for_review(self.user, limit=2, now=self.now)
        self.assertEqual(len(result["flashcards"]), 2)
        other = make_user()
        self.assertEqual(FlashcardService().due_for_review(other)["flashcards"], [])


class FlashcardApiTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.client = APIClient()
        self.client.force_authenticate(self.user)
        self.bio = make_subject("Biology")
        make_topic(self.bio, "Cells")

    def test_create_and_review(self):
        res = self.client.post(
            "/api/flashcards/",
            {"prompt": "Unit of life?", "answer": "Cell", "subject": "biology", "topic": "cells", "tags": ["intro"]},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        card_id = res.data["flashcard"]["id"]
        self.assertEqual(res.data["flashcard"]["topic"], "Cells")

        res = self.client.post(f"/api/flashcards/{card_id}/review/", {"response": "hard"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["review"]["interval"], 1)

    def test_unknown_subject(self):
        res = self.client.post(
            "/api/flashcards/", {"prompt": "x", "answer": "y", "subject": "Alchemy"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.data["ok"])

    def test_due_endpoint(self):
        self.user.profile.selected_subjects.set([self.bio])
        Flashcard.objects.create(subject=self.bio, prompt="p", answer="a")
        res = self.client.get("/api/flashcards/due/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["flashcards"]), 1)
        self.assertIsNone(res.data["flashcards"][0]["last_review"])
