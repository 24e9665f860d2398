from django.test import TestCase
from rest_framework.test import APIClient

from prep_api.exceptions import Conflict, InvalidInput, NotFound, Unauthorized
from prep_api.testing import make_question, make_subject, make_topic, make_user
from question_bank.models import QuestionAttempt
from .models import PracticeSession
from .services import PracticeSessionService


class PracticeSessionTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.chem = make_subject("Chemistry")
        self.bonding = make_topic(self.chem, "Bonding")
        self.acids = make_topic(self.chem, "Acids")
        self.questions = [make_question(self.chem, self.bonding) for _ in range(3)] + [
            make_question(self.chem, self.acids) for _ in range(2)
        ]

    def test_start_uses_adaptive_selection(self):
        session, questions = PracticeSessionService().start(self.user, "chemistry", question_count=4)
        self.assertEqual(len(questions), 4)
        self.assertEqual(session.question_ids, [q.id for q in questions])
        self.assertEqual(session.status, "IN_PROGRESS")
        self.assertIsNone(session.difficulty)

    def test_start_validation(self):
        service = PracticeSessionService()
        with self.assertRaises(InvalidInput):
            service.start(self.user, None)
        with self.assertRaises(InvalidInput):
            service.start(self.user, "Chemistry", difficulty="brutal")
        with self.assertRaises(InvalidInput):
            service.start(self.user, "Chemistry", topic="Optics")

    def test_submit_and_complete(self):
        service = PracticeSessionService()
        session, questions = service.start(self.user, "Chemistry", question_count=5)
        for i, q in enumerate(questions):
            service.submit_attempt(session.id, self.user, q.id, "A" if i % 2 == 0 else "B", time_taken=10 + i)

        session.refresh_from_db()
        self.assertEqual(session.answered_count, 5)
        self.assertEqual(session.correct_count, 3)
        self.assertEqual(QuestionAttempt.objects.filter(practice_session=session).count(), 5)

        summary = service.complete(session.id, self.user)
        self.assertEqual(summary["correct_count"], 3)
        self.assertEqual(summary["accuracy"], 60)
        self.assertEqual(summary["avg_time"], 12.0)
        self.assertEqual(sum(t["total"] for t in summary["topic_breakdown"].values()), 5)
        self.assertEqual(PracticeSession.objects.get(id=session.id).status, "COMPLETED")

    def test_question_outside_session(self):
        service = PracticeSessionService()
        session, questions = service.start(self.user, "Chemistry", topic="Acids", question_count=2)
        outsider = next(q for q in self.questions if q.id not in session.question_ids)
        with self.assertRaises(InvalidInput):
            service.submit_attempt(session.id, self.user, outsider.id, "A")

    def test_answering_twice_conflicts(self):
        service = PracticeSessionService()
        session, questions = service.start(self.user, "Chemistry", question_count=2)
        service.submit_attempt(session.id, self.user, questions[0].id, "A")
        with self.assertRaises(Conflict):
            service.submit_attempt(session.id, self.user, questions[0].id, "B")

    def test_finished_sessions_are_closed(self):
        service = PracticeSessionService()
        session, questions = service.start(self.user, "Chemistry", question_count=2)
        service.cancel(session.id, self.user)
        with self.assertRaises(Conflict):
            service.submit_attempt(session.id, self.user, questions[0].id, "A")
        with self.assertRaises(Conflict):
            service.complete(session.id, self.user)

    def test_ownership(self):
        service = PracticeSessionService()
        session, _ = service.start(self.user, "Chemistry", question_count=1)
        with self.assertRaises(Unauthorized):
            service.complete(session.id, make_user())
        with self.assertRaises(NotFound):
            service.get("00000000-0000-0000-0000-000000000000", self.user)

    def test_malformed_session_id(self):
        service = PracticeSessionService()
        calls = {
            "get": lambda: service.get("not-a-uuid", self.user),
            "submit_attempt": lambda: service.submit_attempt("not-a-uuid", self.user, self.questions[0].id, "A"),
            "complete": lambda: service.complete("42", self.user),
            "cancel": lambda: service.cancel("", self.user),
        }
        for name, call in calls.items():
            with self.subTest(name), self.assertRaises(InvalidInput):
                call()

    def test_question_id_checked_before_session_state(self):
        service = PracticeSessionService()
        session, _ = service.start(self.user, "Chemistry", question_count=1)
        service.cancel(session.id, self.user)
        with self.assertRaises(InvalidInput):
            service.submit_attempt(session.id, self.user, "abc", "A")

    def test_empty_session_summary(self):
        service = PracticeSessionService()
        session, _ = service.start(self.user, "Chemistry", question_count=1)
        summary = service.complete(session.id, self.user)
        self.assertEqual(summary["accuracy"], 0)
        self.assertEqual(summary["avg_time"], 0)


class PracticeApiTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.client = APIClient()
        self.client.force_authenticate(self.user)
        bio = make_subject("Biology")
        for _ in range(3):
            make_question(bio, None)

    def test_session_round_trip(self):
        res = self.client.post("/api/practice/sessions/", {"subject": "Biology", "question_count": 2}, format="json")
        self.assertEqual(res.status_code, 200)
        session_id = res.data["session"]["id"]
        qid = res.data["questions"][0]["id"]

        res = self.client.post(
            f"/api/practice/sessions/{session_id}/attempts/",
            {"question_id": qid, "selected_option": "A", "time_taken": 5},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["attempt"]["is_correct"])

        res = self.client.get(f"/api/practice/sessions/{session_id}/")
        self.assertEqual(res.data["answered_ids"], [qid])

        res = self.client.post(f"/api/practice/sessions/{session_id}/complete/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["summary"]["correct_count"], 1)

        res = self.client.post(f"/api/practice/sessions/{session_id}/cancel/")
        self.assertEqual(res.status_code, 409)
        self.assertFalse(res.data["ok"])
