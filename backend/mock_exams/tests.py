import uuid
from datetime import timedelta

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from prep_api.exceptions import InvalidInput, NotFound, Unauthorized
from prep_api.testing import make_question, make_subject, make_user
from .models import MockExam, MockExamQuestion
from .services import MockExamService, percentage, projected_score, split_evenly, subject_breakdown
from .stores import ExamStore


class UnreadableExamStore(ExamStore):
    def load_exam_with_questions(self, exam_id):
        raise AssertionError("exam store read before the ids were validated")


class ScoringRuleTests(SimpleTestCase):
    def test_percentage(self):
        self.assertEqual(percentage(0, 0), 0)
        self.assertEqual(percentage(1, 3), 33)
        self.assertEqual(percentage(1, 8), 13)
        self.assertEqual(percentage(5, 5), 100)

    def test_projected_score(self):
        self.assertEqual(projected_score(0), 200)
        self.assertEqual(projected_score(50), 300)
        self.assertEqual(projected_score(67), 334)
        self.assertEqual(projected_score(100), 400)

    def test_split_evenly(self):
        self.assertEqual(split_evenly(10, 3), [4, 3, 3])
        self.assertEqual(split_evenly(2, 4), [1, 1, 0, 0])

    def test_breakdown(self):
        rows = [
            {"subject": "Physics", "is_correct": True},
            {"subject": "Physics", "is_correct": False},
            {"subject": "English", "is_correct": True},
        ]
        self.assertEqual(
            subject_breakdown(rows),
            {
                "Physics": {"total": 2, "correct": 1, "percentage": 50},
                "English": {"total": 1, "correct": 1, "percentage": 100},
            },
        )


class MockExamFlowTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.physics = make_subject("Physics")
        self.english = make_subject("English")
        self.p_questions = [make_question(self.physics, None, correct_option_id="B") for _ in range(4)]
        self.e_questions = [make_question(self.english, None) for _ in range(4)]
        self.now = timezone.now()

    def _start(self, count=4):
        return MockExamService().create(self.user, "quick", ["Physics", "English"], 30, count, now=self.now)

    def test_questions_are_sampled_evenly(self):
        exam = self._start(count=5)
        subjects = [row.question.subject.name for row in exam.questions.all()]
        self.assertEqual(subjects.count("Physics"), 3)
        self.assertEqual(subjects.count("English"), 2)
        self.assertEqual(exam.question_count, 5)
        self.assertEqual(exam.status, "IN_PROGRESS")

    def test_not_enough_questions(self):
        with self.assertRaises(InvalidInput):
            MockExamService().create(self.user, "quick", ["Physics"], 30, 20)

    def test_grade(self):
        exam = self._start()
        rows = list(exam.questions.all())
        answers = []
        for row in rows:
            q = row.question
            pick = q.correct_option_id if q.subject_id == self.physics.id else "C"
            answers.append({"question_id": q.id, "selected_option": pick, "time_spent": 20})

        result = MockExamService().grade(exam.id, self.user, answers, now=self.now + timedelta(minutes=10))
        self.assertEqual(result["correct_answers"], 2)
        self.assertEqual(result["percentage"], 50)
        self.assertEqual(result["projected_score"], 300)
        self.assertEqual(result["subject_breakdown"]["Physics"]["percentage"], 100)
        self.assertEqual(result["subject_breakdown"]["English"]["percentage"], 0)
        self.assertEqual(result["time_spent"], 80)

        exam.refresh_from_db()
        self.assertEqual(exam.status, "COMPLETED")
        self.assertEqual(exam.completed_at, exam.end_time)
        self.assertEqual(MockExamQuestion.objects.filter(exam=exam, is_correct=True).count(), 2)

    def test_unanswered_questions_count_as_wrong(self):
        exam = self._start()
        first = exam.questions.all()[0].question
        result = MockExamService().grade(
            exam.id, self.user, {str(first.id): first.correct_option_id}, time_spent=90
        )
        self.assertEqual(result["correct_answers"], 1)
        self.assertEqual(result["percentage"], 25)
        self.assertEqual(result["time_spent"], 90)
        self.assertEqual(sum(b["total"] for b in result["subject_breakdown"].values()), 4)

    def test_empty_exam_scores_zero(self):
        exam = MockExam.objects.create(user=self.user, exam_type="quick", start_time=self.now)
        result = MockExamService().grade(exam.id, self.user, [])
        self.assertEqual(result["percentage"], 0)
        self.assertEqual(result["subject_breakdown"], {})

    def test_grading_twice_is_rejected(self):
        exam = self._start()
        MockExamService().grade(exam.id, self.user, [])
        with self.assertRaises(InvalidInput):
            MockExamService().grade(exam.id, self.user, [])

    def test_other_users_exam(self):
        exam = self._start()
        with self.assertRaises(Unauthorized):
            MockExamService().grade(exam.id, make_user(), [])

    def test_results_history_and_recent_scores(self):
        exam = self._start()
        service = MockExamService()
        with self.assertRaises(NotFound):
            service.results(exam.id, self.user)
        service.grade(exam.id, self.user, [])

        results = service.results(exam.id, self.user)
        self.assertEqual(len(results["detailed_results"]), 4)
        self.assertEqual(results["projected_score"], 200)

        history = service.history(self.user, page=1, limit=10)
        self.assertEqual(history["pagination"]["total"], 1)
        self.assertEqual(history["exams"][0]["subject"], "Multiple Subjects")
        self.assertEqual(len(service.recent_scores(self.user)), 1)

    def test_resume_time_remaining_never_negative(self):
        exam = self._start()
        service = MockExamService()
        state = service.resume(exam.id, self.user, now=self.now + timedelta(minutes=10))
        self.assertEqual(state["time_remaining"], 20 * 60)
        state = service.resume(exam.id, self.user, now=self.now + timedelta(hours=5))
        self.assertEqual(state["time_remaining"], 0)

        service.grade(exam.id, self.user, [])
        with self.assertRaises(NotFound):
            service.resume(exam.id, self.user)

    def test_malformed_exam_id(self):
        service = MockExamService()
        calls = {
            "grade": lambda: service.grade("not-a-uuid", self.user, []),
            "results": lambda: service.results("not-a-uuid", self.user),
            "resume": lambda: service.resume("12", self.user),
        }
        for name, call in calls.items():
            with self.subTest(name), self.assertRaises(InvalidInput):
                call()

    def test_ids_are_checked_before_loading_the_exam(self):
        service = MockExamService(exams=UnreadableExamStore())
        with self.assertRaises(InvalidInput):
            service.grade("not-a-uuid", self.user, [])
        with self.assertRaises(InvalidInput):
            service.grade(uuid.uuid4(), self.user, [{"question_id": "abc", "selected_option": "A"}])


class MockExamApiTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.client = APIClient()
        self.client.force_authenticate(self.user)
        physics = make_subject("Physics")
        self.user.profile.selected_subjects.set([physics])
        for _ in range(3):
            make_question(physics, None)

    def test_templates_follow_profile(self):
        res = self.client.get("/api/mock-exams/")
        self.assertEqual(res.status_code, 200)
        ids = [t["id"] for t in res.data["mock_exams"]]
        self.assertIn("subject_physics", ids)

    def test_start_and_submit(self):
        res = self.client.post(
            "/api/mock-exams/start/",
            {"exam_type": "subject_specific", "subjects": ["Physics"], "time_limit": 10, "question_count": 3},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        exam = res.data["exam"]
        self.assertEqual(len(exam["questions"]), 3)
        self.assertNotIn("correct_option_id", exam["questions"][0])

        answers = [{"question_id": q["id"], "selected_option": "A"} for q in exam["questions"]]
        res = self.client.post(
            "/api/mock-exams/submit/", {"exam_id": exam["id"], "answers": answers}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["results"]["percentage"], 100)

        res = self.client.get(f"/api/mock-exams/{exam['id']}/results/")
        self.assertEqual(res.status_code, 200)

    def test_invalid_exam_type(self):
        res = self.client.post(
            "/api/mock-exams/start/",
            {"exam_type": "marathon", "subjects": ["Physics"], "time_limit": 10, "question_count": 1},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.data["ok"])

    def test_submit_with_malformed_exam_id(self):
        res = self.client.post(
            "/api/mock-exams/submit/", {"exam_id": "not-a-uuid", "answers": []}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data, {"ok": False, "error": "exam_id must be a valid id"})

        res = self.client.post("/api/mock-exams/submit/", {"answers": []}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.data["ok"])
