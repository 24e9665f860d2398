import random

from question_bank.models import Question
from .models import MockExam, MockExamQuestion


class ExamStore:
    """ORM access to mock exams and their per-question rows."""

    def load_exam_with_questions(self, exam_id) -> MockExam | None:
        return (
            MockExam.objects.filter(id=exam_id)
            .prefetch_related("subjects", "questions__question__subject", "questions__question__topic")
            .first()
        )

    def create_exam(self, user, exam_type, subjects, question_ids, time_limit, start_time) -> MockExam:
        exam = MockExam.objects.create(
            user=user,
            exam_type=exam_type,
            question_count=len(question_ids),
            time_limit=time_limit,
            start_time=start_time,
        )
        exam.subjects.set(subjects)
        MockExamQuestion.objects.bulk_create(
            [MockExamQuestion(exam=exam, question_id=qid, order=i) for i, qid in enumerate(question_ids)]
        )
        return exam

    def update_exam_question(self, row: MockExamQuestion, user_answer, is_correct, response_time):
        row.user_answer = user_answer
        row.is_correct = is_correct
        row.response_time = response_time
        row.save(update_fields=["user_answer", "is_correct", "response_time"])

    def update_exam_status(self, exam: MockExam, **summary):
        for k, v in summary.items():
            setattr(exam, k, v)
        exam.save(update_fields=list(summary.keys()))

    def completed_exams(self, user):
        return MockExam.objects.filter(user=user, status="COMPLETED").order_by("-completed_at", "-created_at")

    def sample_question_ids(self, subject, count: int, exclude_ids=()) -> list[int]:
        ids = list(
            Question.objects.filter(subject=subject, status="ACTIVE")
            .exclude(id__in=list(exclude_ids))
            .values_list("id", flat=True)
        )
        if len(ids) <= count:
            return ids
        return random.sample(ids, count)
