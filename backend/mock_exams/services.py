import logging
import math

from django.db import transaction
from django.utils import timezone

from prep_api.exceptions import InvalidInput, NotFound, Unauthorized
from prep_api.utils import parse_choice, parse_int, parse_names, parse_uuid, round_half_up
from question_bank.stores import resolve_subject
from .models import MockExam
from .stores import ExamStore

logger = logging.getLogger(__name__)

EXAM_TYPES = [value for value, _ in MockExam.TYPE_CHOICES]
MAX_TIME_LIMIT = 300
MAX_QUESTION_COUNT = 200


def percentage(correct: int, total: int) -> int:
    if not total:
        return 0
    return round_half_up(correct / total * 100)


def projected_score(pct: int) -> int:
    """Map a percentage onto the 200-400 UTME band."""
    return round_half_up(200 + pct / 100 * 200)


def normalize_answers(payload) -> dict:
    """Accept either a list of answer objects or a {question_id: option} mapping."""
    if payload in (None, ""):
        return {}
    answers = {}
    if isinstance(payload, list):
        for a in payload:
            if not isinstance(a, dict) or a.get("question_id") in (None, ""):
                raise InvalidInput("each answer needs a question_id")
            qid = parse_int(a.get("question_id"), "question_id")
            answers[qid] = {
                "selected_option": a.get("selected_option"),
                "time_spent": parse_int(a.get("time_spent"), "time_spent", default=0, minimum=0),
            }
    elif isinstance(payload, dict):
        for k, v in payload.items():
            answers[parse_int(k, "question_id")] = {"selected_option": v, "time_spent": 0}
    else:
        raise InvalidInput("answers must be list or dict")
    return answers


def subject_breakdown(results: list[dict]) -> dict:
    stats = {}
    for r in results:
        s = stats.setdefault(r["subject"], {"total": 0, "correct": 0, "percentage": 0})
        s["total"] += 1
        if r["is_correct"]:
            s["correct"] += 1
    for s in stats.values():
        s["percentage"] = percentage(s["correct"], s["total"])
    return stats


def split_evenly(total: int, parts: int) -> list[int]:
    base, extra = divmod(total, parts)
    return [base + (1 if i < extra else 0) for i in range(parts)]


def _result_row(row) -> dict:
    q = row.question
    return {
        "question_id": q.id,
        "text": q.text,
        "options": q.options,
        "selected_option": row.user_answer,
        "correct_option_id": q.correct_option_id,
        "is_correct": bool(row.is_correct),
        "subject": q.subject.name,
        "topic": q.topic.name if q.topic_id else None,
        "explanation": q.explanation,
        "response_time": row.response_time,
    }


def _summary(exam: MockExam) -> dict:
    subjects = [s.name for s in exam.subjects.all()]
    return {
        "id": str(exam.id),
        "exam_type": exam.exam_type,
        "subjects": subjects,
        "subject": subjects[0] if len(subjects) == 1 else "Multiple Subjects",
        "question_count": exam.question_count,
        "correct_answers": exam.correct_answers,
        "percentage": exam.percentage,
        "time_spent": exam.time_spent,
        "completed_at": exam.completed_at,
    }


class MockExamService:
    def __init__(self, exams: ExamStore | None = None):
        self.exams = exams or ExamStore()

    def _own_exam(self, exam_id, user) -> MockExam:
        exam = self.exams.load_exam_with_questions(parse_uuid(exam_id, "exam_id"))
        if exam is None:
            raise NotFound("Mock exam not found")
        if exam.user_id != user.pk:
            raise Unauthorized("Not your mock exam")
        return exam

    def available(self, user) -> list[dict]:
        prof = getattr(user, "profile", None)
        subjects = list(prof.selected_subjects.order_by("name").values_list("name", flat=True)) if prof else []
        templates = [
            {
                "id": "full_utme",
                "title": "Full UTME Mock Exam",
                "description": "180 questions across all your subjects",
                "exam_type": "full_utme",
                "subjects": subjects,
                "question_count": 180,
                "time_limit": 210,
            },
            {
                "id": "quick",
                "title": "Quick Mock",
                "description": "20 questions across all your subjects",
                "exam_type": "quick",
                "subjects": subjects,
                "question_count": 20,
                "time_limit": 20,
            },
        ]
        for name in subjects:
            templates.append(
                {
                    "id": f"subject_{name.lower().replace(' ', '_')}",
                    "title": f"{name} Mock",
                    "description": f"60 questions focused on {name}",
                    "exam_type": "subject_specific",
                    "subjects": [name],
                    "question_count": 60,
                    "time_limit": 60,
                }
            )
        return templates

    @transaction.atomic
    def create(self, user, exam_type, subjects, time_limit, question_count, now=None) -> MockExam:
        exam_type = parse_choice(exam_type, "exam_type", EXAM_TYPES, upper=False)
        if exam_type is None:
            raise InvalidInput("exam_type required")
        time_limit = parse_int(time_limit, "time_limit", minimum=1, maximum=MAX_TIME_LIMIT)
        question_count = parse_int(question_count, "question_count", minimum=1, maximum=MAX_QUESTION_COUNT)
        names = parse_names(subjects)
        if not names:
            raise InvalidInput("At least one subject is required")

        subject_objs = []
        for name in names:
            subject = resolve_subject(name)
            if subject is None:
                raise InvalidInput(f"Unknown subject: {name}")
            subject_objs.append(subject)

        question_ids = []
        for subject, share in zip(subject_objs, split_evenly(question_count, len(subject_objs))):
            question_ids.extend(self.exams.sample_question_ids(subject, share, exclude_ids=question_ids))
        if len(question_ids) < question_count:
            raise InvalidInput("Not enough questions available for the selected subjects")

        exam = self.exams.create_exam(user, exam_type, subject_objs, question_ids, time_limit, now or timezone.now())
        logger.info("Mock exam %s started by %s with %d questions", exam.id, user.pk, len(question_ids))
        return self.exams.load_exam_with_questions(exam.id)

    @transaction.atomic
    def grade(self, exam_id, user, answers, time_spent=None, now=None) -> dict:
        answers = normalize_answers(answers)
        exam = self._own_exam(exam_id, user)
        if exam.status == "COMPLETED":
            raise InvalidInput("Mock exam already completed")
        now = now or timezone.now()

        correct = 0
        response_total = 0
        results = []
        for row in exam.questions.all():
            answer = answers.get(row.question_id)
            selected = None
            is_correct = False
            response_time = 0
            if answer is not None and answer["selected_option"] not in (None, ""):
                selected = str(answer["selected_option"]).strip()
                is_correct = row.question.is_correct_option(selected)
                response_time = answer["time_spent"]
            self.exams.update_exam_question(row, selected, is_correct, response_time)
            correct += 1 if is_correct else 0
            response_total += response_time
            results.append(_result_row(row))

        pct = percentage(correct, exam.question_count)
        self.exams.update_exam_status(
            exam,
            status="COMPLETED",
            correct_answers=correct,
            percentage=pct,
            time_spent=parse_int(time_spent, "time_spent", default=response_total, minimum=0),
            end_time=now,
            completed_at=now,
        )
        logger.info("Mock exam %s graded for %s: %d/%d (%d%%)", exam.id, user.pk, correct, exam.question_count, pct)
        return {
            **_summary(exam),
            "projected_score": projected_score(pct),
            "subject_breakdown": subject_breakdown(results),
            "detailed_results": results,
        }

    def results(self, exam_id, user) -> dict:
        exam = self._own_exam(exam_id, user)
        if exam.status != "COMPLETED":
            raise NotFound("Mock exam results not found")
        results = [_result_row(row) for row in exam.questions.all()]
        return {
            **_summary(exam),
            "projected_score": projected_score(exam.percentage),
            "subject_breakdown": subject_breakdown(results),
            "detailed_results": results,
        }

    def history(self, user, page: int = 1, limit: int = 20) -> dict:
        if page < 1 or limit < 1:
            raise InvalidInput("page and limit must be at least 1")
        qs = self.exams.completed_exams(user).prefetch_related("subjects")
        total = qs.count()
        offset = (page - 1) * limit
        return {
            "exams": [_summary(e) for e in qs[offset : offset + limit]],
            "pagination": {"page": page, "limit": limit, "total": total, "pages": math.ceil(total / limit)},
        }

    def recent_scores(self, user, limit: int = 10) -> list[dict]:
        qs = self.exams.completed_exams(user).prefetch_related("subjects")[:limit]
        return [_summary(e) for e in qs]

    def resume(self, exam_id, user, now=None) -> dict:
        exam = self._own_exam(exam_id, user)
        if exam.status != "IN_PROGRESS":
            raise NotFound("Mock exam not found or already completed")
        now = now or timezone.now()
        elapsed = int((now - exam.start_time).total_seconds())
        rows = list(exam.questions.all())
        return {
            "exam": exam,
            "questions": [row.question for row in rows],
            "time_remaining": max(0, exam.time_limit * 60 - elapsed),
            "answers": {
                row.question_id: {"selected_option": row.user_answer, "time_spent": row.response_time}
                for row in rows
                if row.user_answer is not None
            },
        }
