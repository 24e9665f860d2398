import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from prep_api.exceptions import Conflict, InvalidInput, NotFound, Unauthorized
from prep_api.utils import parse_choice, parse_int, parse_uuid, round_half_up
from question_bank.models import Difficulty
from question_bank.services import AdaptiveQuestionSelector, QuestionService, build_filters
from .models import PracticeSession

logger = logging.getLogger(__name__)

SESSION_TYPES = [value for value, _ in PracticeSession.TYPE_CHOICES]
DEFAULT_QUESTION_COUNT = 15
MIXED = "MIXED"


def session_summary(session: PracticeSession, attempts) -> dict:
    total = len(attempts)
    correct = sum(1 for a in attempts if a.is_correct)
    total_time = sum(a.time_taken for a in attempts)

    topics = {}
    for a in attempts:
        name = a.question.topic.name if a.question.topic_id else None
        if name is None:
            continue
        t = topics.setdefault(name, {"total": 0, "correct": 0})
        t["total"] += 1
        if a.is_correct:
            t["correct"] += 1

    return {
        "session_id": str(session.id),
        "status": session.status,
        "total_questions": total,
        "correct_count": correct,
        "accuracy": round_half_up(correct / total * 100) if total else 0,
        "avg_time": round(total_time / total, 1) if total else 0,
        "topic_breakdown": topics,
        "completed_at": session.end_time,
    }


class PracticeSessionService:
    def __init__(self, selector: AdaptiveQuestionSelector | None = None, questions: QuestionService | None = None):
        self.selector = selector or AdaptiveQuestionSelector()
        self.questions = questions or QuestionService()

    def _load(self, session_id, user) -> PracticeSession:
        sid = parse_uuid(session_id, "session_id")
        session = PracticeSession.objects.select_related("subject", "topic").filter(id=sid).first()
        if session is None:
            raise NotFound("Practice session not found")
        if session.user_id != user.pk:
            raise Unauthorized("Not your practice session")
        return session

    def _open(self, session_id, user) -> PracticeSession:
        session = self._load(session_id, user)
        if session.status != "IN_PROGRESS":
            raise Conflict(f"Practice session is {session.status.lower().replace('_', ' ')}")
        return session

    def start(self, user, subject, topic=None, difficulty=None, session_type=None, question_count=None, now=None):
        if not subject:
            raise InvalidInput("subject required")
        session_type = parse_choice(session_type, "session_type", SESSION_TYPES, default="ADAPTIVE")
        count = parse_int(question_count, "question_count", default=DEFAULT_QUESTION_COUNT, minimum=1)
        difficulty = parse_choice(difficulty, "difficulty", Difficulty.values + [MIXED])
        if difficulty == MIXED:
            difficulty = None

        filters = build_filters(subject=subject, topic=topic, difficulty=difficulty)
        questions = self.selector.select(user, filters, count, now=now)
        if not questions:
            raise InvalidInput("No questions available for this selection")

        session = PracticeSession.objects.create(
            user=user,
            subject=filters.subject,
            topic=filters.topic,
            difficulty=difficulty,
            session_type=session_type,
            question_count=len(questions),
            question_ids=[q.id for q in questions],
            start_time=now or timezone.now(),
        )
        logger.info("Practice session %s started by %s with %d questions", session.id, user.pk, len(questions))
        return session, questions

    def get(self, session_id, user) -> dict:
        session = self._load(session_id, user)
        by_id = {q.id: q for q in self.questions.questions.by_ids(session.question_ids)}
        answered = set(session.attempts.values_list("question_id", flat=True))
        return {
            "session": session,
            "questions": [by_id[qid] for qid in session.question_ids if qid in by_id],
            "answered_ids": sorted(answered),
        }

    @transaction.atomic
    def submit_attempt(self, session_id, user, question_id, selected_option, time_taken=0, confidence_level=None, now=None):
        qid = parse_int(question_id, "question_id")
        session = self._open(session_id, user)
        if qid not in session.question_ids:
            raise InvalidInput("Question is not part of this session")
        if session.attempts.filter(question_id=qid).exists():
            raise Conflict("Question already answered in this session")

        attempt = self.questions.submit_attempt(
            user,
            question_id=qid,
            selected_option=selected_option,
            time_taken=time_taken,
            confidence_level=confidence_level,
            practice_session=session,
            now=now,
        )
        PracticeSession.objects.filter(pk=session.pk).update(
            answered_count=F("answered_count") + 1,
            correct_count=F("correct_count") + (1 if attempt.is_correct else 0),
        )
        return attempt

    @transaction.atomic
    def complete(self, session_id, user, now=None) -> dict:
        session = self._open(session_id, user)
        attempts = list(session.attempts.select_related("question__topic").order_by("attempted_at", "id"))

        session.status = "COMPLETED"
        session.end_time = now or timezone.now()
        session.answered_count = len(attempts)
        session.correct_count = sum(1 for a in attempts if a.is_correct)
        session.save(update_fields=["status", "end_time", "answered_count", "correct_count"])
        logger.info(
            "Practice session %s completed by %s: %d/%d",
            session.id,
            user.pk,
            session.correct_count,
            session.answered_count,
        )
        return session_summary(session, attempts)

    def cancel(self, session_id, user, now=None) -> PracticeSession:
        session = self._open(session_id, user)
        session.status = "CANCELLED"
        session.end_time = now or timezone.now()
        session.save(update_fields=["status", "end_time"])
        logger.info("Practice session %s cancelled by %s", session.id, user.pk)
        return session

    def recent(self, user, limit: int = 10):
        return list(
            PracticeSession.objects.filter(user=user)
            .select_related("subject", "topic")
            .order_by("-start_time")[:limit]
        )
