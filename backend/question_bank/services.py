import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from prep_api.exceptions import InvalidInput, NotFound
from prep_api.utils import parse_int
from streaks.utils import record_activity, record_outcome
from .models import CognitiveLevel, Difficulty
from .selection import apply_spaced_repetition, difficulty_order, topic_proficiency
from .stores import AttemptStore, QuestionFilters, QuestionStore, resolve_subject, resolve_topic

logger = logging.getLogger(__name__)

MAX_QUESTION_COUNT = 50
DIAGNOSTIC_PER_SUBJECT = 5


def attempt_window() -> int:
    return getattr(settings, "ADAPTIVE_ATTEMPT_WINDOW", 50)


def build_filters(subject=None, topic=None, difficulty=None, cognitive_level=None, exclude_ids=None) -> QuestionFilters:
    """Resolve caller supplied names into filters; unknown names are rejected."""
    subject_obj = resolve_subject(subject)
    if subject and subject_obj is None:
        raise InvalidInput(f"Unknown subject: {subject}")
    topic_obj = resolve_topic(topic, subject_obj)
    if topic and topic_obj is None:
        raise InvalidInput(f"Unknown topic: {topic}")
    if difficulty and difficulty not in Difficulty.values:
        raise InvalidInput(f"Unknown difficulty: {difficulty}")
    if cognitive_level and cognitive_level not in CognitiveLevel.values:
        raise InvalidInput(f"Unknown cognitive level: {cognitive_level}")
    return QuestionFilters(
        subject=subject_obj,
        topic=topic_obj,
        difficulty=difficulty or None,
        cognitive_level=cognitive_level or None,
        exclude_ids=list(exclude_ids or []),
    )


class AdaptiveQuestionSelector:
    def __init__(self, attempts: AttemptStore | None = None, questions: QuestionStore | None = None, window=None):
        self.attempts = attempts or AttemptStore()
        self.questions = questions or QuestionStore()
        self.window = window or attempt_window()

    def select(self, user, filters: QuestionFilters, count: int = 10, now=None) -> list:
        if count < 1 or count > MAX_QUESTION_COUNT:
            raise InvalidInput(f"count must be between 1 and {MAX_QUESTION_COUNT}")
        now = now or timezone.now()

        recent = self.attempts.find_recent_attempts(user, self.window)
        order = difficulty_order(topic_proficiency(recent))
        # Fetch extra candidates; spaced repetition may drop some.
        candidates = self.questions.find_candidates(filters, descending=(order == "desc"), limit=count * 2)
        eligible = apply_spaced_repetition(candidates, recent, now)
        excluded = set(filters.exclude_ids)
        return [q for q in eligible if q.id not in excluded][:count]


class QuestionService:
    def __init__(self, attempts: AttemptStore | None = None, questions: QuestionStore | None = None):
        self.attempts = attempts or AttemptStore()
        self.questions = questions or QuestionStore()

    def get_question(self, question_id):
        qid = parse_int(question_id, "question_id")
        question = self.questions.get(qid)
        if question is None:
            raise NotFound("Question not found")
        return question

    @transaction.atomic
    def submit_attempt(
        self,
        user,
        question_id,
        selected_option,
        time_taken=0,
        confidence_level=None,
        practice_session=None,
        now=None,
    ):
        qid = parse_int(question_id, "question_id")
        time_taken = parse_int(time_taken, "time_taken", default=0, minimum=0)
        if confidence_level not in (None, ""):
            confidence_level = parse_int(confidence_level, "confidence_level", minimum=1, maximum=5)
        else:
            confidence_level = None
        if selected_option in (None, ""):
            raise InvalidInput("selected_option required")

        question = self.questions.get(qid)
        if question is None:
            raise NotFound("Question not found")

        selected = str(selected_option).strip()
        if selected not in question.option_ids():
            raise InvalidInput("Invalid option selected")

        now = now or timezone.now()
        is_correct = question.is_correct_option(selected)
        attempt = self.attempts.create_attempt(
            user=user,
            question=question,
            selected_option=selected,
            is_correct=is_correct,
            time_taken=time_taken,
            confidence_level=confidence_level,
            practice_session=practice_session,
            attempted_at=now,
        )

        if question.topic_id:
            self.attempts.upsert_progress(user, question.topic, is_correct, time_taken)

        today = timezone.localdate(now)
        record_activity(user, is_correct, time_taken, today=today)
        record_outcome(user, is_correct, today=today)
        return attempt

    def diagnostic_questions(self, subject_names: list[str]) -> list[dict]:
        results = []
        for name in subject_names:
            subject = resolve_subject(name)
            if subject is None:
                logger.warning("Skipping unknown subject in diagnostic request: %s", name)
                continue
            results.append(
                {
                    "subject": subject.name,
                    "questions": self.questions.diagnostic_for_subject(subject, DIAGNOSTIC_PER_SUBJECT),
                }
            )
        return results
