from dataclasses import dataclass, field

from django.db import models
from django.db.models import F
from django.utils import timezone

from .models import DIFFICULTY_RANK, Question, QuestionAttempt, Subject, Topic, UserProgress


@dataclass
class QuestionFilters:
    subject: Subject | None = None
    topic: Topic | None = None
    difficulty: str | None = None
    cognitive_level: str | None = None
    exclude_ids: list[int] = field(default_factory=list)


class AttemptStore:
    """ORM access to attempt history and per-topic progress."""

    def find_recent_attempts(self, user, limit: int):
        return list(
            QuestionAttempt.objects.filter(user=user)
            .select_related("question")
            .order_by("-attempted_at", "-id")[:limit]
        )

    def count_attempts(self, user, topic=None, correct_only: bool = False) -> int:
        qs = QuestionAttempt.objects.filter(user=user)
        if topic is not None:
            qs = qs.filter(question__topic=topic)
        if correct_only:
            qs = qs.filter(is_correct=True)
        return qs.count()

    def create_attempt(self, **fields) -> QuestionAttempt:
        return QuestionAttempt.objects.create(**fields)

    def upsert_progress(self, user, topic, is_correct: bool, time_taken: int) -> UserProgress:
        progress, _ = UserProgress.objects.get_or_create(user=user, topic=topic)
        UserProgress.objects.filter(pk=progress.pk).update(
            total_questions=F("total_questions") + 1,
            correct_answers=F("correct_answers") + (1 if is_correct else 0),
            mastery_score=F("mastery_score") + (1 if is_correct else 0),
            total_time_spent=F("total_time_spent") + time_taken,
            last_reviewed=timezone.now(),
        )
        progress.refresh_from_db()
        return progress

    def progress_rows(self, user):
        return list(UserProgress.objects.filter(user=user).select_related("topic", "topic__subject"))


class QuestionStore:
    def get(self, question_id: int) -> Question | None:
        return Question.objects.select_related("subject", "topic").filter(id=question_id).first()

    def by_ids(self, ids) -> list[Question]:
        return list(Question.objects.filter(id__in=list(ids)).select_related("subject", "topic"))

    def find_candidates(self, filters: QuestionFilters, descending: bool, limit: int):
        qs = Question.objects.filter(status="ACTIVE").select_related("subject", "topic")
        if filters.subject is not None:
            qs = qs.filter(subject=filters.subject)
        if filters.topic is not None:
            qs = qs.filter(topic=filters.topic)
        if filters.difficulty:
            qs = qs.filter(difficulty=filters.difficulty)
        if filters.cognitive_level:
            qs = qs.filter(cognitive_level=filters.cognitive_level)
        if filters.exclude_ids:
            qs = qs.exclude(id__in=filters.exclude_ids)

        # Difficulty is a label; order by its rank, not alphabetically.
        qs = qs.annotate(
            difficulty_rank=models.Case(
                *[models.When(difficulty=value, then=rank) for value, rank in DIFFICULTY_RANK.items()],
                default=1,
                output_field=models.IntegerField(),
            )
        )
        rank_order = "-difficulty_rank" if descending else "difficulty_rank"
        return list(qs.order_by(rank_order, "-created_at", "-id")[:limit])

    def diagnostic_for_subject(self, subject: Subject, limit: int):
        return list(
            Question.objects.filter(subject=subject, is_diagnostic=True, status="ACTIVE")
            .select_related("subject", "topic")
            .order_by("order", "id")[:limit]
        )


def resolve_subject(name: str | None) -> Subject | None:
    if not name:
        return None
    return Subject.objects.filter(name__iexact=name.strip()).first()


def resolve_topic(name: str | None, subject: Subject | None = None) -> Topic | None:
    if not name:
        return None
    qs = Topic.objects.filter(name__iexact=name.strip())
    if subject is not None:
        qs = qs.filter(subject=subject)
    return qs.first()
