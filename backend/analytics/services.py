import logging
from datetime import date, timedelta

from django.db.models import Avg, Case, Count, IntegerField, Sum, When
from django.utils import timezone

from prep_api.utils import round_half_up
from question_bank.models import QuestionAttempt
from question_bank.stores import AttemptStore, resolve_subject
from streaks.models import DailyActivity
from streaks.utils import current_streak

logger = logging.getLogger(__name__)

MIN_TOPIC_ATTEMPTS = 3
TREND_DAYS = 30


def _accuracy(correct: int, total: int) -> int:
    return round_half_up(correct / total * 100) if total else 0


def rank_weak_topics(rows: list[dict], limit: int) -> list[dict]:
    """Lowest accuracy first; on ties the more attempted topic comes first."""
    eligible = [r for r in rows if r["total"] >= MIN_TOPIC_ATTEMPTS]
    eligible.sort(key=lambda r: (r["accuracy"], -r["total"]))
    return eligible[:limit]


class AnalyticsService:
    def __init__(self, attempts: AttemptStore | None = None):
        self.attempts = attempts or AttemptStore()

    def weak_topics(self, user, limit: int = 5) -> list[dict]:
        rows = []
        for progress in self.attempts.progress_rows(user):
            topic = progress.topic
            total = self.attempts.count_attempts(user, topic=topic)
            correct = self.attempts.count_attempts(user, topic=topic, correct_only=True)
            rows.append(
                {
                    "topic_id": topic.id,
                    "topic": topic.name,
                    "subject": topic.subject.name,
                    "total": total,
                    "correct": correct,
                    "accuracy": correct / total * 100 if total else 0.0,
                }
            )
        ranked = rank_weak_topics(rows, limit)
        for r in ranked:
            r["accuracy"] = round(r["accuracy"], 1)
        return ranked

    def _subject_rows(self, user, subjects=None) -> list[dict]:
        qs = QuestionAttempt.objects.filter(user=user)
        if subjects is not None:
            qs = qs.filter(question__subject__in=subjects)
        rows = (
            qs.values("question__subject__name")
            .annotate(
                total=Count("id"),
                correct=Sum(Case(When(is_correct=True, then=1), default=0, output_field=IntegerField())),
                avg_time=Avg("time_taken"),
            )
            .order_by("question__subject__name")
        )
        return [
            {
                "subject": r["question__subject__name"],
                "total": r["total"],
                "correct": r["correct"] or 0,
                "accuracy": _accuracy(r["correct"] or 0, r["total"]),
                "avg_time": round(r["avg_time"] or 0, 1),
            }
            for r in rows
        ]

    def overview(self, user, today: date | None = None) -> dict:
        today = today or timezone.localdate()
        total = self.attempts.count_attempts(user)
        correct = self.attempts.count_attempts(user, correct_only=True)
        trend = DailyActivity.objects.filter(user=user, date__gte=today - timedelta(days=TREND_DAYS)).order_by("date")
        return {
            "overall": {
                "total_questions": total,
                "correct_answers": correct,
                "accuracy": _accuracy(correct, total),
                "current_streak": current_streak(user, today),
            },
            "subject_performance": self._subject_rows(user),
            "daily_trends": [
                {
                    "date": a.date.isoformat(),
                    "questions_answered": a.questions_answered,
                    "correct_answers": a.correct_answers,
                    "time_spent": a.time_spent,
                }
                for a in trend
            ],
        }

    def subject_breakdown(self, user, subject_names: list[str]) -> list[dict]:
        subjects = []
        for name in subject_names:
            subject = resolve_subject(name)
            if subject is None:
                logger.warning("Skipping unknown subject in analytics request: %s", name)
                continue
            subjects.append(subject)
        found = {r["subject"]: r for r in self._subject_rows(user, subjects)}
        return [
            found.get(s.name) or {"subject": s.name, "total": 0, "correct": 0, "accuracy": 0, "avg_time": 0}
            for s in subjects
        ]


class StudyPlanService:
    """Builds a day's study plan from weak topics and the selected subjects. Nothing is stored."""

    def __init__(self, analytics: AnalyticsService | None = None):
        self.analytics = analytics or AnalyticsService()

    def daily_plan(self, user, day: date | None = None) -> dict:
        day = day or timezone.localdate()
        stamp = day.isoformat()
        # Sunday is 0.
        weekday = (day.weekday() + 1) % 7
        tasks = [
            {
                "id": f"daily_quiz_{stamp}",
                "type": "practice",
                "title": "Daily Quiz",
                "description": "Complete 10 mixed questions from your subjects",
                "estimated_time": 15,
                "priority": "high",
                "metadata": {"question_count": 10, "mixed": True},
            }
        ]

        weak = self.analytics.weak_topics(user, limit=1)
        if weak:
            w = weak[0]
            tasks.append(
                {
                    "id": f"weak_topic_{stamp}",
                    "type": "weak_topic",
                    "title": f"Focus on {w['topic']}",
                    "description": f"Practice questions in {w['topic']} ({w['subject']})",
                    "subject": w["subject"],
                    "topic": w["topic"],
                    "estimated_time": 25,
                    "priority": "high",
                    "metadata": {"accuracy": w["accuracy"]},
                }
            )

        tasks.append(
            {
                "id": f"flashcards_{stamp}",
                "type": "flashcards",
                "title": "Flashcard Review",
                "description": "Review flashcards using spaced repetition",
                "estimated_time": 20,
                "priority": "medium",
                "metadata": {"review_type": "spaced_repetition"},
            }
        )

        prof = getattr(user, "profile", None)
        subjects = list(prof.selected_subjects.order_by("name").values_list("name", flat=True)) if prof else []
        if subjects:
            subject = subjects[weekday % len(subjects)]
            tasks.append(
                {
                    "id": f"subject_practice_{stamp}",
                    "type": "practice",
                    "title": f"{subject} Practice",
                    "description": f"Focused practice session for {subject}",
                    "subject": subject,
                    "estimated_time": 30,
                    "priority": "medium",
                    "metadata": {"focus_subject": subject},
                }
            )

        if weekday == 0:
            tasks.append(
                {
                    "id": f"mock_exam_{stamp}",
                    "type": "mock_exam",
                    "title": "Weekly Mock Exam",
                    "description": "Complete a full UTME simulation",
                    "estimated_time": 120,
                    "priority": "high",
                    "metadata": {"exam_type": "full_utme"},
                }
            )

        for t in tasks:
            t["status"] = "pending"
        return {
            "date": stamp,
            "total_estimated_time": sum(t["estimated_time"] for t in tasks),
            "tasks": tasks,
            "completion_rate": 0,
        }
