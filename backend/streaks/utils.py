from datetime import date, timedelta

from django.db.models import F
from django.utils import timezone

from .models import DailyActivity, Streak


def local_today() -> date:
    return timezone.localdate()


def latest_streak(user) -> Streak | None:
    return Streak.objects.filter(user=user).order_by("-updated_at", "-id").first()


def record_outcome(user, is_correct: bool, today: date | None = None) -> Streak:
    """
    Count a graded attempt as activity for today's streak.

    Correctness does not gate the streak; only the calendar day does.
    """
    today = today or local_today()
    streak = latest_streak(user)
    if streak is None:
        return Streak.objects.create(user=user, count=1, last_active=today)

    gap = (today - streak.last_active).days
    if gap == 0:
        return streak
    if gap == 1:
        streak.count += 1
    else:
        streak.count = 1
    streak.last_active = today
    streak.save(update_fields=["count", "last_active", "updated_at"])
    return streak


def current_streak(user, today: date | None = None) -> int:
    """Reported streak: zero once a full day has been missed."""
    today = today or local_today()
    streak = latest_streak(user)
    if not streak:
        return 0
    if today - streak.last_active <= timedelta(days=1):
        return streak.count
    return 0


def record_activity(user, is_correct: bool, time_spent: int, today: date | None = None) -> DailyActivity:
    today = today or local_today()
    activity, _ = DailyActivity.objects.get_or_create(user=user, date=today)
    DailyActivity.objects.filter(pk=activity.pk).update(
        questions_answered=F("questions_answered") + 1,
        correct_answers=F("correct_answers") + (1 if is_correct else 0),
        time_spent=F("time_spent") + (time_spent or 0),
    )
    activity.refresh_from_db()
    return activity
