from datetime import datetime, timedelta

from django.utils import timezone
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import DailyActivity
from .utils import current_streak, latest_streak


def _time_left_seconds(local_now):
    next_midnight = datetime.combine(local_now.date() + timedelta(days=1), datetime.min.time())
    next_midnight = timezone.make_aware(next_midnight, local_now.tzinfo)
    return max(0, int((next_midnight - local_now).total_seconds()))


class StreakStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = request.user
        local_now = timezone.localtime()
        today = local_now.date()
        activity = DailyActivity.objects.filter(user=user, date=today).first()
        streak = latest_streak(user)

        return Response(
            {
                "ok": True,
                "streak_count": current_streak(user, today),
                "last_active": streak.last_active.isoformat() if streak else None,
                "today": {
                    "date": today.isoformat(),
                    "questions_answered": activity.questions_answered if activity else 0,
                    "correct_answers": activity.correct_answers if activity else 0,
                    "active": bool(activity and activity.questions_answered),
                },
                "time_left_seconds": _time_left_seconds(local_now),
            }
        )
