from django.db import models
from django.conf import settings


class Streak(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="streaks")
    count = models.PositiveIntegerField(default=1)
    last_active = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "updated_at"], name="streak_user_updated_idx"),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.count} (last {self.last_active})"


class DailyActivity(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="daily_activity")
    date = models.DateField()
    questions_answered = models.PositiveIntegerField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)
    time_spent = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = ("user", "date")
        indexes = [
            models.Index(fields=["user", "date"], name="activity_user_date_idx"),
        ]
