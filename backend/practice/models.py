from django.db import models
from django.conf import settings
import uuid

from question_bank.models import Difficulty


class PracticeSession(models.Model):
    TYPE_CHOICES = [
        ("ADAPTIVE", "Adaptive"),
        ("TOPIC_FOCUS", "Topic focus"),
        ("TIMED_SPRINT", "Timed sprint"),
    ]
    STATUS_CHOICES = [
        ("IN_PROGRESS", "In progress"),
        ("COMPLETED", "Completed"),
        ("CANCELLED", "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="practice_sessions")
    subject = models.ForeignKey("question_bank.Subject", on_delete=models.CASCADE, related_name="practice_sessions")
    topic = models.ForeignKey(
        "question_bank.Topic",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="practice_sessions",
    )
    # Null means mixed difficulty.
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices, null=True, blank=True)
    session_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default="ADAPTIVE")
    question_count = models.PositiveIntegerField(default=0)
    question_ids = models.JSONField(default=list)
    answered_count = models.PositiveIntegerField(default=0)
    correct_count = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="IN_PROGRESS")
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "status"], name="practice_user_status_idx"),
            models.Index(fields=["user", "start_time"], name="practice_user_start_idx"),
        ]

    def __str__(self):
        return f"{self.session_type} {self.id} ({self.status})"
