from django.db import models
from django.conf import settings
import uuid


class MockExam(models.Model):
    TYPE_CHOICES = [
        ("full_utme", "Full UTME"),
        ("subject_specific", "Subject specific"),
        ("quick", "Quick"),
    ]
    STATUS_CHOICES = [
        ("IN_PROGRESS", "In progress"),
        ("COMPLETED", "Completed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="mock_exams")
    exam_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="IN_PROGRESS")
    subjects = models.ManyToManyField("question_bank.Subject", blank=True, related_name="mock_exams")
    question_count = models.PositiveIntegerField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)
    percentage = models.PositiveIntegerField(default=0)
    time_limit = models.PositiveIntegerField(default=60)  # minutes
    time_spent = models.PositiveIntegerField(default=0)  # seconds
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "status"], name="mock_exam_user_status_idx"),
            models.Index(fields=["user", "completed_at"], name="mock_exam_user_completed_idx"),
        ]

    def __str__(self):
        return f"{self.exam_type} {self.id} ({self.status})"


class MockExamQuestion(models.Model):
    exam = models.ForeignKey(MockExam, on_delete=models.CASCADE, related_name="questions")
    question = models.ForeignKey("question_bank.Question", on_delete=models.CASCADE, related_name="mock_exam_rows")
    order = models.PositiveIntegerField(default=0)
    user_answer = models.CharField(max_length=20, null=True, blank=True)
    is_correct = models.BooleanField(null=True, blank=True)
    response_time = models.PositiveIntegerField(default=0)  # seconds

    class Meta:
        unique_together = ("exam", "question")
        ordering = ["order", "id"]
