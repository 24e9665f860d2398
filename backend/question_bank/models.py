from django.db import models
from django.conf import settings
from django.utils import timezone


class Subject(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)

    def __str__(self):
        return self.name


class Topic(models.Model):
    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name="topics")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)

    class Meta:
        unique_together = ("subject", "name")

    def __str__(self):
        return f"{self.subject.name} | {self.name}"


class Difficulty(models.TextChoices):
    EASY = "EASY", "Easy"
    MEDIUM = "MEDIUM", "Medium"
    HARD = "HARD", "Hard"


DIFFICULTY_RANK = {Difficulty.EASY: 0, Difficulty.MEDIUM: 1, Difficulty.HARD: 2}


class CognitiveLevel(models.TextChoices):
    REMEMBER = "REMEMBER", "Remember"
    UNDERSTAND = "UNDERSTAND", "Understand"
    APPLY = "APPLY", "Apply"
    ANALYZE = "ANALYZE", "Analyze"
    EVALUATE = "EVALUATE", "Evaluate"
    CREATE = "CREATE", "Create"


class Question(models.Model):
    STATUS_CHOICES = [
        ("ACTIVE", "Active"),
        ("ARCHIVED", "Archived"),
    ]

    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name="questions")
    topic = models.ForeignKey(Topic, on_delete=models.SET_NULL, null=True, blank=True, related_name="questions")
    text = models.TextField()
    options = models.JSONField(default=list)  # list of {id, text}
    correct_option_id = models.CharField(max_length=20)
    explanation = models.TextField(blank=True, null=True)
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices, default=Difficulty.MEDIUM)
    cognitive_level = models.CharField(
        max_length=20, choices=CognitiveLevel.choices, default=CognitiveLevel.UNDERSTAND
    )
    is_diagnostic = models.BooleanField(default=False)
    order = models.IntegerField(default=0)
    tags = models.JSONField(default=list, blank=True)
    year_asked = models.IntegerField(blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="ACTIVE")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="questions",
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["subject", "topic"], name="qb_question_subj_topic_idx"),
            models.Index(fields=["subject", "is_diagnostic"], name="qb_question_subj_diag_idx"),
        ]

    def __str__(self):
        return f"{self.subject_id} | {self.topic_id}: {self.text[:50]}"

    def option_ids(self) -> list[str]:
        return [str(o.get("id")) for o in (self.options or []) if o.get("id") is not None]

    def is_correct_option(self, selected) -> bool:
        return str(selected) == str(self.correct_option_id)


class QuestionAttempt(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="question_attempts")
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="attempts")
    selected_option = models.CharField(max_length=20)
    is_correct = models.BooleanField()
    time_taken = models.PositiveIntegerField(default=0)  # seconds
    confidence_level = models.PositiveSmallIntegerField(blank=True, null=True)
    practice_session = models.ForeignKey(
        "practice.PracticeSession",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="attempts",
    )
    attempted_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["user", "attempted_at"], name="qb_attempt_user_time_idx"),
            models.Index(fields=["user", "question"], name="qb_attempt_user_question_idx"),
        ]


class UserProgress(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="topic_progress")
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name="progress")
    mastery_score = models.PositiveIntegerField(default=0)
    total_questions = models.PositiveIntegerField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)
    total_time_spent = models.PositiveIntegerField(default=0)
    last_reviewed = models.DateTimeField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("user", "topic")
        indexes = [
            models.Index(fields=["user", "topic"], name="qb_progress_user_topic_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} {self.topic_id} ({self.mastery_score})"
