from django.db import models
from django.conf import settings
from django.utils import timezone

from question_bank.models import Difficulty


class Flashcard(models.Model):
    subject = models.ForeignKey("question_bank.Subject", on_delete=models.CASCADE, related_name="flashcards")
    topic = models.ForeignKey(
        "question_bank.Topic",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="flashcards",
    )
    prompt = models.TextField()
    answer = models.TextField()
    tags = models.JSONField(default=list, blank=True)
    difficulty = models.CharField(max_length=10, choices=Difficulty.choices, blank=True, null=True)
    media_url = models.URLField(blank=True, null=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="flashcards",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:  # pragma: no cover
        return self.prompt[:50]


class FlashcardReview(models.Model):
    RESPONSE_CHOICES = [
        ("again", "Again"),
        ("hard", "Hard"),
        ("good", "Good"),
        ("easy", "Easy"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="flashcard_reviews")
    flashcard = models.ForeignKey(Flashcard, on_delete=models.CASCADE, related_name="reviews")
    response = models.CharField(max_length=10, choices=RESPONSE_CHOICES)
    recall_success = models.BooleanField(default=False)
    response_time_ms = models.PositiveIntegerField(default=0)
    interval = models.PositiveIntegerField(default=1)  # days
    ease_factor = models.FloatField(default=2.5)
    next_review = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["user", "flashcard", "created_at"], name="fc_review_user_card_time_idx"),
        ]
