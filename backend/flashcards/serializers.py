from rest_framework import serializers
from .models import Flashcard, FlashcardReview


class FlashcardSerializer(serializers.ModelSerializer):
    subject = serializers.CharField(source="subject.name", read_only=True)
    topic = serializers.CharField(source="topic.name", read_only=True, default=None)

    class Meta:
        model = Flashcard
        fields = ["id", "subject", "topic", "prompt", "answer", "tags", "difficulty", "media_url", "created_at"]


class FlashcardReviewSerializer(serializers.ModelSerializer):
    class Meta:
        model = FlashcardReview
        fields = [
            "id",
            "flashcard",
            "response",
            "recall_success",
            "response_time_ms",
            "interval",
            "ease_factor",
            "next_review",
            "created_at",
        ]


def due_card_payload(card, review):
    data = FlashcardSerializer(card).data
    data["last_review"] = FlashcardReviewSerializer(review).data if review else None
    return data
