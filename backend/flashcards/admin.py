from django.contrib import admin
from .models import Flashcard, FlashcardReview


@admin.register(Flashcard)
class FlashcardAdmin(admin.ModelAdmin):
    list_display = ("id", "subject", "topic", "difficulty", "created_by")
    list_filter = ("subject", "difficulty")
    search_fields = ("prompt", "answer")


@admin.register(FlashcardReview)
class FlashcardReviewAdmin(admin.ModelAdmin):
    list_display = ("user", "flashcard", "response", "interval", "ease_factor", "next_review", "created_at")
    list_filter = ("response",)
