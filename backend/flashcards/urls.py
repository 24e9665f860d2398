from django.urls import path
from .views import DueFlashcardsView, FlashcardReviewView, FlashcardCreateView

urlpatterns = [
    path("flashcards/due/", DueFlashcardsView.as_view(), name="flashcards_due"),
    path("flashcards/", FlashcardCreateView.as_view(), name="flashcard_create"),
    path("flashcards/<int:pk>/review/", FlashcardReviewView.as_view(), name="flashcard_review"),
]
