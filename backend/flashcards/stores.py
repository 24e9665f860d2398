from .models import Flashcard, FlashcardReview


class ReviewStore:
    def get_flashcard(self, flashcard_id: int) -> Flashcard | None:
        return Flashcard.objects.filter(id=flashcard_id).first()

    def latest_review(self, user, flashcard) -> FlashcardReview | None:
        return (
            FlashcardReview.objects.filter(user=user, flashcard=flashcard)
            .order_by("-created_at", "-id")
            .first()
        )

    def latest_reviews(self, user, flashcards) -> dict[int, FlashcardReview]:
        ids = [f.id for f in flashcards]
        qs = FlashcardReview.objects.filter(user=user, flashcard_id__in=ids).order_by("-created_at", "-id")
        latest = {}
        for review in qs:
            if review.flashcard_id in latest:
                continue
            latest[review.flashcard_id] = review
        return latest

    def create_review(self, **fields) -> FlashcardReview:
        return FlashcardReview.objects.create(**fields)

    def flashcards_by_subjects(self, subject_ids) -> list[Flashcard]:
        return list(
            Flashcard.objects.filter(subject_id__in=list(subject_ids))
            .select_related("subject", "topic")
            .order_by("id")
        )
