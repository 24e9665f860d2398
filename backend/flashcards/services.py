import logging
from datetime import timedelta

from django.utils import timezone

from prep_api.exceptions import InvalidInput, NotFound
from prep_api.utils import parse_choice, parse_int
from question_bank.models import Difficulty
from question_bank.stores import resolve_subject, resolve_topic
from .models import Flashcard
from .scheduling import DEFAULT_EASE, DEFAULT_INTERVAL, RESPONSES, next_schedule, recall_success
from .stores import ReviewStore

logger = logging.getLogger(__name__)

MASTERED_EASE = 2.5


def is_due(review, now) -> bool:
    if review is None or review.next_review is None:
        return True
    return review.next_review <= now


class FlashcardService:
    def __init__(self, reviews: ReviewStore | None = None):
        self.reviews = reviews or ReviewStore()

    def review(self, user, flashcard_id, response, time_spent_ms=0, now=None):
        fid = parse_int(flashcard_id, "flashcard_id")
        response = parse_choice(response, "response", RESPONSES, upper=False)
        if response is None:
            raise InvalidInput("response required")
        time_spent_ms = parse_int(time_spent_ms, "time_spent", default=0, minimum=0)

        flashcard = self.reviews.get_flashcard(fid)
        if flashcard is None:
            raise NotFound("Flashcard not found")

        now = now or timezone.now()
        last = self.reviews.latest_review(user, flashcard)
        interval = last.interval if last else DEFAULT_INTERVAL
        ease = last.ease_factor if last else DEFAULT_EASE
        new_interval, new_ease = next_schedule(interval, ease, response)

        return self.reviews.create_review(
            user=user,
            flashcard=flashcard,
            response=response,
            recall_success=recall_success(response),
            response_time_ms=time_spent_ms,
            interval=new_interval,
            ease_factor=new_ease,
            next_review=now + timedelta(days=new_interval),
            created_at=now,
        )

    def due_for_review(self, user, limit: int = 20, now=None) -> dict:
        if limit < 1:
            raise InvalidInput("limit must be at least 1")
        now = now or timezone.now()

        prof = getattr(user, "profile", None)
        subject_ids = list(prof.selected_subjects.values_list("id", flat=True)) if prof else []
        cards = self.reviews.flashcards_by_subjects(subject_ids) if subject_ids else []
        latest = self.reviews.latest_reviews(user, cards)

        stats = {"new": 0, "learning": 0, "mastered": 0}
        due = []
        for card in cards:
            review = latest.get(card.id)
            if review is None:
                stats["new"] += 1
            elif review.ease_factor > MASTERED_EASE and review.recall_success:
                stats["mastered"] += 1
            else:
                stats["learning"] += 1
            if is_due(review, now):
                due.append((card, review))

        # Unseen cards first, then the ones reviewed longest ago.
        due.sort(key=lambda pair: (pair[1] is not None, pair[1].created_at if pair[1] else now))
        return {
            "flashcards": due[:limit],
            "stats": {**stats, "total": len(cards), "due": len(due)},
        }

    def create_custom(self, user, prompt, answer, subject, topic=None, tags=None, difficulty=None, media_url=None):
        prompt = (prompt or "").strip()
        answer = (answer or "").strip()
        if not prompt or not answer:
            raise InvalidInput("prompt and answer required")
        subject_obj = resolve_subject(subject)
        if subject_obj is None:
            raise InvalidInput(f"Unknown subject: {subject}")
        topic_obj = resolve_topic(topic, subject_obj)
        if topic and topic_obj is None:
            raise InvalidInput(f"Unknown topic: {topic}")
        if tags is not None and not isinstance(tags, list):
            raise InvalidInput("tags must be a list")

        card = Flashcard.objects.create(
            subject=subject_obj,
            topic=topic_obj,
            prompt=prompt,
            answer=answer,
            tags=[str(t) for t in (tags or [])],
            difficulty=parse_choice(difficulty, "difficulty", Difficulty.values),
            media_url=media_url or None,
            created_by=user,
        )
        logger.info("Custom flashcard %s created by %s", card.id, user.pk)
        return card
