from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prep_api.utils import parse_int
from .serializers import FlashcardReviewSerializer, FlashcardSerializer, due_card_payload
from .services import FlashcardService


class DueFlashcardsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        limit = parse_int(request.query_params.get("limit"), "limit", default=20, minimum=1, maximum=100)
        result = FlashcardService().due_for_review(request.user, limit=limit)
        return Response(
            {
                "ok": True,
                "flashcards": [due_card_payload(card, review) for card, review in result["flashcards"]],
                "stats": result["stats"],
            }
        )


class FlashcardReviewView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        review = FlashcardService().review(
            request.user,
            pk,
            request.data.get("response"),
            request.data.get("time_spent"),
        )
        return Response({"ok": True, "review": FlashcardReviewSerializer(review).data})


class FlashcardCreateView(APIView):
    """Students can add their own cards to any known subject."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        data = request.data
        card = FlashcardService().create_custom(
            request.user,
            prompt=data.get("prompt"),
            answer=data.get("answer"),
            subject=data.get("subject"),
            topic=data.get("topic"),
            tags=data.get("tags"),
            difficulty=data.get("difficulty"),
            media_url=data.get("media_url"),
        )
        return Response({"ok": True, "flashcard": FlashcardSerializer(card).data})
