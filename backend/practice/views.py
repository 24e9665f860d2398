from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prep_api.utils import parse_int
from question_bank.serializers import QuestionAttemptSerializer, QuestionReviewSerializer, QuestionSerializer
from .serializers import PracticeSessionSerializer
from .services import PracticeSessionService


class PracticeSessionListCreateView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        limit = parse_int(request.query_params.get("limit"), "limit", default=10, minimum=1, maximum=50)
        sessions = PracticeSessionService().recent(request.user, limit)
        return Response({"ok": True, "sessions": PracticeSessionSerializer(sessions, many=True).data})

    def post(self, request):
        data = request.data
        session, questions = PracticeSessionService().start(
            request.user,
            subject=data.get("subject"),
            topic=data.get("topic"),
            difficulty=data.get("difficulty"),
            session_type=data.get("session_type"),
            question_count=data.get("question_count"),
        )
        return Response(
            {
                "ok": True,
                "session": PracticeSessionSerializer(session).data,
                "questions": QuestionSerializer(questions, many=True).data,
            }
        )


class PracticeSessionDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, session_id):
        state = PracticeSessionService().get(session_id, request.user)
        return Response(
            {
                "ok": True,
                "session": PracticeSessionSerializer(state["session"]).data,
                "questions": QuestionSerializer(state["questions"], many=True).data,
                "answered_ids": state["answered_ids"],
            }
        )


class PracticeSessionAttemptView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, session_id):
        data = request.data
        attempt = PracticeSessionService().submit_attempt(
            session_id,
            request.user,
            question_id=data.get("question_id"),
            selected_option=data.get("selected_option"),
            time_taken=data.get("time_taken"),
            confidence_level=data.get("confidence_level"),
        )
        return Response(
            {
                "ok": True,
                "attempt": QuestionAttemptSerializer(attempt).data,
                "question": QuestionReviewSerializer(attempt.question).data,
            }
        )


class PracticeSessionCompleteView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, session_id):
        summary = PracticeSessionService().complete(session_id, request.user)
        return Response({"ok": True, "summary": summary})


class PracticeSessionCancelView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, session_id):
        session = PracticeSessionService().cancel(session_id, request.user)
        return Response({"ok": True, "session": PracticeSessionSerializer(session).data})
