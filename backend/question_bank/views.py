from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prep_api.exceptions import InvalidInput
from prep_api.utils import parse_choice, parse_int, parse_int_list, parse_names
from .models import CognitiveLevel, Difficulty, Subject, UserProgress
from .serializers import (
    QuestionAttemptSerializer,
    QuestionReviewSerializer,
    QuestionSerializer,
    SubjectSerializer,
    TopicSerializer,
    UserProgressSerializer,
)
from .services import AdaptiveQuestionSelector, QuestionService, build_filters


class SubjectListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        subjects = Subject.objects.prefetch_related("topics").order_by("name")
        data = []
        for s in subjects:
            row = SubjectSerializer(s).data
            row["topics"] = TopicSerializer(s.topics.order_by("name"), many=True).data
            data.append(row)
        return Response({"ok": True, "subjects": data})


class AdaptiveQuestionsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        params = request.query_params
        count = parse_int(params.get("count"), "count", default=10)
        exclude_ids = parse_int_list(params.get("exclude_ids"), "exclude_ids")
        filters = build_filters(
            subject=params.get("subject"),
            topic=params.get("topic"),
            difficulty=parse_choice(params.get("difficulty"), "difficulty", Difficulty.values),
            cognitive_level=parse_choice(params.get("cognitive_level"), "cognitive_level", CognitiveLevel.values),
            exclude_ids=exclude_ids,
        )
        questions = AdaptiveQuestionSelector().select(request.user, filters, count)
        return Response(
            {
                "ok": True,
                "total": len(questions),
                "questions": QuestionSerializer(questions, many=True).data,
            }
        )


class DiagnosticQuestionsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        names = parse_names(request.query_params.get("subjects"))
        if not names:
            prof = getattr(request.user, "profile", None)
            names = list(prof.selected_subjects.values_list("name", flat=True)) if prof else []
        if not names:
            raise InvalidInput("subjects required")
        groups = QuestionService().diagnostic_questions(names)
        return Response(
            {
                "ok": True,
                "diagnostic": [
                    {"subject": g["subject"], "questions": QuestionSerializer(g["questions"], many=True).data}
                    for g in groups
                ],
            }
        )


class QuestionDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        q = QuestionService().get_question(pk)
        return Response({"ok": True, "question": QuestionSerializer(q).data})


class QuestionAttemptView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        data = request.data
        service = QuestionService()
        attempt = service.submit_attempt(
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


class ProgressView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        qs = UserProgress.objects.filter(user=request.user).select_related("topic", "topic__subject")
        subject = request.query_params.get("subject")
        if subject:
            if not Subject.objects.filter(name__iexact=subject).exists():
                raise InvalidInput(f"Unknown subject: {subject}")
            qs = qs.filter(topic__subject__name__iexact=subject)
        return Response({"ok": True, "progress": UserProgressSerializer(qs, many=True).data})
