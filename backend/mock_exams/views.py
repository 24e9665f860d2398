from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prep_api.utils import parse_int
from question_bank.serializers import QuestionSerializer
from .services import MockExamService


def _exam_payload(exam, questions):
    return {
        "id": str(exam.id),
        "exam_type": exam.exam_type,
        "status": exam.status,
        "subjects": [s.name for s in exam.subjects.all()],
        "question_count": exam.question_count,
        "time_limit": exam.time_limit,
        "start_time": exam.start_time,
        "questions": QuestionSerializer(questions, many=True).data,
    }


class MockExamListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({"ok": True, "mock_exams": MockExamService().available(request.user)})


class MockExamRecentScoresView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        limit = parse_int(request.query_params.get("limit"), "limit", default=10, minimum=1, maximum=50)
        return Response({"ok": True, "scores": MockExamService().recent_scores(request.user, limit)})


class MockExamStartView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        data = request.data
        exam = MockExamService().create(
            request.user,
            exam_type=data.get("exam_type"),
            subjects=data.get("subjects"),
            time_limit=data.get("time_limit"),
            question_count=data.get("question_count"),
        )
        questions = [row.question for row in exam.questions.all()]
        return Response({"ok": True, "exam": _exam_payload(exam, questions)})


class MockExamSubmitView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        data = request.data
        results = MockExamService().grade(
            data.get("exam_id"),
            request.user,
            data.get("answers"),
            time_spent=data.get("time_spent"),
        )
        return Response({"ok": True, "results": results})


class MockExamResultsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        return Response({"ok": True, "results": MockExamService().results(exam_id, request.user)})


class MockExamHistoryView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        page = parse_int(request.query_params.get("page"), "page", default=1, minimum=1)
        limit = parse_int(request.query_params.get("limit"), "limit", default=20, minimum=1, maximum=100)
        history = MockExamService().history(request.user, page, limit)
        return Response({"ok": True, "history": history["exams"], "pagination": history["pagination"]})


class MockExamResumeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        state = MockExamService().resume(exam_id, request.user)
        payload = _exam_payload(state["exam"], state["questions"])
        payload["time_remaining"] = state["time_remaining"]
        payload["answers"] = state["answers"]
        return Response({"ok": True, "exam": payload})
