from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prep_api.exceptions import InvalidInput
from prep_api.utils import parse_int, parse_names
from .services import AnalyticsService, StudyPlanService


class AnalyticsOverviewView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({"ok": True, "analytics": AnalyticsService().overview(request.user)})


class WeakTopicsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        limit = parse_int(request.query_params.get("limit"), "limit", default=5, minimum=1, maximum=50)
        return Response({"ok": True, "weak_topics": AnalyticsService().weak_topics(request.user, limit)})


class SubjectAnalyticsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        names = parse_names(request.query_params.get("subjects"))
        if not names:
            raise InvalidInput("subjects required")
        return Response({"ok": True, "subjects": AnalyticsService().subject_breakdown(request.user, names)})


class StudyPlanTodayView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({"ok": True, "plan": StudyPlanService().daily_plan(request.user)})
