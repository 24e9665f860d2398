from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView
from django.db import transaction

from prep_api.exceptions import InvalidInput
from prep_api.utils import parse_int, parse_names
from question_bank.models import Subject
from .serializers import EmailOrUsernameTokenObtainPairSerializer, ProfileSerializer

GOAL_SCORE_MIN = 0
GOAL_SCORE_MAX = 400


class EmailOrUsernameTokenObtainPairView(TokenObtainPairView):
    serializer_class = EmailOrUsernameTokenObtainPairSerializer


class MeView(generics.RetrieveAPIView):
    """Return the current user's profile."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ProfileSerializer

    def get_object(self):
        return self.request.user.profile


class SubjectSelectionView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @transaction.atomic
    def put(self, request):
        names = parse_names(request.data.get("subjects"))
        if not names:
            raise InvalidInput("subjects required")

        subjects = []
        for name in names:
            subject = Subject.objects.filter(name__iexact=name).first()
            if subject is None:
                raise InvalidInput(f"Unknown subject: {name}")
            subjects.append(subject)

        prof = request.user.profile
        prof.selected_subjects.set(subjects)
        return Response({"ok": True, "profile": ProfileSerializer(prof).data})


class GoalScoreUpdateView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request):
        goal = parse_int(
            request.data.get("goal_score"),
            "goal_score",
            minimum=GOAL_SCORE_MIN,
            maximum=GOAL_SCORE_MAX,
        )
        prof = request.user.profile
        prof.goal_score = goal
        prof.save(update_fields=["goal_score"])
        return Response({"ok": True, "goal_score": prof.goal_score})
