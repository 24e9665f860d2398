from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import (
    MeView,
    SubjectSelectionView,
    GoalScoreUpdateView,
    EmailOrUsernameTokenObtainPairView,
)

urlpatterns = [
    path("token/", EmailOrUsernameTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("me/", MeView.as_view(), name="me"),
    path("subjects/", SubjectSelectionView.as_view(), name="subject_selection"),
    path("goal-score/", GoalScoreUpdateView.as_view(), name="goal_score_update"),
]
