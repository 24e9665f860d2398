from django.urls import path
from .views import (
    PracticeSessionListCreateView,
    PracticeSessionDetailView,
    PracticeSessionAttemptView,
    PracticeSessionCompleteView,
    PracticeSessionCancelView,
)

urlpatterns = [
    path("practice/sessions/", PracticeSessionListCreateView.as_view(), name="practice_sessions"),
    path("practice/sessions/<uuid:session_id>/", PracticeSessionDetailView.as_view(), name="practice_session_detail"),
    path(
        "practice/sessions/<uuid:session_id>/attempts/",
        PracticeSessionAttemptView.as_view(),
        name="practice_session_attempt",
    ),
    path(
        "practice/sessions/<uuid:session_id>/complete/",
        PracticeSessionCompleteView.as_view(),
        name="practice_session_complete",
    ),
    path(
        "practice/sessions/<uuid:session_id>/cancel/",
        PracticeSessionCancelView.as_view(),
        name="practice_session_cancel",
    ),
]
