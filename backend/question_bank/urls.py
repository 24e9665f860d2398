from django.urls import path
from .views import (
    SubjectListView,
    AdaptiveQuestionsView,
    DiagnosticQuestionsView,
    QuestionDetailView,
    QuestionAttemptView,
    ProgressView,
)

urlpatterns = [
    path("subjects/", SubjectListView.as_view(), name="subjects"),
    path("questions/adaptive/", AdaptiveQuestionsView.as_view(), name="questions_adaptive"),
    path("questions/diagnostic/", DiagnosticQuestionsView.as_view(), name="questions_diagnostic"),
    path("questions/attempts/", QuestionAttemptView.as_view(), name="question_attempt"),
    path("questions/<int:pk>/", QuestionDetailView.as_view(), name="question_detail"),
    path("progress/", ProgressView.as_view(), name="progress"),
]
