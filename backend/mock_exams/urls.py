from django.urls import path
from .views import (
    MockExamListView,
    MockExamRecentScoresView,
    MockExamStartView,
    MockExamSubmitView,
    MockExamResultsView,
    MockExamHistoryView,
    MockExamResumeView,
)

urlpatterns = [
    path("mock-exams/", MockExamListView.as_view(), name="mock_exams"),
    path("mock-exams/recent-scores/", MockExamRecentScoresView.as_view(), name="mock_exam_recent_scores"),
    path("mock-exams/start/", MockExamStartView.as_view(), name="mock_exam_start"),
    path("mock-exams/submit/", MockExamSubmitView.as_view(), name="mock_exam_submit"),
    path("mock-exams/history/", MockExamHistoryView.as_view(), name="mock_exam_history"),
    path("mock-exams/<uuid:exam_id>/results/", MockExamResultsView.as_view(), name="mock_exam_results"),
    path("mock-exams/<uuid:exam_id>/resume/", MockExamResumeView.as_view(), name="mock_exam_resume"),
]
