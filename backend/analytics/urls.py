from django.urls import path
from .views import AnalyticsOverviewView, WeakTopicsView, SubjectAnalyticsView, StudyPlanTodayView

urlpatterns = [
    path("analytics/overview/", AnalyticsOverviewView.as_view(), name="analytics_overview"),
    path("analytics/weak-topics/", WeakTopicsView.as_view(), name="analytics_weak_topics"),
    path("analytics/subjects/", SubjectAnalyticsView.as_view(), name="analytics_subjects"),
    path("study-plan/today/", StudyPlanTodayView.as_view(), name="study_plan_today"),
]
