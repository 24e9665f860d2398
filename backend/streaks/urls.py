from django.urls import path
from .views import StreakStatusView

urlpatterns = [
    path("streak/status/", StreakStatusView.as_view(), name="streak_status"),
]
