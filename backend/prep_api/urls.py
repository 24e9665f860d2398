"""
URL configuration for the prep_api project.

Every app mounts its routes under /api/; authentication lives under /api/auth/.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/", include("accounts.urls")),
    path("api/", include("question_bank.urls")),
    path("api/", include("flashcards.urls")),
    path("api/", include("streaks.urls")),
    path("api/", include("analytics.urls")),
    path("api/", include("mock_exams.urls")),
    path("api/", include("practice.urls")),
]
