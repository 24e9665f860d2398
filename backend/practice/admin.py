from django.contrib import admin
from .models import PracticeSession


@admin.register(PracticeSession)
class PracticeSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "subject", "session_type", "status", "answered_count", "correct_count", "start_time")
    list_filter = ("session_type", "status", "subject")
