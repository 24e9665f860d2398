from django.contrib import admin
from .models import DailyActivity, Streak


@admin.register(Streak)
class StreakAdmin(admin.ModelAdmin):
    list_display = ("user", "count", "last_active", "updated_at")


@admin.register(DailyActivity)
class DailyActivityAdmin(admin.ModelAdmin):
    list_display = ("user", "date", "questions_answered", "correct_answers", "time_spent")
    list_filter = ("date",)
