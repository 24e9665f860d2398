from django.contrib import admin
from .models import MockExam, MockExamQuestion


class MockExamQuestionInline(admin.TabularInline):
    model = MockExamQuestion
    extra = 0


@admin.register(MockExam)
class MockExamAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "exam_type", "status", "question_count", "percentage", "completed_at")
    list_filter = ("exam_type", "status")
    inlines = [MockExamQuestionInline]
