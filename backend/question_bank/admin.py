from django.contrib import admin
from .models import Subject, Topic, Question, UserProgress


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(Topic)
class TopicAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "subject")
    list_filter = ("subject",)
    search_fields = ("name",)


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "subject", "topic", "difficulty", "cognitive_level", "is_diagnostic", "status")
    list_filter = ("subject", "difficulty", "cognitive_level", "is_diagnostic", "status")
    search_fields = ("text",)


@admin.register(UserProgress)
class UserProgressAdmin(admin.ModelAdmin):
    list_display = ("user", "topic", "mastery_score", "total_questions", "correct_answers")
