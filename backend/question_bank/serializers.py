from rest_framework import serializers
from .models import Question, QuestionAttempt, Subject, Topic, UserProgress


class SubjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subject
        fields = ["id", "name", "description"]


class TopicSerializer(serializers.ModelSerializer):
    subject = serializers.CharField(source="subject.name", read_only=True)

    class Meta:
        model = Topic
        fields = ["id", "name", "subject", "description"]


class QuestionSerializer(serializers.ModelSerializer):
    """Student-facing view of a question; never exposes the correct option."""

    subject = serializers.CharField(source="subject.name", read_only=True)
    topic = serializers.CharField(source="topic.name", read_only=True, default=None)

    class Meta:
        model = Question
        fields = [
            "id",
            "subject",
            "topic",
            "text",
            "options",
            "difficulty",
            "cognitive_level",
            "is_diagnostic",
            "tags",
            "year_asked",
        ]


class QuestionReviewSerializer(QuestionSerializer):
    class Meta(QuestionSerializer.Meta):
        fields = QuestionSerializer.Meta.fields + ["correct_option_id", "explanation"]


class QuestionAttemptSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuestionAttempt
        fields = [
            "id",
            "question",
            "selected_option",
            "is_correct",
            "time_taken",
            "confidence_level",
            "practice_session",
            "attempted_at",
        ]


class UserProgressSerializer(serializers.ModelSerializer):
    topic = serializers.CharField(source="topic.name", read_only=True)
    subject = serializers.CharField(source="topic.subject.name", read_only=True)

    class Meta:
        model = UserProgress
        fields = [
            "topic",
            "subject",
            "mastery_score",
            "total_questions",
            "correct_answers",
            "total_time_spent",
            "last_reviewed",
        ]
