from rest_framework import serializers
from .models import PracticeSession


class PracticeSessionSerializer(serializers.ModelSerializer):
    subject = serializers.CharField(source="subject.name", read_only=True)
    topic = serializers.CharField(source="topic.name", read_only=True, default=None)

    class Meta:
        model = PracticeSession
        fields = [
            "id",
            "subject",
            "topic",
            "difficulty",
            "session_type",
            "status",
            "question_count",
            "answered_count",
            "correct_count",
            "start_time",
            "end_time",
        ]
