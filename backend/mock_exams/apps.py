from django.apps import AppConfig


class MockExamsConfig(AppConfig):
    name = "mock_exams"
