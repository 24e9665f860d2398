import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("question_bank", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MockExam",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "exam_type",
                    models.CharField(
                        choices=[
                            ("full_utme", "Full UTME"),
                            ("subject_specific", "Subject specific"),
                            ("quick", "Quick"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("IN_PROGRESS", "In progress"), ("COMPLETED", "Completed")],
                        default="IN_PROGRESS",
                        max_length=20,
                    ),
                ),
                ("question_count", models.PositiveIntegerField(default=0)),
                ("correct_answers", models.PositiveIntegerField(default=0)),
                ("percentage", models.PositiveIntegerField(default=0)),
                ("time_limit", models.PositiveIntegerField(default=60)),
                ("time_spent", models.PositiveIntegerField(default=0)),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "subjects",
                    models.ManyToManyField(blank=True, related_name="mock_exams", to="question_bank.subject"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mock_exams",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["user", "status"], name="mock_exam_user_status_idx"),
                    models.Index(fields=["user", "completed_at"], name="mock_exam_user_completed_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MockExamQuestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order", models.PositiveIntegerField(default=0)),
                ("user_answer", models.CharField(blank=True, max_length=20, null=True)),
                ("is_correct", models.BooleanField(blank=True, null=True)),
                ("response_time", models.PositiveIntegerField(default=0)),
                (
                    "exam",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="mock_exams.mockexam",
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mock_exam_rows",
                        to="question_bank.question",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "id"],
                "unique_together": {("exam", "question")},
            },
        ),
    ]
