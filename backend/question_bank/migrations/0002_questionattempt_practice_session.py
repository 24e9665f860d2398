import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("question_bank", "0001_initial"),
        ("practice", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="questionattempt",
            name="practice_session",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="attempts",
                to="practice.practicesession",
            ),
        ),
    ]
