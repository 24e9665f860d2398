from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("accounts", "0001_initial"),
        ("question_bank", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="profile",
            name="selected_subjects",
            field=models.ManyToManyField(blank=True, related_name="selected_by", to="question_bank.subject"),
        ),
    ]
