import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(blank=True, max_length=120)),
                ("bio", models.TextField(blank=True)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("photo", models.ImageField(blank=True, null=True, upload_to="profile_photos/")),
                ("role", models.CharField(choices=[("participant", "Participant"), ("deputy", "Deputy Secretary"), ("general_secretary", "General Secretary"), ("admin", "Administrator"), ("founder", "Founder")], default="participant", max_length=20)),
                ("school_id", models.PositiveIntegerField(blank=True, help_text="Region / school the profile is bound to.", null=True)),
                ("secretary_type", models.CharField(blank=True, choices=[("general", "General"), ("deputy", "Deputy")], max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="uprofile", to=settings.AUTH_USER_MODEL)),
            ],
            options={"ordering": ["full_name", "id"]},
        ),
    ]
