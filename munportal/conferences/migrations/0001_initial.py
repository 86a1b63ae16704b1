import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Conference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name_ru", models.CharField(max_length=200)),
                ("name_kk", models.CharField(blank=True, max_length=200)),
                ("name_en", models.CharField(blank=True, max_length=200)),
                ("date_ru", models.CharField(blank=True, max_length=100)),
                ("date_kk", models.CharField(blank=True, max_length=100)),
                ("date_en", models.CharField(blank=True, max_length=100)),
                ("description_ru", models.TextField(blank=True)),
                ("description_kk", models.TextField(blank=True)),
                ("description_en", models.TextField(blank=True)),
                ("conditions_ru", models.TextField(blank=True)),
                ("conditions_kk", models.TextField(blank=True)),
                ("conditions_en", models.TextField(blank=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("time", models.TimeField(blank=True, null=True)),
                ("location", models.CharField(max_length=255)),
                ("city", models.PositiveIntegerField(blank=True, help_text="Region id.", null=True)),
                ("organizer_contact", models.CharField(blank=True, max_length=255)),
                ("registration_fee_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("registration_fee_currency", models.CharField(default="KZT", max_length=3)),
                ("languages", models.JSONField(blank=True, default=list)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("published", "Published"), ("rejected", "Rejected")], default="pending", max_length=10)),
                ("registration_open", models.BooleanField(default=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approves", to="accounts.userprofile")),
                ("creator", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="creates", to="accounts.userprofile")),
            ],
            options={"ordering": ["-created_at", "-id"]},
        ),
        migrations.CreateModel(
            name="Committee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("topic", models.CharField(blank=True, max_length=255)),
                ("capacity", models.PositiveIntegerField(default=15, validators=[django.core.validators.MinValueValidator(1)])),
                ("priority", models.PositiveIntegerField(default=1)),
                ("countries", models.JSONField(blank=True, default=list)),
                ("languages", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("conference", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="committees", to="conferences.conference")),
            ],
            options={"ordering": ["priority", "id"]},
        ),
    ]
