import os
import random
from contextlib import nullcontext
from datetime import date, time, timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts import roles
from applications.models import DelegateApplication
from conferences.models import Committee, Conference

# ---------------- Seed data pools ----------------
CONFERENCES = [
    ("Алматы MUN", "Almaty MUN", 1, "KBTU, Almaty"),
    ("Астана MUN", "Astana MUN", 2, "Nazarbayev University, Astana"),
    ("Шымкент MUN", "Shymkent MUN", 3, "School-Lyceum 8, Shymkent"),
    ("Караганда MUN", "Karaganda MUN", 24, "NIS Karaganda"),
    ("Актобе MUN", "Aktobe MUN", 23, "Aktobe Regional University"),
]

COMMITTEES = [
    ("Security Council", "Situation in the Middle East", 5, ["USA", "UK", "France", "Russia", "China"]),
    ("General Assembly", "Climate finance", 12, [
        "Kazakhstan", "Germany", "Japan", "Brazil", "India", "Canada",
        "Kenya", "Mexico", "Norway", "Egypt", "Turkey", "Australia",
    ]),
    ("UNESCO", "Access to education", 8, [
        "Italy", "Spain", "Chile", "Indonesia", "Nigeria", "Vietnam", "Poland", "Peru",
    ]),
    ("Human Rights Council", "Digital privacy", 6, [
        "Sweden", "Argentina", "South Africa", "Pakistan", "Qatar", "Ukraine",
    ]),
]

FIRST_NAMES = ["Aruzhan", "Dias", "Alikhan", "Amina", "Timur", "Dana", "Nursultan", "Aigerim"]
LAST_NAMES = ["Sadykova", "Omarov", "Bekov", "Zhakupova", "Ismailov", "Tulegenova"]


def get_or_create_seed_founder():
    """
    Return a deterministic founder profile for seeded conferences.

    Uses settings.FOUNDER_EMAIL with Seed@12345 by default; the password can
    be overridden via SEED_FOUNDER_PASS.
    """
    User = get_user_model()
    email = settings.FOUNDER_EMAIL
    password = os.getenv("SEED_FOUNDER_PASS", "Seed@12345")

    user, _ = User.objects.get_or_create(
        username=email,
        defaults={"email": email, "is_staff": True},
    )
    if not user.check_password(password):
        user.set_password(password)
        user.save(update_fields=["password"])

    profile = user.uprofile
    if profile.role != roles.FOUNDER:
        profile.role = roles.FOUNDER
        profile.full_name = profile.full_name or "Seed Founder"
        profile.save(update_fields=["role", "full_name", "updated_at"])
    return profile


def create_delegates(count):
    """Create (or reuse) ``count`` participant accounts delegate1..N."""
    User = get_user_model()
    profiles = []
    for i in range(1, count + 1):
        email = f"delegate{i}@example.com"
        user, created = User.objects.get_or_create(username=email, defaults={"email": email})
        if created:
            user.set_password("Delegate1")
            user.save(update_fields=["password"])
            user.uprofile.full_name = f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"
            user.uprofile.save(update_fields=["full_name", "updated_at"])
        profiles.append(user.uprofile)
    return profiles


def disable_indexing():
    if settings.ALGOLIA_ENABLED:
        from algoliasearch_django.decorators import disable_auto_indexing

        return disable_auto_indexing()
    return nullcontext()


class Command(BaseCommand):
    help = "Seed the database with demo conferences, committees and delegate applications."

    def add_arguments(self, parser):
        parser.add_argument(
            "--count",
            type=int,
            default=len(CONFERENCES),
            help=f"Number of conferences to create (default {len(CONFERENCES)}).",
        )
        parser.add_argument(
            "--delegates",
            type=int,
            default=20,
            help="Number of delegate accounts applying to each conference (default 20).",
        )
        parser.add_argument(
            "--start-days",
            type=int,
            default=7,
            help="Start scheduling conferences N days from today.",
        )

    @transaction.atomic
    def handle(self, *args, **opts):
        count = max(0, opts["count"])
        start_days = opts["start_days"]

        founder = get_or_create_seed_founder()
        self.stdout.write(f"Using founder: {founder.email}")

        delegates = create_delegates(max(0, opts["delegates"]))
        created = []
        total_applications = 0

        with disable_indexing():
            for i in range(count):
                name_ru, name_en, region_id, location = CONFERENCES[i % len(CONFERENCES)]
                start = date.today() + timedelta(days=start_days + 14 * i)
                conference = Conference.objects.create(
                    creator=founder,
                    name_ru=name_ru,
                    name_kk=name_ru,
                    name_en=name_en,
                    date_ru=start.strftime("%d.%m.%Y"),
                    date_kk=start.strftime("%d.%m.%Y"),
                    date_en=start.strftime("%B %d, %Y"),
                    description_en=f"{name_en} brings delegates from across the region together.",
                    description_ru=f"{name_ru} собирает делегатов со всего региона.",
                    start_date=start,
                    time=time(hour=10),
                    location=location,
                    city=region_id,
                    registration_fee_amount=random.choice([0, 3000, 5000]),
                    languages=["ru", "en"],
                    status=Conference.PUBLISHED,
                    approved_by=founder,
                )
                committees = [
                    Committee.objects.create(
                        conference=conference,
                        name=name,
                        topic=topic,
                        capacity=capacity,
                        priority=priority,
                        countries=countries,
                        languages=["en"],
                    )
                    for priority, (name, topic, capacity, countries) in enumerate(COMMITTEES, start=1)
                ]
                created.append(conference)

                for profile in delegates:
                    first, second, third = random.sample(committees, 3)
                    DelegateApplication.objects.create(
                        conference=conference,
                        applicant=profile,
                        full_name=profile.display_name,
                        email=profile.email,
                        primary_committee=first,
                        secondary_committee=second,
                        tertiary_committee=third,
                        status=random.choice(
                            [DelegateApplication.APPROVED] * 3 + [DelegateApplication.PENDING]
                        ),
                    )
                    total_applications += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {len(created)} conferences with {len(COMMITTEES)} committees each "
                f"and {total_applications} applications."
            )
        )
