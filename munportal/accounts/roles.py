# accounts/roles.py
"""
Roles, capability checks and verification codes.

The capability checks only answer "may this role do X". Templates use them to
hide controls, but every view and service that mutates data calls them again
before acting.
"""

from dataclasses import dataclass
from typing import Optional

from django.conf import settings

PARTICIPANT = "participant"
DEPUTY = "deputy"
GENERAL_SECRETARY = "general_secretary"
ADMIN = "admin"
FOUNDER = "founder"

ROLE_CHOICES = (
    (PARTICIPANT, "Participant"),
    (DEPUTY, "Deputy Secretary"),
    (GENERAL_SECRETARY, "General Secretary"),
    (ADMIN, "Administrator"),
    (FOUNDER, "Founder"),
)

ELEVATED_ROLES = {DEPUTY, GENERAL_SECRETARY, ADMIN, FOUNDER}

SECRETARY_TYPE_CHOICES = (
    ("general", "General"),
    ("deputy", "Deputy"),
)

ROLE_LABELS = {
    FOUNDER: {"ru": "Основатель", "kk": "Негізін қалаушы", "en": "Founder"},
    ADMIN: {"ru": "Администратор", "kk": "Администратор", "en": "Administrator"},
    GENERAL_SECRETARY: {
        "ru": "Генеральный секретарь",
        "kk": "Бас хатшы",
        "en": "General Secretary",
    },
    DEPUTY: {"ru": "Заместитель", "kk": "Орынбасар", "en": "Deputy Secretary"},
    PARTICIPANT: {"ru": "Участник", "kk": "Қатысушы", "en": "Participant"},
}

REGIONS = {
    1: {"ru": "Алматы", "kk": "Алматы", "en": "Almaty"},
    2: {"ru": "Астана", "kk": "Астана", "en": "Astana"},
    3: {"ru": "Шымкент", "kk": "Шымкент", "en": "Shymkent"},
    18: {"ru": "Семей", "kk": "Семей", "en": "Semey"},
    19: {"ru": "Кокшетау", "kk": "Көкшетау", "en": "Kokshetau"},
    20: {"ru": "Талдыкорган", "kk": "Талдықорған", "en": "Taldykorgan"},
    21: {"ru": "Уральск", "kk": "Орал", "en": "Uralsk"},
    22: {"ru": "Усть-Каменогорск", "kk": "Өскемен", "en": "Ust-Kamenogorsk"},
    23: {"ru": "Актобе", "kk": "Ақтөбе", "en": "Aktobe"},
    24: {"ru": "Караганда", "kk": "Қарағанды", "en": "Karaganda"},
    25: {"ru": "Тараз", "kk": "Тараз", "en": "Taraz"},
    26: {"ru": "Кызылорда", "kk": "Қызылорда", "en": "Kyzylorda"},
    27: {"ru": "Павлодар", "kk": "Павлодар", "en": "Pavlodar"},
    28: {"ru": "Атырау", "kk": "Атырау", "en": "Atyrau"},
    29: {"ru": "Костанай", "kk": "Қостанай", "en": "Kostanay"},
    30: {"ru": "Петропавловск", "kk": "Петропавл", "en": "Petropavlovsk"},
    31: {"ru": "Актау", "kk": "Ақтау", "en": "Aktau"},
    32: {"ru": "Туркестан", "kk": "Түркістан", "en": "Turkestan"},
}

FOUNDER_CODE = "Founder1"
ADMIN_PREFIX = "Administrator"
GENERAL_SECRETARY_PREFIX = "General-Secretary"
DEPUTY_SECRETARY_PREFIX = "Deputy-Secretary"

# prefix -> (role, secretary_type)
CODE_PREFIXES = (
    (ADMIN_PREFIX, ADMIN, ""),
    (GENERAL_SECRETARY_PREFIX, GENERAL_SECRETARY, "general"),
    (DEPUTY_SECRETARY_PREFIX, DEPUTY, "deputy"),
)


@dataclass(frozen=True)
class CodeCheck:
    valid: bool
    role: Optional[str] = None
    school_id: Optional[int] = None
    secretary_type: str = ""


INVALID_CODE = CodeCheck(valid=False)


def validate_verification_code(code: str) -> CodeCheck:
    """
    Parse a sign-up verification code.

    "Founder1" grants founder; "<Prefix><N>" grants the prefix's role bound to
    region/school N. N must be all digits and positive, so "Administrator",
    "Administrator-1" and "Administrator0" are all invalid.
    """
    code = (code or "").strip()
    if code == FOUNDER_CODE:
        return CodeCheck(valid=True, role=FOUNDER)

    for prefix, role, secretary_type in CODE_PREFIXES:
        if not code.startswith(prefix):
            continue
        suffix = code[len(prefix):]
        if suffix.isdigit() and suffix.isascii() and int(suffix) > 0:
            return CodeCheck(
                valid=True,
                role=role,
                school_id=int(suffix),
                secretary_type=secretary_type,
            )
        return INVALID_CODE

    return INVALID_CODE


def verify_code_for_role(code: str, selected_role: str) -> CodeCheck:
    """Like validate_verification_code, but a role/code mismatch is invalid too."""
    check = validate_verification_code(code)
    if not check.valid or check.role != selected_role:
        return INVALID_CODE
    return check


def is_founder_email(email) -> bool:
    return bool(email) and email.strip().lower() == settings.FOUNDER_EMAIL


def role_label(role, language="ru"):
    labels = ROLE_LABELS.get(role, ROLE_LABELS[PARTICIPANT])
    return labels.get(language, labels["ru"])


def region_name(school_id, language="ru"):
    region = REGIONS.get(school_id)
    if not region:
        return ""
    return region.get(language, region["ru"])


# --- Capabilities -----------------------------------------------------------


def can_create_conference(role) -> bool:
    return role in (FOUNDER, GENERAL_SECRETARY, DEPUTY)


def can_approve_conference(role) -> bool:
    return role in (FOUNDER, ADMIN)


def can_publish_conference(role) -> bool:
    return role in (FOUNDER, ADMIN)


def can_create_news(role) -> bool:
    return role == FOUNDER


def can_manage_news(role) -> bool:
    return role in (FOUNDER, GENERAL_SECRETARY)


def can_administer_users(role) -> bool:
    return role == FOUNDER


def can_open_inbox(role) -> bool:
    return role in (FOUNDER, ADMIN, GENERAL_SECRETARY, DEPUTY)


def can_manage_conference(profile, conference) -> bool:
    """Founder and admins manage every conference; organizers manage their own."""
    if profile is None:
        return False
    if profile.role in (FOUNDER, ADMIN):
        return True
    return conference.creator_id is not None and conference.creator_id == profile.pk


def can_manage_applications(profile, conference) -> bool:
    """Review, assign and print badges for a conference's delegates."""
    return can_manage_conference(profile, conference)
