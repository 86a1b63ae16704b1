# accounts/validators.py
import re

from django.core.exceptions import ValidationError

PHONE_RE = re.compile(r"^(\+7|8)?[0-9]{10,11}$")


def normalize_phone(value):
    return re.sub(r"[\s\-()]", "", value or "")


def validate_phone(value):
    """Kazakhstan-style numbers: optional +7 / 8 prefix, then 10-11 digits."""
    if not PHONE_RE.match(normalize_phone(value)):
        raise ValidationError("Enter a valid phone number.", code="invalid_phone")


class LetterAndDigitPasswordValidator:
    """Passwords must mix at least one letter and one digit."""

    def validate(self, password, user=None):
        if not re.search(r"[A-Za-z]", password) or not re.search(r"[0-9]", password):
            raise ValidationError(
                "Your password must contain at least one letter and one digit.",
                code="password_weak",
            )

    def get_help_text(self):
        return "Your password must contain at least one letter and one digit."
