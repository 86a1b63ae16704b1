# portal/i18n.py
from django.utils.translation import get_language

SUPPORTED_LANGUAGES = ("ru", "kk", "en")
FALLBACK_LANGUAGE = "ru"


def current_language():
    lang = (get_language() or FALLBACK_LANGUAGE).split("-")[0]
    return lang if lang in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE


class MultilingualMixin:
    """
    For models that store one column per language (name_ru, name_kk, name_en).
    ``localized("name", "kk")`` returns the Kazakh value, falling back to
    Russian and then to any non-empty translation.
    """

    def localized(self, field, language=None):
        language = language or current_language()
        if language not in SUPPORTED_LANGUAGES:
            language = FALLBACK_LANGUAGE
        value = getattr(self, f"{field}_{language}", "")
        if value:
            return value
        for lang in (FALLBACK_LANGUAGE,) + SUPPORTED_LANGUAGES:
            value = getattr(self, f"{field}_{lang}", "")
            if value:
                return value
        return ""
