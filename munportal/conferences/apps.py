# conferences/apps.py
import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class ConferencesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "conferences"

    def ready(self):
        """
        Register the Algolia index for published conferences.

        settings.ALGOLIA_ENABLED is already false under pytest / CI or when
        no Algolia app id is configured. Never block app startup if the
        index cannot be registered.
        """
        if not settings.ALGOLIA_ENABLED:
            return
        try:
            from . import algolia_index  # noqa: F401
        except Exception:
            logger.exception("Failed to register the Algolia conference index")
            return
        logger.info("Algolia conference index registered")
