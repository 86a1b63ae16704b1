# conferences/search.py
"""Keep the Algolia conference index in step with the database."""
import logging

from django.conf import settings

logger = logging.getLogger(__name__)


def _record_api():
    """(save_record, delete_record) from algoliasearch_django, imported on first use."""
    from algoliasearch_django import delete_record, save_record

    return save_record, delete_record


def algolia_save(instance):
    """
    Save a conference to Algolia if Algolia is enabled. Unpublished
    conferences are removed instead. Index failures are logged, never raised:
    the database write already succeeded.
    """
    if not getattr(settings, "ALGOLIA_ENABLED", False):
        return
    save_record, delete_record = _record_api()

    try:
        if instance.is_published:
            save_record(instance)
        else:
            delete_record(instance)
    except Exception:
        logger.exception("Algolia sync failed for conference %s", instance.pk)


def algolia_delete(instance):
    """Delete a conference from Algolia if Algolia is enabled."""
    if not getattr(settings, "ALGOLIA_ENABLED", False):
        return
    _, delete_record = _record_api()

    try:
        delete_record(instance)
    except Exception:
        logger.exception("Algolia delete failed for conference %s", instance.pk)
