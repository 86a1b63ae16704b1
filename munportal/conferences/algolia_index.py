# conferences/algolia_index.py
from algoliasearch_django import AlgoliaIndex
from algoliasearch_django.decorators import register

from .models import Conference


@register(Conference)
class ConferenceIndex(AlgoliaIndex):
    fields = (
        "name_ru",
        "name_kk",
        "name_en",
        "description_ru",
        "description_en",
        "location",
        "start_date_str",
        "registration_open",
    )
    settings = {
        "searchableAttributes": ["name_ru", "name_kk", "name_en", "location"],
        "attributesForFaceting": ["registration_open"],
    }
    # only published conferences are searchable
    should_index = "is_published"

    index_name = "conferences"
