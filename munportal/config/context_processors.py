from django.conf import settings


def algolia_settings(request):
    """Search-only Algolia credentials for the conference search box."""
    return {
        "ALGOLIA_ENABLED": settings.ALGOLIA_ENABLED,
        "ALGOLIA_APP_ID": settings.ALGOLIA.get("APPLICATION_ID", ""),
        "ALGOLIA_SEARCH_KEY": settings.ALGOLIA.get("SEARCH_KEY", ""),
        "ALGOLIA_INDEX": f"{settings.ALGOLIA.get('INDEX_PREFIX', 'munportal')}_conferences",
    }
