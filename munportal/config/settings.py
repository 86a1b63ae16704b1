"""
Django settings for the MUN Portal project.

Local runs use SQLite and the filesystem. When ENVIRONMENT is "production" or
"development" (Elastic Beanstalk), the database credentials are read from AWS
Secrets Manager and uploaded media goes to S3.
"""

import os
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
DEPLOYED = ENVIRONMENT in ["production", "development"]

SECRET_KEY = os.getenv(
    "DJANGO_SECRET_KEY", "django-insecure-munportal-local-development-key"
)
DEBUG = os.getenv("DJANGO_DEBUG", "0" if DEPLOYED else "1") == "1"
ALLOWED_HOSTS = [
    h.strip()
    for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if h.strip()
]

# Running under pytest / manage.py test / CI: never talk to Algolia.
TESTING = (
    "pytest" in " ".join(sys.argv).lower()
    or "test" in sys.argv[1:2]
    or os.getenv("CI", "").lower() == "true"
)

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "storages",
    "accounts",
    "conferences",
    "applications",
    "news",
    "portal",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.template.context_processors.i18n",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "accounts.context_processors.current_profile",
                "config.context_processors.algolia_settings",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"


# --- Database --------------------------------------------------------------

if DEPLOYED and os.getenv("DB_SECRET_NAME"):
    from config.secrets import get_secret

    _db = get_secret(os.getenv("DB_SECRET_NAME"), os.getenv("AWS_REGION", "us-east-1"))
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": _db.get("dbname", "munportal"),
            "USER": _db["username"],
            "PASSWORD": _db["password"],
            "HOST": _db["host"],
            "PORT": str(_db.get("port", 5432)),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# --- Auth ------------------------------------------------------------------

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 6},
    },
    {"NAME": "accounts.validators.LetterAndDigitPasswordValidator"},
]

LOGIN_URL = "accounts:login"
LOGIN_REDIRECT_URL = "accounts:dashboard"
LOGOUT_REDIRECT_URL = "/"

# The founder account is identified by its e-mail address.
FOUNDER_EMAIL = os.getenv("FOUNDER_EMAIL", "founder@munportal.org").lower()


# --- i18n ------------------------------------------------------------------

LANGUAGE_CODE = "ru"
LANGUAGES = [
    ("ru", "Русский"),
    ("kk", "Қазақша"),
    ("en", "English"),
]
TIME_ZONE = "Asia/Almaty"
USE_I18N = True
USE_TZ = True


# --- Static & media --------------------------------------------------------

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
MEDIA_URL = os.getenv("MEDIA_URL", "/media/")
MEDIA_ROOT = BASE_DIR / "media"

if DEPLOYED:
    AWS_STORAGE_BUCKET_NAME = os.getenv("AWS_MEDIA_BUCKET_NAME")
    AWS_QUERYSTRING_AUTH = os.getenv("AWS_QUERYSTRING_AUTH", "True") == "True"
    STORAGES = {
        "default": {"BACKEND": "storages.backends.s3.S3Storage"},
        "staticfiles": {
            "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"
        },
    }
else:
    STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
        "staticfiles": {
            "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"
        },
    }

PROFILE_PHOTO_MAX_BYTES = 5 * 1024 * 1024


# --- E-mail ----------------------------------------------------------------

EMAIL_BACKEND = os.getenv(
    "EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend"
)
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "noreply@munportal.org")


# --- Algolia (conference search) -------------------------------------------

ALGOLIA = {
    "APPLICATION_ID": os.getenv("ALGOLIA_APP_ID", ""),
    "API_KEY": os.getenv("ALGOLIA_API_KEY", ""),
    "SEARCH_KEY": os.getenv("ALGOLIA_SEARCH_KEY", ""),
    "INDEX_PREFIX": os.getenv("ALGOLIA_INDEX_PREFIX", "munportal"),
}
ALGOLIA_ENABLED = (
    not TESTING
    and not os.getenv("DJANGO_DISABLE_ALGOLIA")
    and bool(ALGOLIA["APPLICATION_ID"])
)
if ALGOLIA_ENABLED:
    INSTALLED_APPS.append("algoliasearch_django")


# --- Logging ---------------------------------------------------------------

LOG_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "munportal": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "munportal",
        },
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        **{
            name: {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False}
            for name in ("accounts", "conferences", "applications", "news", "portal", "config")
        },
    },
}
