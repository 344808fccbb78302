"""Base Django settings for Turnstile."""

from pathlib import Path

from decouple import Csv, config

BASE_DIR = Path(__file__).resolve().parent.parent.parent

VERSION = "1.0.0"
SITE_NAME = config("SITE_NAME", default="Turnstile")

SECRET_KEY = config("SECRET_KEY", default="django-insecure-turnstile-dev-key-change-me")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())

SERVICE_URL = config("SERVICE_URL", default="http://localhost:8000")
SERVICE_DESCRIPTION = config("SERVICE_DESCRIPTION", default="Local")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "ninja_extra",
    "ninja_jwt",
    "common",
    "accounts",
    "events",
    "checkin",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "common.middleware.StructlogContextMiddleware",
]

ROOT_URLCONF = "turnstile.urls"
WSGI_APPLICATION = "turnstile.wsgi.application"

AUTH_USER_MODEL = "accounts.Attendee"

DB_ENGINE = config("DB_ENGINE", default="django.db.backends.sqlite3")

DATABASES = {
    "default": {
        "ENGINE": DB_ENGINE,
        "NAME": config("DB_NAME", default=str(BASE_DIR / "turnstile.sqlite3")),
        "USER": config("DB_USER", default=""),
        "PASSWORD": config("DB_PASSWORD", default=""),
        "HOST": config("DB_HOST", default=""),
        "PORT": config("DB_PORT", default=""),
        "ATOMIC_REQUESTS": False,
    }
}

if DB_ENGINE.endswith("sqlite3"):
    # SQLite ignores select_for_update. Writers take the lock as the transaction opens and wait for it.
    DATABASES["default"]["OPTIONS"] = {
        "timeout": config("DB_SQLITE_TIMEOUT", default=20, cast=int),
        "transaction_mode": "IMMEDIATE",
    }
    # A file database, so threads in the test suite share one store.
    DATABASES["default"]["TEST"] = {"NAME": str(BASE_DIR / "test_turnstile.sqlite3")}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 6}},
]

LANGUAGE_CODE = "en"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
