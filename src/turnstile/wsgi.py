"""WSGI config for the Turnstile project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "turnstile.settings")

application = get_wsgi_application()
