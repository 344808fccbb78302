"""URL configuration for the Turnstile project."""

from django.urls import path

from api.api import api

urlpatterns = [
    path("api/", api.urls),
]
