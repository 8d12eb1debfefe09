"""ASGI entrypoint for the field service tracker API."""

from field_service_tracker.api.app import create_app
from field_service_tracker.containers import build_container

app = create_app(build_container())
