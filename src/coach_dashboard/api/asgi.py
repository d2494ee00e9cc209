"""ASGI entrypoint for the coach dashboard API."""

from coach_dashboard.api.app import create_app
from coach_dashboard.containers import build_container

app = create_app(build_container())
