"""ASGI entrypoint for the nutrition pantry API."""

from nutrition_pantry.api.app import create_app
from nutrition_pantry.containers import build_container

app = create_app(build_container())
