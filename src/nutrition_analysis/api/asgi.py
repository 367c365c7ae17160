"""ASGI entrypoint for the nutrition analysis API."""

from nutrition_analysis.api.app import create_app
from nutrition_analysis.containers import build_container

app = create_app(build_container())
