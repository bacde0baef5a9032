"""ASGI entrypoint for the fuel engine API."""

from fuel_engine.api.app import create_app
from fuel_engine.containers import build_container

app = create_app(build_container())
