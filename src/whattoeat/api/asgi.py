"""ASGI entrypoint for the What To Eat API."""

from whattoeat.api.app import create_app
from whattoeat.containers import build_container

app = create_app(build_container())
