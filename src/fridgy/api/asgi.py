"""ASGI entrypoint for the Fridgy API."""

from fridgy.api.app import create_app
from fridgy.containers import build_container

app = create_app(build_container())
