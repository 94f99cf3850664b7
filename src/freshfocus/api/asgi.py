"""ASGI entrypoint for the FreshFocus API."""

from freshfocus.api.app import create_app
from freshfocus.containers import build_container

app = create_app(build_container())
