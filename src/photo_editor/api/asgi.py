"""ASGI entrypoint for the photo editor API."""

from photo_editor.api.app import create_app
from photo_editor.containers import build_container

app = create_app(build_container())
