"""ASGI entrypoint for the snack meter API."""

from snack_meter.api.app import create_app
from snack_meter.containers import build_container

app = create_app(build_container())
