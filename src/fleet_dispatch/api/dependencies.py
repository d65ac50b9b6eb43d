"""Request-scoped access to the collaborators stored on the application."""

from __future__ import annotations

from fastapi import Request

from ..persistence.storage import Storage
from ..services.events import Broadcaster


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_broadcaster(request: Request) -> Broadcaster:
    return request.app.state.broadcaster
