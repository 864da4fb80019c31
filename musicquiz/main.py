"""Point d'entrée ASGI : FastAPI monté sous le serveur Socket.IO."""

from __future__ import annotations

import socketio

# Importer events attache les handlers @sio.event au serveur
from . import events  # noqa: F401
from .http import create_http_app
from .sockets import sio

fastapi_app = create_http_app()

# Application ASGI combinée
app = socketio.ASGIApp(sio, fastapi_app)
