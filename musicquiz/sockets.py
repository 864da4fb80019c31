"""Initialisation Socket.IO asynchrone."""

from __future__ import annotations

import socketio

from .config import Config

# Async Server pour ASGI ; logs Socket.IO seulement en DEBUG
sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=Config.cors_origins(),
    logger=Config.LOG_LEVEL.upper() == "DEBUG",
)
