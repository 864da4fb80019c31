"""Endpoints HTTP (FastAPI) : lecture seule de l'état de partie et des thèmes."""

from __future__ import annotations

import asyncio
from typing import Any, Dict

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from .state import state


def create_http_app() -> FastAPI:
    app = FastAPI(title="musicquiz")

    @app.get("/")
    async def root() -> Dict[str, Any]:
        return {"name": "musicquiz", "socketio_path": "/socket.io"}

    @app.get("/api/themes")
    async def get_themes() -> JSONResponse:
        themes = await asyncio.to_thread(state.catalog.get_chart_playlists)
        return JSONResponse([t.to_dict() for t in themes])

    @app.get("/api/themes/search")
    async def search_themes(q: str = Query("popular", min_length=1)) -> JSONResponse:
        themes = await asyncio.to_thread(state.catalog.search_playlists, q)
        return JSONResponse([t.to_dict() for t in themes])

    @app.get("/api/state")
    async def get_state() -> JSONResponse:
        return JSONResponse(state.session.snapshot())

    @app.get("/api/results")
    async def get_results() -> JSONResponse:
        session = state.session
        return JSONResponse(
            {
                "totalScore": session.total_score,
                "isGameOver": session.is_game_over,
                "results": [r.to_dict() for r in session.results],
            }
        )

    return app
