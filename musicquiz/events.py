"""Gestion des événements Socket.IO (thèmes, réglages, partie, réponses)."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .exceptions import InvalidPayload, QuizError
from .sockets import sio
from .state import state
from .timer import emit_game_over, reset_timer, start_timer, stop_timer

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[None]]


def reports_errors(handler: Handler) -> Handler:
    """Renvoie les erreurs de payload au client émetteur sous forme d'événement `error`."""

    @functools.wraps(handler)
    async def wrapper(sid: str, *args: Any) -> None:
        try:
            await handler(sid, *args)
        except QuizError as e:
            logger.warning("Événement %s refusé: %s", handler.__name__, e.message)
            await sio.emit("error", {"message": e.message}, to=sid)

    return wrapper


async def broadcast_state(to_sid: Optional[str] = None) -> None:
    await sio.emit("state", state.session.snapshot(), to=to_sid)


async def play_current_song() -> None:
    session = state.session
    song = session.current_song
    await sio.emit("track", song.to_dict() if song else None)
    await sio.emit(
        "playlist_info",
        {
            "current_index": session.current_song_index,
            "total_tracks": len(session.playlist),
            "remaining_tracks": len(session.playlist) - session.current_song_index,
        },
    )
    await sio.emit("isPlaying", session.is_playing)
    await sio.emit("music_control", {"action": "play"})
    await start_timer()


def _theme_ids(data: Any) -> List[int]:
    if not isinstance(data, list):
        raise InvalidPayload("selectedThemeIds")
    try:
        return [int(v) for v in data]
    except (TypeError, ValueError) as e:
        raise InvalidPayload("selectedThemeIds") from e


@sio.event
async def get_state(sid: str) -> None:
    await broadcast_state(to_sid=sid)


@sio.event
@reports_errors
async def load_themes(_sid: str, query: Optional[str] = None) -> None:
    """Charge les thèmes du classement, ou ceux d'une recherche si `query` est fourni."""
    if query is not None and not isinstance(query, str):
        raise InvalidPayload("query")
    catalog = state.catalog
    if query and query.strip():
        themes = await asyncio.to_thread(catalog.search_playlists, query.strip())
    else:
        themes = await asyncio.to_thread(catalog.get_chart_playlists)
    state.session.set_available_themes(themes)
    await sio.emit("themes", [t.to_dict() for t in themes])


@sio.event
@reports_errors
async def select_themes(_sid: str, theme_ids: Any) -> None:
    ids = set(_theme_ids(theme_ids))
    session = state.session
    session.set_selected_themes(t for t in session.available_themes if t.id in ids)
    await broadcast_state()


@sio.event
@reports_errors
async def update_settings(_sid: str, data: Any) -> None:
    if not isinstance(data, dict):
        raise InvalidPayload(message="Réglages attendus sous forme d'objet")
    changes: Dict[str, Any] = dict(data)
    if "selectedThemeIds" in changes:
        changes["selectedThemeIds"] = _theme_ids(changes["selectedThemeIds"])
    if "maxPoints" in changes:
        value = changes["maxPoints"]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidPayload("maxPoints")
    try:
        state.session.update_settings(changes)
    except (TypeError, ValueError) as e:
        raise InvalidPayload(message=f"Réglages invalides: {e}") from e
    await broadcast_state()


@sio.event
@reports_errors
async def start_game(_sid: str) -> None:
    session = state.session
    await stop_timer()
    theme_ids = sorted(session.settings.selected_theme_ids)
    songs = await asyncio.to_thread(state.catalog.build_playlist, theme_ids)
    session.set_playlist(songs)
    session.start_game()
    await broadcast_state()
    if session.current_song is None:
        # Aucun thème ou aucun titre jouable : partie terminée d'emblée
        logger.warning("Playlist vide pour les thèmes %s", theme_ids)
        await emit_game_over()
        return
    await play_current_song()


@sio.event
@reports_errors
async def answer(sid: str, text: Any) -> None:
    if not isinstance(text, str):
        raise InvalidPayload("answer")
    session = state.session
    correct = session.submit_answer(text)
    await sio.emit("answer_result", {"correct": correct, "pendingScore": session.pending_score}, to=sid)
    await broadcast_state()


@sio.on("next_song")
async def on_next_song(_sid: str) -> None:
    """Clôt le morceau courant s'il est encore ouvert, puis passe au suivant."""
    session = state.session
    await stop_timer()
    if session.current_song is not None and not session.time_is_up:
        session.time_up()
        await sio.emit("time_up", session.results[-1].to_dict())
    if session.is_game_over:
        await broadcast_state()
        await emit_game_over()
        return
    session.advance()
    await broadcast_state()
    if session.current_song is not None:
        await play_current_song()


@sio.event
async def toggle_mute(_sid: str) -> None:
    state.session.toggle_mute()
    await sio.emit("isMuted", state.session.is_muted)


@sio.event
async def reset_game(_sid: Optional[str] = None) -> None:
    """Reset complet de la partie (réglages et thèmes conservés)."""
    state.session.reset_game()
    await reset_timer()
    await sio.emit("isPlaying", False)
    await sio.emit("music_control", {"action": "stop"})
    await broadcast_state()

