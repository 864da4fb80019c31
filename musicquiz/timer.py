"""Compte à rebours du morceau courant (start/stop/reset) et diffusion Socket.IO.

La session ne possède pas d'horloge : cette boucle l'avance d'une seconde à
la fois via `GameSession.tick()`, qui clôt le cycle à 0.
"""

from __future__ import annotations

import asyncio
import logging

from .sockets import sio
from .state import state

logger = logging.getLogger(__name__)


async def start_timer() -> None:
    await stop_timer()
    session = state.session
    await sio.emit("timer", {"timer": session.timer})

    async def timer_loop() -> None:
        while session.is_playing:
            await asyncio.sleep(1)
            closed = session.tick()
            await sio.emit("timer", {"timer": session.timer})
            if closed:
                await handle_timer_expired()
                break

    state.timer_task = asyncio.create_task(timer_loop())


async def stop_timer() -> None:
    if state.timer_task and not state.timer_task.done():
        state.timer_task.cancel()
        try:
            await state.timer_task
        except asyncio.CancelledError:
            pass
    state.timer_task = None


async def reset_timer() -> None:
    """Arrête le compte à rebours et diffuse la valeur courante."""
    await stop_timer()
    await sio.emit("timer", {"timer": state.session.timer})


async def handle_timer_expired() -> None:
    """Arrêt de la musique et diffusion du résultat quand le compte à rebours atteint 0."""
    session = state.session
    result = session.results[-1] if session.results else None
    logger.debug("Temps écoulé (morceau %d)", session.current_song_index)
    await sio.emit("isPlaying", session.is_playing)
    await sio.emit("music_control", {"action": "pause"})
    await sio.emit("time_up", result.to_dict() if result else None)
    await sio.emit("state", session.snapshot())
    if session.is_game_over:
        await emit_game_over()


async def emit_game_over() -> None:
    session = state.session
    logger.info("Partie terminée: %d points", session.total_score)
    await sio.emit(
        "game_over",
        {"totalScore": session.total_score, "results": [r.to_dict() for r in session.results]},
    )
