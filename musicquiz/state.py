"""Etat applicatif centralisé du serveur de quiz."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Optional

from .config import Config
from .deezer import DeezerClient
from .models import AnswerMode, GameSettings
from .session import GameSession


def _new_session() -> GameSession:
    settings = GameSettings(
        max_points=Config.DEFAULT_MAX_POINTS,
        answer_mode=AnswerMode(Config.DEFAULT_ANSWER_MODE),
    )
    return GameSession(settings=settings, round_duration=Config.ROUND_DURATION)


@dataclass
class ServerState:
    session: GameSession = field(default_factory=_new_session)
    catalog: DeezerClient = field(default_factory=DeezerClient)
    # Compte à rebours du morceau courant
    timer_task: Optional[asyncio.Task[Any]] = None


# instance globale unique
state = ServerState()
