"""Machine à états d'une partie de quiz musical.

Une partie enchaîne des cycles de morceau : le morceau devient courant
(`advance`), le joueur tente des réponses, puis le compte à rebours expire
(`time_up`) et le résultat du cycle est ajouté au journal. Une bonne réponse
détectée avant l'expiration reste en attente (`PendingAnswer`) et n'est
comptée qu'à l'expiration.

La session ne possède pas d'horloge : un pilote externe appelle `tick()`
chaque seconde, ou directement `time_up()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .answers import AnswerEvaluator
from .models import GameResult, GameSettings, Song, Theme
from .scoring import ScoringPolicy

logger = logging.getLogger(__name__)

ROUND_DURATION = 30


@dataclass(frozen=True)
class NoAnswer:
    """Cycle ouvert, aucune bonne réponse pour l'instant."""


@dataclass(frozen=True)
class PendingAnswer:
    """Bonne réponse trouvée, en attente de l'expiration du compte à rebours."""

    result: GameResult


@dataclass(frozen=True)
class Committed:
    """Cycle terminé, `result` est dans le journal."""

    result: GameResult


SongCycle = Union[NoAnswer, PendingAnswer, Committed]


class GameSession:
    """Session de jeu d'un joueur.

    État observable : réglages, thèmes disponibles, playlist, morceau courant,
    curseur, compte à rebours, saisie courante, journal des résultats et mute.
    Toutes les mutations passent par les méthodes publiques.
    """

    def __init__(
        self,
        evaluator: Optional[AnswerEvaluator] = None,
        scoring: Optional[ScoringPolicy] = None,
        settings: Optional[GameSettings] = None,
        round_duration: int = ROUND_DURATION,
    ) -> None:
        self.evaluator = evaluator or AnswerEvaluator()
        self.scoring = scoring or ScoringPolicy()
        self.round_duration = round_duration

        # Configuration d'avant-partie, conservée par reset_game()
        self.settings = settings or GameSettings()
        self.available_themes: List[Theme] = []

        self.playlist: List[Song] = []
        self.results: List[GameResult] = []
        self.current_song: Optional[Song] = None
        self.current_song_index = 0
        self.timer = round_duration
        self.user_answer = ""
        self.is_playing = False
        self.is_muted = False
        self._cycle: SongCycle = NoAnswer()

    # --- Réglages et thèmes ---

    def update_settings(self, changes: Mapping[str, Any]) -> None:
        self.settings = self.settings.merged(changes)

    def set_available_themes(self, themes: Iterable[Theme]) -> None:
        self.available_themes = list(themes)

    def set_selected_themes(self, themes: Iterable[Theme]) -> None:
        self.settings = self.settings.with_themes(themes)

    @property
    def selected_themes(self) -> List[Theme]:
        ids = self.settings.selected_theme_ids
        return [theme for theme in self.available_themes if theme.id in ids]

    # --- Déroulement ---

    def set_playlist(self, songs: Iterable[Song]) -> None:
        self.playlist = list(songs)

    def start_game(self) -> None:
        self.current_song_index = 0
        self.current_song = None
        self.is_playing = False
        self.results = []
        self.is_muted = False
        self._cycle = NoAnswer()
        logger.info("Nouvelle partie: %d morceaux, objectif %d points", len(self.playlist), self.settings.max_points)
        self.advance()

    def advance(self) -> None:
        """Passe au morceau suivant ; sans effet si la playlist est épuisée."""
        if self.current_song_index >= len(self.playlist):
            logger.debug("Playlist épuisée (%d morceaux)", len(self.playlist))
            return

        self.current_song = self.playlist[self.current_song_index]
        self.current_song_index += 1
        self.timer = self.round_duration
        self.user_answer = ""
        self._cycle = NoAnswer()
        self.is_playing = True
        logger.debug("Morceau %d/%d: %s", self.current_song_index, len(self.playlist), self.current_song.title)

    def set_user_answer(self, text: str) -> None:
        self.user_answer = text

    def is_answer_correct(self) -> bool:
        return self.evaluator.is_correct(self.current_song, self.user_answer, self.settings.answer_mode)

    def submit_answer(self, text: str) -> bool:
        """Enregistre la saisie et marque la bonne réponse au temps courant.

        Retourne False si aucun cycle n'est ouvert.
        """
        self.set_user_answer(text)
        if self.current_song is None or self.time_is_up:
            return False
        correct = self.is_answer_correct()
        if correct and isinstance(self._cycle, NoAnswer):
            self.mark_correct_answer(self.timer)
        return correct

    def mark_correct_answer(self, time_remaining: int) -> None:
        """Met une bonne réponse en attente ; un nouvel appel remplace la précédente."""
        if self.current_song is None or self.time_is_up:
            logger.debug("Bonne réponse ignorée: aucun cycle ouvert")
            return

        time_remaining = max(0, min(self.round_duration, int(time_remaining)))
        result = GameResult.for_song(
            self.current_song,
            user_answer=self.user_answer,
            is_correct=True,
            score=self.scoring.points_for(time_remaining),
            time_remaining=time_remaining,
        )
        self._cycle = PendingAnswer(result)
        logger.info("Bonne réponse pour %r: %d points en attente", result.song_title, result.score)

    def tick(self) -> bool:
        """Décrémente le compte à rebours ; retourne True si le cycle vient de se clore."""
        if self.current_song is None or self.time_is_up or not self.is_playing:
            return False
        self.timer = max(0, self.timer - 1)
        if self.timer == 0:
            self.time_up()
            return True
        return False

    def time_up(self) -> None:
        """Clôt le cycle courant et ajoute son résultat au journal (une seule fois)."""
        if self.current_song is None or self.time_is_up:
            return

        self.is_playing = False
        if isinstance(self._cycle, PendingAnswer):
            result = self._cycle.result
        else:
            result = GameResult.for_song(
                self.current_song, user_answer="", is_correct=False, score=0, time_remaining=0
            )
        self.results.append(result)
        self._cycle = Committed(result)
        logger.info("Fin du morceau %r: %d points (total %d)", result.song_title, result.score, self.total_score)

    def toggle_mute(self) -> None:
        self.is_muted = not self.is_muted

    def reset_game(self) -> None:
        """Remet la partie à zéro ; les réglages et thèmes disponibles sont conservés."""
        self.current_song = None
        self.current_song_index = 0
        self.playlist = []
        self.results = []
        self.is_playing = False
        self.timer = self.round_duration
        self.user_answer = ""
        self.is_muted = False
        self._cycle = NoAnswer()

    # --- Valeurs dérivées ---

    @property
    def cycle(self) -> SongCycle:
        return self._cycle

    @property
    def time_is_up(self) -> bool:
        return isinstance(self._cycle, Committed)

    @property
    def found_correct_answer(self) -> bool:
        if isinstance(self._cycle, NoAnswer):
            return False
        return self._cycle.result.is_correct

    @property
    def correct_answer_time(self) -> int:
        return self._cycle.result.time_remaining if self.found_correct_answer else 0

    @property
    def pending_result(self) -> Optional[GameResult]:
        return self._cycle.result if isinstance(self._cycle, PendingAnswer) else None

    @property
    def pending_score(self) -> int:
        pending = self.pending_result
        return pending.score if pending else 0

    @property
    def total_score(self) -> int:
        return sum(result.score for result in self.results)

    @property
    def is_game_over(self) -> bool:
        if self.total_score >= self.settings.max_points:
            return True
        return self.current_song_index == len(self.playlist) and len(self.playlist) > 0

    def snapshot(self) -> Dict[str, Any]:
        """État complet pour la couche de présentation."""
        pending = self.pending_result
        return {
            "settings": self.settings.to_dict(),
            "selectedThemes": [theme.to_dict() for theme in self.selected_themes],
            "currentSong": self.current_song.to_dict() if self.current_song else None,
            "currentSongIndex": self.current_song_index,
            "totalSongs": len(self.playlist),
            "timer": self.timer,
            "userAnswer": self.user_answer,
            "isPlaying": self.is_playing,
            "timeIsUp": self.time_is_up,
            "foundCorrectAnswer": self.found_correct_answer,
            "correctAnswerTime": self.correct_answer_time,
            "isMuted": self.is_muted,
            "pendingScore": self.pending_score,
            "pendingResult": pending.to_dict() if pending else None,
            "results": [result.to_dict() for result in self.results],
            "totalScore": self.total_score,
            "isGameOver": self.is_game_over,
        }
