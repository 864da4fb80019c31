"""Correction d'une réponse saisie par le joueur."""

from __future__ import annotations

import logging
from typing import List, Optional

from .models import AnswerMode, Song
from .similarity import similarity

logger = logging.getLogger(__name__)


def _significant_words(text: str, min_length: int) -> List[str]:
    return [word for word in text.lower().split() if len(word) >= min_length]


class AnswerEvaluator:
    """Décide si une saisie correspond au morceau courant.

    Une réponse est acceptée si elle ressemble à 90 % au titre ou à l'artiste
    (selon le mode), ou si l'un de ses mots significatifs correspond à un mot
    du titre ou de l'artiste (par ex. le seul nom de famille de l'artiste).
    Les saisies très courtes sont refusées d'office.
    """

    THRESHOLD = 90
    MIN_ANSWER_LENGTH = 3
    MIN_WORD_LENGTH = 3
    MIN_WORD_MATCH_LENGTH = 4

    def is_correct(self, song: Optional[Song], user_answer: str, answer_mode: AnswerMode) -> bool:
        if song is None or not user_answer:
            return False

        answer = user_answer.strip()
        if len(answer) < self.MIN_ANSWER_LENGTH:
            return False

        mode = AnswerMode(answer_mode)
        title = song.title
        artist = song.artist.name

        # Un mode qui exclut le titre (ou l'artiste) ne le compare pas du tout
        title_similarity = similarity(answer, title) if mode.checks_title else 0.0
        artist_similarity = similarity(answer, artist) if mode.checks_artist else 0.0

        answer_words = _significant_words(answer, self.MIN_WORD_LENGTH)
        has_exact_word_match = False
        if mode.checks_title:
            has_exact_word_match = self._any_word_match(
                answer_words, _significant_words(title, self.MIN_WORD_LENGTH)
            )
        if mode.checks_artist and not has_exact_word_match:
            has_exact_word_match = self._any_word_match(
                answer_words, _significant_words(artist, self.MIN_WORD_LENGTH)
            )

        correct = (
            title_similarity >= self.THRESHOLD
            or artist_similarity >= self.THRESHOLD
            or (has_exact_word_match and bool(answer_words) and len(answer) >= self.MIN_WORD_MATCH_LENGTH)
        )
        logger.debug(
            "Réponse %r pour %r / %r: titre=%.1f artiste=%.1f mot=%s -> %s",
            answer, title, artist, title_similarity, artist_similarity, has_exact_word_match, correct,
        )
        return correct

    def _any_word_match(self, answer_words: List[str], target_words: List[str]) -> bool:
        return any(
            similarity(word, target) >= self.THRESHOLD
            for word in answer_words
            for target in target_words
        )
