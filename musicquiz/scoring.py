"""Barème : points accordés selon le temps restant au moment de la bonne réponse."""

from __future__ import annotations

from typing import Tuple

# (temps restant minimal en secondes, points), du plus rapide au plus lent
POINTS_TABLE: Tuple[Tuple[int, int], ...] = (
    (28, 10),
    (25, 9),
    (22, 8),
    (19, 7),
    (16, 6),
    (13, 5),
    (10, 4),
    (7, 3),
    (4, 2),
)
MIN_POINTS = 1


class ScoringPolicy:
    """Barème fixe par tranches de 3 secondes.

    Une bonne réponse rapporte toujours au moins 1 point ; l'absence de bonne
    réponse vaut 0, attribué par la session et non par le barème.
    """

    def points_for(self, time_remaining: int) -> int:
        for threshold, points in POINTS_TABLE:
            if time_remaining >= threshold:
                return points
        return MIN_POINTS
