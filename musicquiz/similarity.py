"""Similarité approximative entre deux chaînes (distance de Levenshtein).

Le score est un pourcentage dans [0, 100]. Les deux entrées sont d'abord
normalisées : minuscules, suppression des passages entre parenthèses
(« (Live) », « (Remastered 2011) »...), de la ponctuation, puis des espaces
en bordure.
"""

from __future__ import annotations

import re
from typing import List

_PARENTHESIZED = re.compile(r"\([^)]*\)")
# Lettres ASCII seulement : les accentuées sont retirées comme la ponctuation,
# les espaces Unicode (insécables...) restent des espaces
_NON_WORD = re.compile(r"[^0-9A-Za-z_\s]")


def normalize(text: str) -> str:
    """Normalise une chaîne avant comparaison."""
    text = _PARENTHESIZED.sub("", text.lower())
    return _NON_WORD.sub("", text).strip()


def levenshtein(a: str, b: str) -> int:
    """Distance d'édition (insertion, suppression, substitution à coût 1)."""
    rows: List[List[int]] = [[i] + [0] * len(b) for i in range(len(a) + 1)]
    for j in range(len(b) + 1):
        rows[0][j] = j

    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            rows[i][j] = min(
                rows[i - 1][j] + 1,  # suppression
                rows[i][j - 1] + 1,  # insertion
                rows[i - 1][j - 1] + cost,  # substitution
            )
    return rows[len(a)][len(b)]


def similarity(a: str, b: str) -> float:
    """Pourcentage de similarité entre `a` et `b` après normalisation."""
    s1 = normalize(a)
    s2 = normalize(b)

    if s1 == s2:
        return 100.0
    if not s1 or not s2:
        return 100.0 if not s1 and not s2 else 0.0

    max_length = max(len(s1), len(s2))
    return (max_length - levenshtein(s1, s2)) / max_length * 100
