"""Modèles de données du quiz : thèmes, morceaux, réglages et résultats."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping


class AnswerMode(str, Enum):
    """Ce que le joueur doit trouver."""

    ARTIST = "artist"
    SONG = "song"
    BOTH = "both"

    @property
    def checks_title(self) -> bool:
        return self in (AnswerMode.SONG, AnswerMode.BOTH)

    @property
    def checks_artist(self) -> bool:
        return self in (AnswerMode.ARTIST, AnswerMode.BOTH)


@dataclass(frozen=True)
class Theme:
    """Playlist sélectionnable (descripteur Deezer)."""

    id: int
    title: str
    picture: str = ""
    tracklist: str = ""
    nb_tracks: int = 0

    @classmethod
    def from_deezer(cls, data: Mapping[str, Any]) -> "Theme":
        return cls(
            id=int(data.get("id", 0)),
            title=data.get("title") or "",
            picture=data.get("picture") or "",
            tracklist=data.get("tracklist") or "",
            nb_tracks=int(data.get("nb_tracks") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "picture": self.picture,
            "tracklist": self.tracklist,
            "nb_tracks": self.nb_tracks,
        }


@dataclass(frozen=True)
class Artist:
    id: int
    name: str
    picture: str = ""


@dataclass(frozen=True)
class Album:
    id: int
    title: str
    cover: str = ""


@dataclass(frozen=True)
class Song:
    """Morceau jouable : un extrait audio et ses métadonnées."""

    id: int
    title: str
    preview: str
    artist: Artist
    album: Album
    duration: int = 0

    @classmethod
    def from_deezer(cls, data: Mapping[str, Any]) -> "Song":
        artist = data.get("artist") or {}
        album = data.get("album") or {}
        return cls(
            id=int(data.get("id", 0)),
            title=data.get("title") or "",
            preview=data.get("preview") or "",
            artist=Artist(
                id=int(artist.get("id", 0)),
                name=artist.get("name") or "",
                picture=artist.get("picture") or "",
            ),
            album=Album(
                id=int(album.get("id", 0)),
                title=album.get("title") or "",
                # Deezer expose plusieurs tailles, on garde la moyenne si présente
                cover=album.get("cover_medium") or album.get("cover") or "",
            ),
            duration=int(data.get("duration") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "preview": self.preview,
            "artist": {"id": self.artist.id, "name": self.artist.name, "picture": self.artist.picture},
            "album": {"id": self.album.id, "title": self.album.title, "cover": self.album.cover},
            "duration": self.duration,
        }


# Correspondance clés client (camelCase) -> champs GameSettings
_SETTINGS_KEYS = {
    "maxPoints": "max_points",
    "selectedThemeIds": "selected_theme_ids",
    "answerMode": "answer_mode",
}


@dataclass(frozen=True)
class GameSettings:
    """Réglages de partie.

    Modifiés uniquement par fusion (`merged`) : les champs non fournis sont
    conservés. `max_points > 0` est à la charge de l'appelant.
    """

    max_points: int = 100
    selected_theme_ids: FrozenSet[int] = field(default_factory=frozenset)
    answer_mode: AnswerMode = AnswerMode.BOTH

    def merged(self, changes: Mapping[str, Any]) -> "GameSettings":
        """Retourne une copie fusionnée avec `changes` (clés snake_case ou camelCase)."""
        values: Dict[str, Any] = {}
        for key, value in changes.items():
            name = _SETTINGS_KEYS.get(key, key)
            if name == "max_points":
                values[name] = int(value)
            elif name == "selected_theme_ids":
                values[name] = frozenset(int(v) for v in value)
            elif name == "answer_mode":
                values[name] = AnswerMode(value)
            else:
                raise TypeError(f"Réglage inconnu: {key}")
        return replace(self, **values)

    def with_themes(self, themes: Iterable[Theme]) -> "GameSettings":
        return replace(self, selected_theme_ids=frozenset(t.id for t in themes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxPoints": self.max_points,
            "selectedThemeIds": sorted(self.selected_theme_ids),
            "answerMode": self.answer_mode.value,
        }


@dataclass(frozen=True)
class GameResult:
    """Résultat d'un morceau, ajouté une seule fois au journal de la partie."""

    song_id: int
    song_title: str
    artist_name: str
    user_answer: str
    is_correct: bool
    score: int
    time_remaining: int

    @classmethod
    def for_song(
        cls, song: Song, user_answer: str, is_correct: bool, score: int, time_remaining: int
    ) -> "GameResult":
        return cls(
            song_id=song.id,
            song_title=song.title,
            artist_name=song.artist.name,
            user_answer=user_answer,
            is_correct=is_correct,
            score=score,
            time_remaining=time_remaining,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "songId": self.song_id,
            "songTitle": self.song_title,
            "artistName": self.artist_name,
            "userAnswer": self.user_answer,
            "isCorrect": self.is_correct,
            "score": self.score,
            "timeRemaining": self.time_remaining,
        }
