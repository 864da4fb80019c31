"""Récupération des thèmes (playlists) et des morceaux depuis l'API Deezer.

Chaque appel échoue en bloc : une erreur réseau ou un JSON invalide donne une
liste vide (ou None), jamais une exception. Un enregistrement mal formé est
écarté seul, le reste de la réponse est conservé.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, List, Optional

import requests

from .config import Config
from .models import Song, Theme

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 25
CHART_LIMIT = 25
TRACKS_LIMIT = 100
MIN_SEARCH_TRACKS = 10
MIN_CHART_TRACKS = 15
# Un extrait de 30 s doit tenir dans le morceau
MIN_TRACK_DURATION = 30


class DeezerClient:
    """Client minimal de l'API publique Deezer."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None) -> None:
        self.base_url = (base_url or Config.DEEZER_BASE_URL).rstrip("/")
        self.timeout = timeout or Config.DEEZER_TIMEOUT

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        resp = requests.get(f"{self.base_url}{endpoint}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        # Deezer répond 200 avec {"error": {...}} pour une ressource inconnue
        if not isinstance(data, dict) or "error" in data:
            raise ValueError(f"Réponse Deezer invalide pour {endpoint}: {data!r}")
        return data

    def search_playlists(self, query: str = "popular") -> List[Theme]:
        """Recherche des playlists ayant au moins 10 titres et une image."""
        try:
            data = self._get("/search/playlist", {"q": query, "limit": SEARCH_LIMIT})
        except (requests.RequestException, ValueError) as e:
            logger.error("Erreur lors de la recherche de playlists %r: %s", query, e)
            return []
        themes = _themes(_records(data), MIN_SEARCH_TRACKS)
        logger.info("Recherche %r: %d playlists valides", query, len(themes))
        return themes

    def get_chart_playlists(self) -> List[Theme]:
        """Playlists du classement, au moins 15 titres."""
        try:
            data = self._get("/chart/0/playlists", {"limit": CHART_LIMIT})
        except (requests.RequestException, ValueError) as e:
            logger.error("Erreur lors du chargement des playlists du classement: %s", e)
            return []
        themes = _themes(_records(data), MIN_CHART_TRACKS)
        logger.info("Classement: %d playlists valides", len(themes))
        return themes

    def get_playlist_tracks(self, theme_id: int) -> List[Song]:
        """Morceaux jouables d'une playlist (extrait, titre, artiste, durée > 30 s)."""
        try:
            data = self._get(f"/playlist/{theme_id}/tracks", {"limit": TRACKS_LIMIT})
        except (requests.RequestException, ValueError) as e:
            logger.error("Erreur lors du chargement des titres de la playlist %s: %s", theme_id, e)
            return []
        tracks = _records(data)
        songs = _songs(tracks)
        logger.info("Playlist %s: %d titres valides sur %d", theme_id, len(songs), len(tracks))
        return songs

    def get_playlist_by_id(self, theme_id: int) -> Optional[Theme]:
        try:
            data = self._get(f"/playlist/{theme_id}")
        except (requests.RequestException, ValueError) as e:
            logger.error("Erreur lors du chargement de la playlist %s: %s", theme_id, e)
            return None
        try:
            return Theme.from_deezer(data)
        except _RECORD_ERRORS as e:
            logger.error("Playlist %s mal formée: %s", theme_id, e)
            return None

    def build_playlist(self, theme_ids: Iterable[int], limit: Optional[int] = None) -> List[Song]:
        """Assemble la playlist de jeu à partir des thèmes choisis.

        Doublons retirés, ordre mélangé, taille plafonnée à `limit`.
        """
        limit = limit or Config.PLAYLIST_LIMIT
        songs: List[Song] = []
        seen: set[int] = set()
        for theme_id in theme_ids:
            for song in self.get_playlist_tracks(theme_id):
                if song.id in seen:
                    continue
                seen.add(song.id)
                songs.append(song)
        # Mix et cap
        random.shuffle(songs)
        return songs[:limit]


_RECORD_ERRORS = (TypeError, ValueError, AttributeError)


def _records(data: Dict[str, Any]) -> List[Any]:
    items = data.get("data")
    return items if isinstance(items, list) else []


def _themes(items: Iterable[Any], min_tracks: int) -> List[Theme]:
    themes: List[Theme] = []
    for p in items:
        try:
            if int(p.get("nb_tracks") or 0) >= min_tracks and p.get("picture"):
                themes.append(Theme.from_deezer(p))
        except _RECORD_ERRORS as e:
            logger.warning("Playlist ignorée (%s): %r", e, p)
    return themes


def _songs(items: Iterable[Any]) -> List[Song]:
    songs: List[Song] = []
    for t in items:
        try:
            if _is_playable(t):
                songs.append(Song.from_deezer(t))
        except _RECORD_ERRORS as e:
            logger.warning("Titre ignoré (%s): %r", e, t)
    return songs


def _is_playable(track: Dict[str, Any]) -> bool:
    artist = track.get("artist") or {}
    return bool(
        track.get("preview")
        and track.get("title")
        and artist.get("name")
        and int(track.get("duration") or 0) > MIN_TRACK_DURATION
    )
