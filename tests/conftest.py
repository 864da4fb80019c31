import os
import sys

import pytest

# Ensure the project root (containing the `musicquiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from musicquiz.models import Album, Artist, Song, Theme
from musicquiz.session import GameSession
from musicquiz.sockets import sio
from musicquiz.state import state


def make_song(song_id, title, artist_name, duration=200):
    return Song(
        id=song_id,
        title=title,
        preview=f'https://cdns-preview.dzcdn.net/{song_id}.mp3',
        artist=Artist(id=song_id * 10, name=artist_name),
        album=Album(id=song_id * 100, title=f'Album {song_id}'),
        duration=duration,
    )


@pytest.fixture()
def song_factory():
    return make_song


@pytest.fixture()
def songs():
    return [
        make_song(1, 'Bohemian Rhapsody (Remastered 2011)', 'Queen'),
        make_song(2, 'Billie Jean', 'Michael Jackson'),
        make_song(3, 'Chandelier', 'Sia'),
    ]


@pytest.fixture()
def themes():
    return [
        Theme(id=11, title='Rock', picture='rock.jpg', nb_tracks=40),
        Theme(id=22, title='Pop', picture='pop.jpg', nb_tracks=60),
        Theme(id=33, title='Rap FR', picture='rap.jpg', nb_tracks=25),
    ]


@pytest.fixture()
def session(songs):
    s = GameSession()
    s.set_playlist(songs)
    return s


class FakeCatalog:
    """Catalog double returning canned themes and tracks."""

    def __init__(self, themes=None, songs=None):
        self.themes = themes or []
        self.songs = songs or []
        self.calls = []

    def search_playlists(self, query='popular'):
        self.calls.append(('search', query))
        return list(self.themes)

    def get_chart_playlists(self):
        self.calls.append(('chart',))
        return list(self.themes)

    def build_playlist(self, theme_ids, limit=None):
        self.calls.append(('build', list(theme_ids)))
        return list(self.songs) if theme_ids else []


@pytest.fixture()
def catalog(themes, songs, monkeypatch):
    fake = FakeCatalog(themes=themes, songs=songs)
    monkeypatch.setattr(state, 'catalog', fake)
    monkeypatch.setattr(state, 'session', GameSession())
    monkeypatch.setattr(state, 'timer_task', None)
    return fake


@pytest.fixture()
def emitted(monkeypatch):
    """Record every Socket.IO emission instead of sending it."""
    events = []

    async def fake_emit(event, data=None, to=None, **kwargs):
        events.append((event, data, to))

    monkeypatch.setattr(sio, 'emit', fake_emit)
    return events
