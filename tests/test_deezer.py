import random

import pytest
import requests

from musicquiz import deezer
from musicquiz.deezer import DeezerClient


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


def track(track_id, title='Title', artist='Artist', preview='p.mp3', duration=180):
    return {
        'id': track_id,
        'title': title,
        'preview': preview,
        'duration': duration,
        'artist': {'id': 1, 'name': artist},
        'album': {'id': 2, 'title': 'Album', 'cover_medium': 'c.jpg'},
    }


@pytest.fixture()
def responses(monkeypatch):
    """Map endpoint path -> payload (or exception) served by requests.get."""
    routes = {}
    calls = []

    def fake_get(url, params=None, timeout=None):
        path = url.replace('https://api.deezer.test', '')
        calls.append((path, params, timeout))
        payload = routes.get(path)
        if payload is None:
            raise requests.ConnectionError(f'no route for {path}')
        if isinstance(payload, FakeResponse):
            return payload
        return FakeResponse(payload)

    monkeypatch.setattr(deezer.requests, 'get', fake_get)
    routes['_calls'] = calls
    return routes


@pytest.fixture()
def client():
    return DeezerClient(base_url='https://api.deezer.test/', timeout=5)


def test_search_filters_small_or_pictureless_playlists(client, responses):
    responses['/search/playlist'] = {'data': [
        {'id': 1, 'title': 'Big', 'picture': 'a.jpg', 'nb_tracks': 10},
        {'id': 2, 'title': 'Small', 'picture': 'b.jpg', 'nb_tracks': 9},
        {'id': 3, 'title': 'No picture', 'picture': '', 'nb_tracks': 50},
    ]}
    themes = client.search_playlists('rock')
    assert [t.id for t in themes] == [1]
    path, params, timeout = responses['_calls'][0]
    assert params == {'q': 'rock', 'limit': 25}
    assert timeout == 5


def test_chart_requires_fifteen_tracks(client, responses):
    responses['/chart/0/playlists'] = {'data': [
        {'id': 1, 'title': 'A', 'picture': 'a.jpg', 'nb_tracks': 14},
        {'id': 2, 'title': 'B', 'picture': 'b.jpg', 'nb_tracks': 15},
    ]}
    assert [t.id for t in client.get_chart_playlists()] == [2]


def test_tracks_keep_only_playable_songs(client, responses):
    responses['/playlist/7/tracks'] = {'data': [
        track(1),
        track(2, preview=''),
        track(3, title=''),
        track(4, artist=''),
        track(5, duration=30),
        track(6, duration=31),
    ]}
    songs = client.get_playlist_tracks(7)
    assert [s.id for s in songs] == [1, 6]
    assert responses['_calls'][0][1] == {'limit': 100}


def test_failures_degrade_to_empty(client, responses):
    responses['/playlist/8/tracks'] = FakeResponse({}, status_code=500)
    responses['/chart/0/playlists'] = FakeResponse(ValueError('bad json'))
    responses['/playlist/9'] = {'error': {'type': 'DataException', 'message': 'no data', 'code': 800}}
    assert client.get_playlist_tracks(8) == []
    assert client.get_chart_playlists() == []
    assert client.search_playlists() == []
    assert client.get_playlist_by_id(9) is None


def test_get_playlist_by_id(client, responses):
    responses['/playlist/9'] = {'id': 9, 'title': 'Hits', 'picture': 'h.jpg', 'nb_tracks': 80,
                                'tracklist': 'https://api.deezer.com/playlist/9/tracks'}
    theme = client.get_playlist_by_id(9)
    assert theme.title == 'Hits'
    assert theme.nb_tracks == 80


def test_build_playlist_merges_dedupes_and_caps(client, responses):
    random.seed(1)
    responses['/playlist/1/tracks'] = {'data': [track(i) for i in range(1, 6)]}
    responses['/playlist/2/tracks'] = {'data': [track(i) for i in range(4, 9)]}
    songs = client.build_playlist([1, 2, 3], limit=50)
    assert sorted(s.id for s in songs) == list(range(1, 9))

    capped = client.build_playlist([1, 2], limit=3)
    assert len(capped) == 3
    assert len({s.id for s in capped}) == 3


def test_build_playlist_without_themes_is_empty(client, responses):
    assert client.build_playlist([]) == []


def test_malformed_tracks_are_skipped(client, responses):
    bad_id = track(2)
    bad_id['id'] = 'abc'
    bad_duration = track(3)
    bad_duration['duration'] = 'long'
    bad_artist = track(4)
    bad_artist['artist'] = 'Daft Punk'
    responses['/playlist/7/tracks'] = {'data': [track(1), bad_id, bad_duration, bad_artist, None, track(5)]}
    assert [s.id for s in client.get_playlist_tracks(7)] == [1, 5]


def test_malformed_playlists_are_skipped(client, responses):
    responses['/chart/0/playlists'] = {'data': [
        {'id': 1, 'title': 'A', 'picture': 'a.jpg', 'nb_tracks': 'many'},
        {'id': 'x', 'title': 'B', 'picture': 'b.jpg', 'nb_tracks': 20},
        {'id': 3, 'title': 'C', 'picture': 'c.jpg', 'nb_tracks': 20},
    ]}
    responses['/search/playlist'] = {'data': 'not a list'}
    assert [t.id for t in client.get_chart_playlists()] == [3]
    assert client.search_playlists('rock') == []


def test_malformed_playlist_by_id_is_none(client, responses):
    responses['/playlist/9'] = {'id': 'nine', 'title': 'Hits'}
    assert client.get_playlist_by_id(9) is None
