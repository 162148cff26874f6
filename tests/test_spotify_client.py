from typing import List

import pytest
import requests

from artist_playlists.core import AuthError, AuthExpired, UpstreamError
from artist_playlists.spotify import (
    get_album_tracks,
    get_artist_albums,
    refresh_spotify_token,
    search_artists,
    spotify_request,
)
from conftest import make_response


def _patch_request(monkeypatch, responses: List[requests.Response]) -> List[dict]:
    calls: List[dict] = []

    def fake_request(method, url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        return responses.pop(0)

    monkeypatch.setattr("artist_playlists.spotify.http.requests.request", fake_request)
    return calls


def test_spotify_request_sends_bearer_token(monkeypatch) -> None:
    calls = _patch_request(monkeypatch, [make_response(200, {"id": "me"})])

    data = spotify_request("GET", "/me", "tok")

    assert data == {"id": "me"}
    assert calls[0]["url"] == "https://api.spotify.com/v1/me"
    assert calls[0]["headers"] == {"Authorization": "Bearer tok"}


def test_spotify_request_maps_401_to_auth_expired(monkeypatch) -> None:
    _patch_request(monkeypatch, [make_response(401, {"error": {"status": 401}})])

    with pytest.raises(AuthExpired) as exc:
        spotify_request("GET", "/me", "tok")

    assert exc.value.status_code == 401


def test_spotify_request_keeps_upstream_status_and_retry_after(monkeypatch) -> None:
    _patch_request(
        monkeypatch,
        [make_response(429, {"error": "too many"}, headers={"Retry-After": "3"})],
    )

    with pytest.raises(UpstreamError) as exc:
        spotify_request("GET", "/search", "tok")

    assert exc.value.status_code == 429
    assert exc.value.details == {"error": "too many"}
    assert exc.value.retry_after == 3.0


def test_spotify_request_network_failure_is_upstream_error(monkeypatch) -> None:
    def boom(method, url, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr("artist_playlists.spotify.http.requests.request", boom)

    with pytest.raises(UpstreamError) as exc:
        spotify_request("GET", "/me", "tok")

    assert exc.value.status_code == 502


def test_search_artists_projects_first_image_and_followers(monkeypatch) -> None:
    payload = {
        "artists": {
            "items": [
                {
                    "id": "A1",
                    "name": "Artist X",
                    "images": [{"url": "https://img/1"}, {"url": "https://img/2"}],
                    "followers": {"total": 1234},
                },
                {"id": "A2", "name": "Artist Y", "images": [], "followers": {"total": 5}},
            ]
        }
    }
    calls = _patch_request(monkeypatch, [make_response(200, payload)])

    artists = search_artists("tok", "Artist X")

    assert [a.id for a in artists] == ["A1", "A2"]
    assert artists[0].to_dict() == {
        "id": "A1",
        "name": "Artist X",
        "image": "https://img/1",
        "followers": 1234,
    }
    assert artists[1].image_url is None
    assert calls[0]["params"] == {"q": "Artist X", "type": "artist", "limit": 5}


def test_get_artist_albums_follows_next_up_to_page_cap(monkeypatch) -> None:
    pages = [
        make_response(
            200,
            {"items": [{"id": f"a{i}", "name": f"Album {i}"}], "next": f"https://api.spotify.com/v1/next{i}"},
        )
        for i in range(3)
    ]
    calls = _patch_request(monkeypatch, pages)

    albums = get_artist_albums("tok", "artist1", max_pages=2)

    assert [a["id"] for a in albums] == ["a0", "a1"]
    assert len(calls) == 2
    assert calls[0]["params"]["include_groups"] == "album,single,compilation"
    assert calls[1]["url"] == "https://api.spotify.com/v1/next0"
    assert calls[1]["params"] is None


def test_refresh_keeps_refresh_token_when_not_rotated(monkeypatch) -> None:
    monkeypatch.setattr(
        "artist_playlists.spotify.auth.requests.post",
        lambda url, data, timeout: make_response(200, {"access_token": "new"}),
    )

    token_info = refresh_spotify_token("old-refresh")

    assert token_info == {"access_token": "new", "refresh_token": "old-refresh"}


def test_refresh_rejected_raises_auth_error(monkeypatch) -> None:
    monkeypatch.setattr(
        "artist_playlists.spotify.auth.requests.post",
        lambda url, data, timeout: make_response(400, {"error": "invalid_grant"}),
    )

    with pytest.raises(AuthError) as exc:
        refresh_spotify_token("bad")

    assert exc.value.status_code == 400
    assert exc.value.details == {"error": "invalid_grant"}


def test_non_json_success_body_is_upstream_error(monkeypatch) -> None:
    gateway_page = requests.Response()
    gateway_page.status_code = 200
    gateway_page._content = b"<html>gateway</html>"
    _patch_request(monkeypatch, [gateway_page])

    with pytest.raises(UpstreamError) as exc:
        spotify_request("GET", "/albums/a1/tracks", "tok")

    assert exc.value.status_code == 502
    assert exc.value.details == "<html>gateway</html>"


def test_get_album_tracks_makes_a_single_request(monkeypatch) -> None:
    page = {
        "items": [{"id": "t1", "uri": "spotify:track:t1", "name": "Song", "artists": []}],
        "next": "https://api.spotify.com/v1/albums/a1/tracks?offset=50",
    }
    calls = _patch_request(monkeypatch, [make_response(200, page)])

    tracks = get_album_tracks("tok", "a1", "Album One")

    assert [t.id for t in tracks] == ["t1"]
    assert tracks[0].album_name == "Album One"
    assert len(calls) == 1
    assert calls[0]["params"] == {"limit": 50}
