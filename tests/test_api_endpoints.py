from typing import List
from urllib.parse import parse_qs, urlsplit

from fastapi.testclient import TestClient

from api_main import app
from artist_playlists.core import (
    Artist,
    AuthError,
    AuthExpired,
    NotFound,
    PartialFailure,
    Playlist,
    PlaylistWriteResult,
    Track,
    UpstreamError,
)
from artist_playlists.pipeline import ArtistDetails

client = TestClient(app)

AUTH_ROUTES = "artist_playlists.api.auth.routes"
ARTIST_ROUTES = "artist_playlists.api.artists.routes"
PLAYLIST_ROUTES = "artist_playlists.api.playlists.routes"


def _fragment(location: str) -> dict:
    return {k: v[0] for k, v in parse_qs(urlsplit(location).fragment).items()}


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_sets_state_cookie_and_redirects(monkeypatch) -> None:
    monkeypatch.setattr(f"{AUTH_ROUTES}.SPOTIFY_CLIENT_ID", "cid")
    monkeypatch.setattr(f"{AUTH_ROUTES}.SPOTIFY_CLIENT_SECRET", "secret")
    monkeypatch.setattr(f"{AUTH_ROUTES}.generate_state", lambda: "fixedstate123456")

    response = client.get("/login", follow_redirects=False)

    assert response.status_code == 302
    location = response.headers["location"]
    assert location.startswith("https://accounts.spotify.com/authorize?")
    assert parse_qs(urlsplit(location).query)["state"] == ["fixedstate123456"]
    set_cookie = response.headers["set-cookie"]
    assert "spotify_auth_state=fixedstate123456" in set_cookie
    assert "HttpOnly" in set_cookie


def test_callback_state_mismatch_skips_token_exchange(monkeypatch) -> None:
    calls: List[str] = []
    monkeypatch.setattr(
        f"{AUTH_ROUTES}.exchange_code_for_token", lambda code: calls.append(code)
    )

    client.cookies.clear()
    client.cookies.set("spotify_auth_state", "expected")
    try:
        response = client.get(
            "/callback",
            params={"code": "abc", "state": "other"},
            follow_redirects=False,
        )
    finally:
        client.cookies.clear()

    assert response.status_code == 302
    assert _fragment(response.headers["location"]) == {"error": "state_mismatch"}
    assert calls == []


def test_callback_success_puts_tokens_in_fragment(monkeypatch) -> None:
    monkeypatch.setattr(
        f"{AUTH_ROUTES}.exchange_code_for_token",
        lambda code: {"access_token": "at", "refresh_token": "rt"},
    )

    client.cookies.clear()
    client.cookies.set("spotify_auth_state", "s1")
    try:
        response = client.get(
            "/callback", params={"code": "abc", "state": "s1"}, follow_redirects=False
        )
    finally:
        client.cookies.clear()

    assert response.status_code == 302
    assert _fragment(response.headers["location"]) == {
        "access_token": "at",
        "refresh_token": "rt",
    }


def test_callback_exchange_failure_redirects_with_invalid_token(monkeypatch) -> None:
    def failing_exchange(code: str):
        raise AuthError("Token exchange failed.", status_code=400)

    monkeypatch.setattr(f"{AUTH_ROUTES}.exchange_code_for_token", failing_exchange)

    client.cookies.clear()
    client.cookies.set("spotify_auth_state", "s1")
    try:
        response = client.get(
            "/callback", params={"code": "abc", "state": "s1"}, follow_redirects=False
        )
    finally:
        client.cookies.clear()

    assert _fragment(response.headers["location"]) == {"error": "invalid_token"}


def test_refresh_token_requires_parameter() -> None:
    response = client.get("/refresh-token")
    assert response.status_code == 400
    assert "error" in response.json()


def test_refresh_token_propagates_upstream_status(monkeypatch) -> None:
    def rejected(refresh_token: str):
        raise AuthError("Token refresh failed.", status_code=400, details={"error": "invalid_grant"})

    monkeypatch.setattr(f"{AUTH_ROUTES}.refresh_spotify_token", rejected)

    response = client.get("/refresh-token", params={"refresh_token": "rt"})

    assert response.status_code == 400
    assert response.json()["details"] == {"error": "invalid_grant"}


def test_refresh_token_returns_new_access_token(monkeypatch) -> None:
    monkeypatch.setattr(
        f"{AUTH_ROUTES}.refresh_spotify_token",
        lambda refresh_token: {"access_token": "new", "refresh_token": refresh_token},
    )

    response = client.get("/refresh-token", params={"refresh_token": "rt"})

    assert response.status_code == 200
    data = response.json()
    assert data["access_token"] == "new"
    assert data["refresh_token"] == "rt"


def test_search_artist_missing_fields() -> None:
    response = client.post("/api/search-artist", json={"artistName": "X"})
    assert response.status_code == 400


def test_search_artist_passes_exclusions(monkeypatch) -> None:
    seen = {}

    def fake_resolve(token, query, excluded_ids):
        seen.update(token=token, query=query, excluded=list(excluded_ids))
        return Artist(id="A2", name="Artist X", image_url=None, follower_count=42)

    monkeypatch.setattr(f"{ARTIST_ROUTES}.resolve_artist", fake_resolve)

    response = client.post(
        "/api/search-artist",
        json={"artistName": "Artist X", "accessToken": "tok", "excludedIds": ["A1"]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "artist": {"id": "A2", "name": "Artist X", "image": None, "followers": 42}
    }
    assert seen == {"token": "tok", "query": "Artist X", "excluded": ["A1"]}


def test_search_artist_not_found(monkeypatch) -> None:
    def fake_resolve(token, query, excluded_ids):
        raise NotFound("Artist not found.")

    monkeypatch.setattr(f"{ARTIST_ROUTES}.resolve_artist", fake_resolve)

    response = client.post(
        "/api/search-artist", json={"artistName": "Nobody", "accessToken": "tok"}
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Artist not found."


def test_search_artist_expired_token(monkeypatch) -> None:
    def fake_resolve(token, query, excluded_ids):
        raise AuthExpired(details={"error": {"status": 401}})

    monkeypatch.setattr(f"{ARTIST_ROUTES}.resolve_artist", fake_resolve)

    response = client.post(
        "/api/search-artist", json={"artistName": "X", "accessToken": "tok"}
    )

    assert response.status_code == 401


def test_artist_details_returns_tracks_and_playlists(monkeypatch) -> None:
    details = ArtistDetails(
        tracks=[
            Track(
                id="t1",
                uri="spotify:track:t1",
                name="Song",
                album_name="Album",
                artist_names=["Artist X", "Guest"],
            )
        ],
        playlists=[Playlist(id="p1", name="Mine", track_count=7)],
    )
    monkeypatch.setattr(
        f"{ARTIST_ROUTES}.get_artist_details", lambda token, artist_id, name: details
    )

    response = client.post(
        "/api/search-artist-details",
        json={"accessToken": "tok", "artistId": "A1", "artistName": "Artist X"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["tracks"][0]["uri"] == "spotify:track:t1"
    assert data["tracks"][0]["artistNames"] == ["Artist X", "Guest"]
    assert data["tracks"][0]["album"] == {"name": "Album"}
    assert data["playlists"] == [
        {"id": "p1", "name": "Mine", "trackCount": 7, "tracks": {"total": 7}}
    ]


def test_artist_details_upstream_error_keeps_status(monkeypatch) -> None:
    def failing(token, artist_id, name):
        raise UpstreamError("Spotify request failed", status_code=503, details="down")

    monkeypatch.setattr(f"{ARTIST_ROUTES}.get_artist_details", failing)

    response = client.post(
        "/api/search-artist-details",
        json={"accessToken": "tok", "artistId": "A1", "artistName": "Artist X"},
    )

    assert response.status_code == 503
    assert response.json() == {"error": "Spotify request failed", "details": "down"}


def test_create_playlist_rejects_invalid_input_without_upstream_call(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(
        "artist_playlists.pipeline.playlist_writer.get_current_user",
        lambda token: calls.append(token),
    )

    response = client.post(
        "/api/create-playlist",
        json={
            "accessToken": "tok",
            "artistName": "X",
            "trackUris": [],
            "playlistOption": "new",
        },
    )

    assert response.status_code == 400
    assert calls == []


def test_create_playlist_success(monkeypatch) -> None:
    monkeypatch.setattr(
        f"{PLAYLIST_ROUTES}.create_or_update_playlist",
        lambda *args, **kwargs: PlaylistWriteResult(
            playlist_id="p1", batches_written=3, snapshot_id="snap"
        ),
    )

    response = client.post(
        "/api/create-playlist",
        json={
            "accessToken": "tok",
            "artistName": "X",
            "trackUris": ["spotify:track:" + "a" * 22],
            "playlistOption": "new",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["playlistId"] == "p1"
    assert data["batchesWritten"] == 3
    assert "message" in data


def test_create_playlist_partial_failure_reports_batch(monkeypatch) -> None:
    def failing(*args, **kwargs):
        raise PartialFailure(
            "Failed to add batch 2 to the playlist.",
            batch_index=2,
            batches_written=2,
            playlist_id="p1",
            status_code=429,
            details={"error": "rate limited"},
        )

    monkeypatch.setattr(f"{PLAYLIST_ROUTES}.create_or_update_playlist", failing)

    response = client.post(
        "/api/create-playlist",
        json={
            "accessToken": "tok",
            "artistName": "X",
            "trackUris": ["spotify:track:" + "a" * 22],
            "playlistOption": "existing",
            "targetPlaylistId": "p1",
        },
    )

    assert response.status_code == 429
    data = response.json()
    assert data["batchIndex"] == 2
    assert data["batchesWritten"] == 2
    assert data["playlistId"] == "p1"


def test_create_playlist_expired_token(monkeypatch) -> None:
    def expired(token):
        raise AuthExpired()

    monkeypatch.setattr(
        "artist_playlists.pipeline.playlist_writer.get_current_user", expired
    )

    response = client.post(
        "/api/create-playlist",
        json={
            "accessToken": "tok",
            "artistName": "X",
            "trackUris": ["spotify:track:" + "a" * 22],
            "playlistOption": "new",
        },
    )

    assert response.status_code == 401
