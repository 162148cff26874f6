"""Typed calls to the proxy server's /api endpoints, run through a SessionManager.

ProxyClient keeps the search state (query, current artist, rejected ids) in
the manager's SessionState so that a "not this one" refinement re-runs the
search with the rejected artist excluded.
"""

from typing import Any, Dict, List, Optional

import requests

from artist_playlists.config import SPOTIFY_HTTP_TIMEOUT
from artist_playlists.core import (
    Artist,
    ArtistPlaylistsError,
    AuthExpired,
    NotFound,
    PartialFailure,
    UpstreamError,
    ValidationError,
    log_info,
)

from .manager import SessionManager


def _error_from_response(r: requests.Response) -> ArtistPlaylistsError:
    try:
        payload = r.json()
    except ValueError:
        payload = {"error": r.text or r.reason}
    if not isinstance(payload, dict):
        payload = {"error": None, "details": payload}
    message = payload.get("error") or f"Request failed with status {r.status_code}."
    details = payload.get("details")

    if "batchIndex" in payload:
        return PartialFailure(
            message,
            batch_index=payload["batchIndex"],
            batches_written=payload.get("batchesWritten", payload["batchIndex"]),
            playlist_id=payload.get("playlistId", ""),
            status_code=r.status_code,
            details=details,
        )
    if r.status_code == 400:
        return ValidationError(message, details)
    if r.status_code == 401:
        return AuthExpired(message, details)
    if r.status_code == 404:
        return NotFound(message, details)
    return UpstreamError(message, status_code=r.status_code, details=details)


class ProxyClient:
    def __init__(self, session: SessionManager) -> None:
        self.session = session

    @property
    def state(self):
        return self.session.state

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.session.base_url}{path}"

        def send(access_token: str) -> requests.Response:
            return self.session.http.post(
                url,
                json={**body, "accessToken": access_token},
                timeout=SPOTIFY_HTTP_TIMEOUT,
            )

        r = self.session.call_protected(send)
        if not r.ok:
            raise _error_from_response(r)
        return r.json()

    def search_artist(self, query: Optional[str] = None) -> Artist:
        """
        Resolve `query` (or the current query) to an artist.

        A new query resets the rejected ids.
        """
        state = self.state
        if query is not None and query.strip() != state.query:
            state.query = query.strip()
            state.excluded_ids = set()
        if not state.query:
            raise ValidationError("Type an artist name to search.")

        data = self._post(
            "/api/search-artist",
            {"artistName": state.query, "excludedIds": sorted(state.excluded_ids)},
        )
        raw = data["artist"]
        state.artist = Artist(
            id=raw["id"],
            name=raw["name"],
            image_url=raw.get("image"),
            follower_count=raw.get("followers", 0),
        )
        log_info(f"Artist {state.artist.name} found.")
        return state.artist

    def reject_artist(self) -> Artist:
        """Exclude the current match and search again."""
        if self.state.artist is not None:
            self.state.excluded_ids.add(self.state.artist.id)
        return self.search_artist()

    def artist_details(self) -> Dict[str, List[Dict[str, Any]]]:
        artist = self.state.artist
        if artist is None:
            raise ValidationError("Search for an artist first.")
        return self._post(
            "/api/search-artist-details",
            {"artistId": artist.id, "artistName": artist.name},
        )

    def create_playlist(
        self,
        track_uris: List[str],
        playlist_option: str = "new",
        target_playlist_id: Optional[str] = None,
        new_playlist_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        artist = self.state.artist
        body: Dict[str, Any] = {
            "artistName": artist.name if artist else "",
            "trackUris": list(track_uris),
            "playlistOption": playlist_option,
        }
        if target_playlist_id:
            body["targetPlaylistId"] = target_playlist_id
        if new_playlist_name:
            body["newPlaylistName"] = new_playlist_name
        return self._post("/api/create-playlist", body)
