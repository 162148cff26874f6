from typing import List, Optional

from artist_playlists.config import PLAYLISTS_PAGE_LIMIT
from artist_playlists.core import Playlist, log_info

from .http import spotify_request


def list_user_playlists(
    access_token: str, limit: int = PLAYLISTS_PAGE_LIMIT
) -> List[Playlist]:
    """
    First page of the current user's playlists, used as destination choices.
    """
    data = spotify_request("GET", "/me/playlists", access_token, params={"limit": limit})
    playlists = [
        Playlist.from_spotify(p) for p in data.get("items") or [] if p and p.get("id")
    ]
    log_info(f"{len(playlists)} playlists found.")
    return playlists


def create_playlist(
    access_token: str,
    name: str,
    description: str,
    public: bool = False,
) -> str:
    """
    Create a playlist owned by the current user and return its id.
    """
    payload = {"name": name, "public": public, "description": description}
    playlist = spotify_request("POST", "/me/playlists", access_token, json=payload)
    log_info(f"Playlist created: {name}")
    return playlist["id"]


def add_tracks_to_playlist(
    access_token: str, playlist_id: str, uris: List[str]
) -> Optional[str]:
    """
    Append one batch of track URIs (at most 100) and return the snapshot id.
    """
    data = spotify_request(
        "POST",
        f"/playlists/{playlist_id}/tracks",
        access_token,
        json={"uris": uris},
    )
    return data.get("snapshot_id")
