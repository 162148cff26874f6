"""Public façade for the artist_playlists.spotify package.

This module exposes the Spotify Web API integration: OAuth helpers, catalog
reads and playlist writes. Every function takes the caller's access token
explicitly; nothing here keeps per-user state. Callers should import these
symbols from this façade instead of the internal modules.
"""

from .auth import (
    build_spotify_auth_url,
    exchange_code_for_token,
    generate_state,
    get_current_user,
    refresh_spotify_token,
)
from .catalog import (
    get_album_tracks,
    get_artist_albums,
    get_artist_top_tracks,
    search_artists,
    search_tracks,
)
from .http import spotify_headers, spotify_request
from .playlists import add_tracks_to_playlist, create_playlist, list_user_playlists

__all__ = [
    "generate_state",
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "refresh_spotify_token",
    "get_current_user",
    "spotify_headers",
    "spotify_request",
    "search_artists",
    "get_artist_top_tracks",
    "get_artist_albums",
    "get_album_tracks",
    "search_tracks",
    "list_user_playlists",
    "create_playlist",
    "add_tracks_to_playlist",
]
