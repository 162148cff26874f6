"""Catalog reads used to resolve an artist and gather its tracks."""

from typing import Any, Dict, List

from artist_playlists.config import (
    ALBUM_INCLUDE_GROUPS,
    ALBUM_TRACKS_LIMIT,
    ALBUMS_MAX_PAGES,
    ALBUMS_PAGE_LIMIT,
    ARTIST_CANDIDATES_LIMIT,
    COLLAB_SEARCH_LIMIT,
    SPOTIFY_MARKET,
)
from artist_playlists.core import Artist, Track

from .http import spotify_request


def search_artists(
    access_token: str, query: str, limit: int = ARTIST_CANDIDATES_LIMIT
) -> List[Artist]:
    """
    Return up to `limit` artists for a free-text query, in Spotify's ranking.
    """
    data = spotify_request(
        "GET",
        "/search",
        access_token,
        params={"q": query, "type": "artist", "limit": limit},
    )
    items = (data.get("artists") or {}).get("items") or []
    return [Artist.from_spotify(a) for a in items if a and a.get("id")]


def get_artist_top_tracks(
    access_token: str, artist_id: str, market: str = SPOTIFY_MARKET
) -> List[Track]:
    data = spotify_request(
        "GET",
        f"/artists/{artist_id}/top-tracks",
        access_token,
        params={"market": market},
    )
    return [Track.from_spotify(t) for t in data.get("tracks") or [] if t and t.get("id")]


def get_artist_albums(
    access_token: str,
    artist_id: str,
    max_pages: int = ALBUMS_MAX_PAGES,
) -> List[Dict[str, Any]]:
    """
    List the artist's albums, singles and compilations as {"id", "name"} dicts.

    Follows the `next` links for at most `max_pages` pages.
    """
    albums: List[Dict[str, Any]] = []
    url = f"/artists/{artist_id}/albums"
    params = {"include_groups": ALBUM_INCLUDE_GROUPS, "limit": ALBUMS_PAGE_LIMIT}
    page = 0

    while url and page < max_pages:
        page += 1
        data = spotify_request("GET", url, access_token, params=params)
        for item in data.get("items") or []:
            if item and item.get("id"):
                albums.append({"id": item["id"], "name": item.get("name", "")})
        url = data.get("next")
        params = None  # next URL already includes params

    return albums


def get_album_tracks(
    access_token: str,
    album_id: str,
    album_name: str,
    limit: int = ALBUM_TRACKS_LIMIT,
) -> List[Track]:
    """
    Return the first page (up to `limit`) of an album's tracks.

    One request per album, so the album loop's backoff covers every call.
    """
    data = spotify_request(
        "GET", f"/albums/{album_id}/tracks", access_token, params={"limit": limit}
    )
    return [
        Track.from_spotify(t, album_name=album_name)
        for t in data.get("items") or []
        if t and t.get("id")
    ]


def search_tracks(
    access_token: str, query: str, limit: int = COLLAB_SEARCH_LIMIT
) -> List[Track]:
    data = spotify_request(
        "GET",
        "/search",
        access_token,
        params={"q": query, "type": "track", "limit": limit},
    )
    items = (data.get("tracks") or {}).get("items") or []
    return [Track.from_spotify(t) for t in items if t and t.get("id")]
