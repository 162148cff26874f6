"""Gather an artist's candidate tracks from several Spotify sources.

Sources, in insertion order:

  1. the artist's top tracks
  2. the tracks of every album, single and compilation of the artist
  3. a track search on the artist name, which surfaces guest appearances on
     other artists' releases

Results are folded into one mapping keyed by track id. A later source
overwrites an earlier one on collision (the metadata is equivalent), so the
output never holds two tracks with the same id.

Album listings are fetched one at a time with a delay between calls. A failed
album is logged and skipped, followed by a longer delay; the aggregation is
best-effort and does not guarantee completeness.

The user's playlists are fetched on a second worker while the tracks are
gathered, since they hit unrelated endpoints.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from artist_playlists.core import (
    AuthExpired,
    Playlist,
    Track,
    UpstreamError,
    ValidationError,
    log_info,
    log_progress,
    log_step,
    log_success,
    log_warning,
)
from artist_playlists.spotify import (
    get_album_tracks,
    get_artist_albums,
    get_artist_top_tracks,
    list_user_playlists,
    search_tracks,
)

from .backoff import BackoffPolicy, album_backoff


@dataclass
class ArtistDetails:
    tracks: List[Track] = field(default_factory=list)
    playlists: List[Playlist] = field(default_factory=list)
    skipped_albums: List[str] = field(default_factory=list)


def merge_tracks(
    sources: Iterable[Iterable[Track]],
    into: Optional[Dict[str, Track]] = None,
) -> Dict[str, Track]:
    """
    Fold track sequences into a mapping keyed by track id (last write wins).
    """
    merged: Dict[str, Track] = into if into is not None else {}
    for source in sources:
        for track in source:
            if track.id:
                merged[track.id] = track
    return merged


def _credits_artist(track: Track, artist_name: str) -> bool:
    wanted = artist_name.casefold()
    return any(name.casefold() == wanted for name in track.artist_names)


def fetch_album_tracks(
    access_token: str,
    albums: List[Dict[str, str]],
    backoff: BackoffPolicy,
) -> tuple[List[List[Track]], List[str]]:
    """
    Fetch album track listings sequentially.

    Returns (per-album track lists, ids of albums that failed). Token expiry is
    not an album-local problem and is re-raised.
    """
    results: List[List[Track]] = []
    skipped: List[str] = []

    for i, album in enumerate(albums, start=1):
        failed = False
        try:
            results.append(get_album_tracks(access_token, album["id"], album["name"]))
        except AuthExpired:
            raise
        except UpstreamError as e:
            failed = True
            skipped.append(album["id"])
            log_warning(
                f"Skipping album '{album['name']}' ({album['id']}): "
                f"{e.status_code} {e.details}"
            )
        log_progress(i, len(albums), prefix="  Album tracks")
        if i < len(albums):
            backoff.wait(failed=failed)

    return results, skipped


def aggregate_artist_tracks(
    access_token: str,
    artist_id: str,
    artist_name: str,
    backoff: Optional[BackoffPolicy] = None,
) -> tuple[List[Track], List[str]]:
    """
    Build the deduplicated candidate track list for an artist.

    Returns (tracks, skipped album ids).
    """
    backoff = backoff or album_backoff()

    log_step(f"Fetching top tracks for {artist_name}...")
    top_tracks = get_artist_top_tracks(access_token, artist_id)
    merged = merge_tracks([top_tracks])

    log_step(f"Fetching albums for {artist_name}...")
    albums = get_artist_albums(access_token, artist_id)
    log_info(f"{len(albums)} albums/singles/compilations found.")
    album_tracks, skipped = fetch_album_tracks(access_token, albums, backoff)
    merge_tracks(album_tracks, into=merged)

    log_step(f"Searching collaborations for {artist_name}...")
    try:
        found = search_tracks(access_token, f'artist:"{artist_name}"')
    except AuthExpired:
        raise
    except UpstreamError as e:
        log_warning(f"Collaboration search failed: {e.status_code} {e.details}")
        found = []
    merge_tracks([[t for t in found if _credits_artist(t, artist_name)]], into=merged)

    log_success(
        f"{len(merged)} unique tracks for {artist_name} "
        f"({len(skipped)} albums skipped)."
    )
    return list(merged.values()), skipped


def get_artist_details(
    access_token: str,
    artist_id: str,
    artist_name: str,
    backoff: Optional[BackoffPolicy] = None,
) -> ArtistDetails:
    """
    Aggregate the artist's tracks and, concurrently, the user's playlists.
    """
    if not access_token or not artist_id or not artist_name:
        raise ValidationError("Access token, artist id and artist name are required.")

    with ThreadPoolExecutor(max_workers=1) as executor:
        playlists_future = executor.submit(list_user_playlists, access_token)
        tracks, skipped = aggregate_artist_tracks(
            access_token, artist_id, artist_name, backoff=backoff
        )
        playlists = playlists_future.result()

    return ArtistDetails(tracks=tracks, playlists=playlists, skipped_albums=skipped)
