"""Create or reuse a playlist and append track URIs to it in batches.

The write happens in three steps:

  1. identity check: fetch the current user profile so that an expired token
     fails the whole operation before anything is created
  2. destination: create a private playlist ("new") or take the given id
     as-is ("existing", no existence check)
  3. append: split the URIs into batches of at most PLAYLIST_BATCH_SIZE and
     post them one after the other with a short delay in between

A failed batch stops the loop. Batches already written stay in the playlist;
the failure is reported as PartialFailure naming the failed batch index.
"""

import re
from typing import Iterable, Iterator, List, Optional, Sequence

from artist_playlists.config import PLAYLIST_BATCH_SIZE, PLAYLIST_NAME_PREFIX
from artist_playlists.core import (
    ArtistPlaylistsError,
    AuthExpired,
    DestinationMode,
    PartialFailure,
    PlaylistCreationRequest,
    PlaylistDestination,
    PlaylistWriteResult,
    ValidationError,
    log_error,
    log_info,
    log_step,
    log_success,
)
from artist_playlists.spotify import (
    add_tracks_to_playlist,
    create_playlist,
    get_current_user,
)

from .backoff import BackoffPolicy, batch_backoff

_TRACK_ID = r"[A-Za-z0-9]{22}"
TRACK_URI_RE = re.compile(rf"^spotify:track:(?P<id>{_TRACK_ID})$")
TRACK_URL_RE = re.compile(
    rf"^https?://open\.spotify\.com/(?:intl-[A-Za-z-]+/)?track/(?P<id>{_TRACK_ID})(?:[?#].*)?$"
)


def normalize_track_uri(value: str) -> Optional[str]:
    """
    Return the canonical "spotify:track:<id>" form, or None if `value` is
    neither a track URI nor an open.spotify.com track URL.
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    match = TRACK_URI_RE.match(value) or TRACK_URL_RE.match(value)
    if not match:
        return None
    return f"spotify:track:{match.group('id')}"


def default_playlist_name(artist_name: str) -> str:
    return f"{PLAYLIST_NAME_PREFIX}{(artist_name or '').strip() or 'Unknown Artist'}"


def validate_creation_request(
    track_uris: Optional[Sequence[str]],
    playlist_option: Optional[str],
    target_playlist_id: Optional[str] = None,
    new_playlist_name: Optional[str] = None,
    artist_name: str = "",
) -> PlaylistCreationRequest:
    """
    Check caller input and build a PlaylistCreationRequest.

    No upstream call is made here. Duplicate URIs are dropped, keeping the
    first occurrence.
    """
    if not track_uris:
        raise ValidationError("At least one track URI is required.")

    uris: List[str] = []
    seen = set()
    invalid: List[str] = []
    for value in track_uris:
        uri = normalize_track_uri(value)
        if uri is None:
            invalid.append(str(value))
        elif uri not in seen:
            seen.add(uri)
            uris.append(uri)
    if invalid:
        raise ValidationError("Invalid track URIs.", details={"invalid": invalid[:10]})

    if playlist_option == DestinationMode.NEW.value:
        name = (new_playlist_name or "").strip() or default_playlist_name(artist_name)
        destination = PlaylistDestination(mode=DestinationMode.NEW, name=name)
    elif playlist_option == DestinationMode.EXISTING.value and (
        target_playlist_id or ""
    ).strip():
        destination = PlaylistDestination(
            mode=DestinationMode.EXISTING, playlist_id=target_playlist_id.strip()
        )
    else:
        raise ValidationError("Invalid playlist option.")

    return PlaylistCreationRequest(
        track_uris=uris, destination=destination, artist_name=artist_name or ""
    )


def chunked(items: Sequence[str], size: int) -> Iterator[List[str]]:
    if size <= 0:
        raise ValueError("Batch size must be positive.")
    for i in range(0, len(items), size):
        yield list(items[i : i + size])


def _resolve_destination(access_token: str, request: PlaylistCreationRequest) -> str:
    destination = request.destination
    if destination.mode == DestinationMode.EXISTING:
        log_info(f"Using existing playlist {destination.playlist_id}.")
        return destination.playlist_id

    artist = request.artist_name.strip() or "this artist"
    description = f"Playlist generated automatically with tracks by {artist}."
    log_step(f"Creating playlist '{destination.name}'...")
    return create_playlist(access_token, destination.name, description, public=False)


def append_in_batches(
    access_token: str,
    playlist_id: str,
    uris: Sequence[str],
    batch_size: int = PLAYLIST_BATCH_SIZE,
    backoff: Optional[BackoffPolicy] = None,
) -> tuple[int, Optional[str]]:
    """
    Append `uris` sequentially in batches. Returns (batches written, last
    snapshot id). Raises PartialFailure on the first failed batch.
    """
    backoff = backoff or batch_backoff()
    batches = list(chunked(uris, batch_size))
    snapshot_id: Optional[str] = None

    for index, batch in enumerate(batches):
        if index > 0:
            backoff.wait()
        try:
            snapshot_id = add_tracks_to_playlist(access_token, playlist_id, batch)
        except ArtistPlaylistsError as e:
            log_error(
                f"Batch {index + 1}/{len(batches)} failed for playlist "
                f"{playlist_id}: {e.status_code} {e.details}"
            )
            raise PartialFailure(
                f"Failed to add batch {index} to the playlist.",
                batch_index=index,
                batches_written=index,
                playlist_id=playlist_id,
                status_code=e.status_code,
                details=e.details,
            ) from e
        log_info(f"Batch {index + 1}/{len(batches)} added ({len(batch)} tracks).")

    return len(batches), snapshot_id


def write_playlist(
    access_token: str,
    request: PlaylistCreationRequest,
    batch_size: int = PLAYLIST_BATCH_SIZE,
    backoff: Optional[BackoffPolicy] = None,
) -> PlaylistWriteResult:
    if not access_token:
        raise ValidationError("Access token is required.")

    log_step("Checking Spotify session before writing...")
    try:
        user = get_current_user(access_token)
    except ArtistPlaylistsError as e:
        raise AuthExpired(details=e.details) from e
    log_info(f"Writing playlist for user {user.get('id')}.")

    playlist_id = _resolve_destination(access_token, request)
    batches_written, snapshot_id = append_in_batches(
        access_token,
        playlist_id,
        request.track_uris,
        batch_size=batch_size,
        backoff=backoff,
    )

    log_success(
        f"{len(request.track_uris)} tracks added to playlist {playlist_id} "
        f"in {batches_written} batches."
    )
    return PlaylistWriteResult(
        playlist_id=playlist_id,
        batches_written=batches_written,
        snapshot_id=snapshot_id,
    )


def create_or_update_playlist(
    access_token: str,
    artist_name: str,
    track_uris: Iterable[str],
    playlist_option: Optional[str],
    target_playlist_id: Optional[str] = None,
    new_playlist_name: Optional[str] = None,
    backoff: Optional[BackoffPolicy] = None,
) -> PlaylistWriteResult:
    """Validate the raw input, then run write_playlist()."""
    if not access_token:
        raise ValidationError("Access token is required.")
    request = validate_creation_request(
        list(track_uris or []),
        playlist_option,
        target_playlist_id=target_playlist_id,
        new_playlist_name=new_playlist_name,
        artist_name=artist_name,
    )
    return write_playlist(access_token, request, backoff=backoff)
