"""Public façade for the artist_playlists.pipeline package.

This module exposes the three server-side operations (artist resolution,
track aggregation, batched playlist writes) and the backoff policies they use
between upstream calls. The HTTP layer should import from this façade instead
of the internal pipeline submodules.
"""

from .artist_resolver import resolve_artist
from .backoff import (
    BackoffPolicy,
    FixedBackoff,
    PenaltyBackoff,
    album_backoff,
    batch_backoff,
)
from .playlist_writer import (
    append_in_batches,
    chunked,
    create_or_update_playlist,
    default_playlist_name,
    normalize_track_uri,
    validate_creation_request,
    write_playlist,
)
from .track_aggregator import (
    ArtistDetails,
    aggregate_artist_tracks,
    get_artist_details,
    merge_tracks,
)

__all__ = [
    "resolve_artist",
    "BackoffPolicy",
    "FixedBackoff",
    "PenaltyBackoff",
    "album_backoff",
    "batch_backoff",
    "ArtistDetails",
    "merge_tracks",
    "aggregate_artist_tracks",
    "get_artist_details",
    "normalize_track_uri",
    "default_playlist_name",
    "validate_creation_request",
    "chunked",
    "append_in_batches",
    "write_playlist",
    "create_or_update_playlist",
]
