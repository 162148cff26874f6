"""Public façade for the artist_playlists.core package.

This module exposes logging helpers, filesystem utilities, the error taxonomy
and the base models. Other packages should import these cross-cutting concerns
from this façade instead of the internal submodules.
"""

from .errors import (
    ArtistPlaylistsError,
    AuthError,
    AuthExpired,
    NotFound,
    PartialFailure,
    UpstreamError,
    ValidationError,
)
from .fs_utils import ensure_parent_dir, read_json, remove_file, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_info,
    log_progress,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    Artist,
    DestinationMode,
    Playlist,
    PlaylistCreationRequest,
    PlaylistDestination,
    PlaylistWriteResult,
    Track,
)

__all__ = [
    "configure_logging",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_progress",
    "ensure_parent_dir",
    "write_json",
    "read_json",
    "remove_file",
    "ArtistPlaylistsError",
    "ValidationError",
    "NotFound",
    "AuthExpired",
    "AuthError",
    "UpstreamError",
    "PartialFailure",
    "Artist",
    "Track",
    "Playlist",
    "DestinationMode",
    "PlaylistDestination",
    "PlaylistCreationRequest",
    "PlaylistWriteResult",
]
