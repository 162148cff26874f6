from fastapi import APIRouter

from artist_playlists.core import DestinationMode
from artist_playlists.pipeline import create_or_update_playlist

from .schemas import CreatePlaylistRequest, CreatePlaylistResponse

router = APIRouter()


@router.post("/create-playlist", response_model=CreatePlaylistResponse)
def create_playlist(body: CreatePlaylistRequest) -> CreatePlaylistResponse:
    """
    Create a new playlist or extend an existing one with the selected tracks.

    Input is validated before any Spotify call. A failed batch answers with the
    upstream status plus `batchIndex`; earlier batches stay in the playlist.
    """
    result = create_or_update_playlist(
        body.access_token,
        body.artist_name,
        body.track_uris,
        body.playlist_option,
        target_playlist_id=body.target_playlist_id,
        new_playlist_name=body.new_playlist_name,
    )

    action = "created" if body.playlist_option == DestinationMode.NEW.value else "updated"
    return CreatePlaylistResponse(
        message=f"Playlist {action} successfully!",
        playlistId=result.playlist_id,
        batchesWritten=result.batches_written,
        snapshotId=result.snapshot_id,
    )
