from fastapi import APIRouter

from artist_playlists.core import ValidationError, log_info
from artist_playlists.pipeline import get_artist_details, resolve_artist

from .schemas import (
    ArtistDetailsRequest,
    ArtistSummary,
    SearchArtistRequest,
    SearchArtistResponse,
)

router = APIRouter()


@router.post("/search-artist", response_model=SearchArtistResponse)
def search_artist(body: SearchArtistRequest) -> SearchArtistResponse:
    """
    Resolve a free-text query to one artist, skipping `excludedIds`.
    """
    if not body.access_token or not (body.artist_name or "").strip():
        raise ValidationError("Access token and artist name are required.")

    artist = resolve_artist(body.access_token, body.artist_name, body.excluded_ids)
    return SearchArtistResponse(artist=ArtistSummary(**artist.to_dict()))


@router.post("/search-artist-details")
def search_artist_details(body: ArtistDetailsRequest) -> dict:
    """
    Deduplicated candidate tracks for the artist, plus the user's playlists.
    """
    if not body.access_token or not body.artist_id or not body.artist_name:
        raise ValidationError("Access token, artist id and artist name are required.")

    details = get_artist_details(body.access_token, body.artist_id, body.artist_name)
    log_info(
        f"Details for {body.artist_name}: {len(details.tracks)} tracks, "
        f"{len(details.playlists)} playlists."
    )
    return {
        "tracks": [t.to_dict() for t in details.tracks],
        "playlists": [p.to_dict() for p in details.playlists],
        "skippedAlbums": details.skipped_albums,
    }
