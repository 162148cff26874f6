from typing import Iterable, Optional

from artist_playlists.config import ARTIST_CANDIDATES_LIMIT
from artist_playlists.core import Artist, NotFound, ValidationError, log_info, log_step
from artist_playlists.spotify import search_artists


def resolve_artist(
    access_token: str,
    query: str,
    excluded_ids: Optional[Iterable[str]] = None,
    limit: int = ARTIST_CANDIDATES_LIMIT,
) -> Artist:
    """
    Return the best-ranked artist for `query` whose id is not excluded.

    The caller owns the exclusion set: after the user rejects a match, its id
    is added and the resolver is called again. Spotify's relevance order is
    kept as-is. Raises NotFound when every candidate is excluded or the search
    returns nothing.
    """
    query = (query or "").strip()
    if not query:
        raise ValidationError("Artist name is required.")

    excluded = set(excluded_ids or ())
    log_step(f"Searching artist '{query}' ({len(excluded)} excluded)...")

    candidates = search_artists(access_token, query, limit=limit)
    for artist in candidates:
        if artist.id not in excluded:
            log_info(f"Artist resolved: {artist.name} ({artist.id})")
            return artist

    raise NotFound("Artist not found.", details={"query": query})
