from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from artist_playlists.config import (
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    STATE_COOKIE_MAX_AGE,
    STATE_COOKIE_NAME,
    STATE_COOKIE_SECURE,
)
from artist_playlists.core import (
    ArtistPlaylistsError,
    AuthError,
    ValidationError,
    log_info,
    log_warning,
)
from artist_playlists.spotify import (
    build_spotify_auth_url,
    exchange_code_for_token,
    generate_state,
    refresh_spotify_token,
)

from .schemas import RefreshTokenResponse

router = APIRouter()


def _redirect_with_fragment(**values: str) -> RedirectResponse:
    fragment = urlencode({k: v for k, v in values.items() if v is not None})
    response = RedirectResponse(url=f"/#{fragment}", status_code=302)
    response.delete_cookie(STATE_COOKIE_NAME)
    return response


@router.get("/login")
def login() -> RedirectResponse:
    """
    Start the authorization-code flow: remember a random state in a short-lived
    http-only cookie and send the browser to Spotify.
    """
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
        raise ArtistPlaylistsError("Spotify client credentials are not configured.")

    state = generate_state()
    response = RedirectResponse(url=build_spotify_auth_url(state), status_code=302)
    response.set_cookie(
        STATE_COOKIE_NAME,
        state,
        max_age=STATE_COOKIE_MAX_AGE,
        httponly=True,
        secure=STATE_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/callback")
def callback(
    request: Request,
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None),
) -> RedirectResponse:
    """
    Spotify redirect target. The state cookie is consumed on every call; the
    code is only exchanged when the returned state matches it.
    """
    stored_state = request.cookies.get(STATE_COOKIE_NAME)
    if state is None or state != stored_state:
        log_warning("OAuth callback rejected: state mismatch.")
        return _redirect_with_fragment(error="state_mismatch")

    if error:
        log_warning(f"Spotify authorization denied: {error}")
        return _redirect_with_fragment(error=error)

    if not code:
        return _redirect_with_fragment(error="invalid_token")

    try:
        token_info = exchange_code_for_token(code)
    except AuthError:
        return _redirect_with_fragment(error="invalid_token")

    log_info("Spotify authorization complete.")
    return _redirect_with_fragment(
        access_token=token_info.get("access_token"),
        refresh_token=token_info.get("refresh_token"),
    )


@router.get("/refresh-token", response_model=RefreshTokenResponse)
def refresh_token(
    refresh_token: str | None = Query(default=None),
) -> RefreshTokenResponse:
    if not refresh_token:
        raise ValidationError("Missing 'refresh_token' parameter.")

    token_info = refresh_spotify_token(refresh_token)
    return RefreshTokenResponse(
        access_token=token_info["access_token"],
        refresh_token=token_info.get("refresh_token"),
        expires_in=token_info.get("expires_in"),
    )
