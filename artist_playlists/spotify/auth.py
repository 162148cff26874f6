import secrets
from typing import Any, Dict
from urllib.parse import urlencode

import requests

from artist_playlists.config import (
    SCOPES,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_HTTP_TIMEOUT,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_TOKEN_URL,
    STATE_LENGTH,
)
from artist_playlists.core import AuthError, log_error, log_step

from .http import response_details, spotify_request


def generate_state(length: int = STATE_LENGTH) -> str:
    """Random opaque value for the OAuth `state` parameter."""
    return secrets.token_urlsafe(length)[:length]


def build_spotify_auth_url(state: str) -> str:
    auth_query_parameters = {
        "response_type": "code",
        "client_id": SPOTIFY_CLIENT_ID,
        "scope": " ".join(SCOPES),
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "state": state,
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(auth_query_parameters)}"


def _post_token(token_data: Dict[str, str], context: str) -> Dict[str, Any]:
    token_data = {
        **token_data,
        "client_id": SPOTIFY_CLIENT_ID,
        "client_secret": SPOTIFY_CLIENT_SECRET,
    }
    try:
        r = requests.post(SPOTIFY_TOKEN_URL, data=token_data, timeout=SPOTIFY_HTTP_TIMEOUT)
    except requests.RequestException as e:
        log_error(f"{context} failed: {e}")
        raise AuthError(f"{context} failed.", status_code=502, details=str(e)) from e

    if not r.ok:
        details = response_details(r)
        log_error(f"{context} rejected by Spotify ({r.status_code}): {details}")
        raise AuthError(f"{context} failed.", status_code=r.status_code, details=details)
    return r.json()


def exchange_code_for_token(code: str) -> Dict[str, Any]:
    """
    Exchange an authorization code for an access/refresh token pair.
    """
    log_step("Exchanging authorization code for Spotify tokens...")
    return _post_token(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": SPOTIFY_REDIRECT_URI,
        },
        "Token exchange",
    )


def refresh_spotify_token(refresh_token: str) -> Dict[str, Any]:
    """
    Exchange a refresh token for a new access token.

    Spotify only sometimes rotates the refresh token; when it does not, the
    one we were given stays valid and is returned unchanged.
    """
    log_step("Refreshing Spotify access token...")
    token_info = _post_token(
        {"grant_type": "refresh_token", "refresh_token": refresh_token},
        "Token refresh",
    )
    if not token_info.get("refresh_token"):
        token_info["refresh_token"] = refresh_token
    return token_info


def get_current_user(access_token: str) -> Dict[str, Any]:
    return spotify_request("GET", "/me", access_token)