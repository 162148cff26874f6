"""Thin request helper shared by every Spotify Web API call.

It attaches the bearer token, applies the configured timeout and translates
non-2xx answers into the package error taxonomy:

  - 401                         -> AuthExpired
  - any other non-2xx           -> UpstreamError(status, upstream payload)
  - transport failure / timeout -> UpstreamError(502, exception text)
  - 2xx with a non-JSON body    -> UpstreamError(502, raw body)
"""

from typing import Any, Dict, Optional

import requests

from artist_playlists.config import SPOTIFY_API_BASE, SPOTIFY_HTTP_TIMEOUT
from artist_playlists.core import AuthExpired, UpstreamError


def spotify_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def response_details(r: requests.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return r.text or None


def _retry_after(r: requests.Response) -> Optional[float]:
    value = r.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def raise_for_spotify_status(r: requests.Response, context: str) -> None:
    if r.ok:
        return
    details = response_details(r)
    if r.status_code == 401:
        raise AuthExpired(details=details)
    raise UpstreamError(
        f"Spotify request failed: {context}",
        status_code=r.status_code,
        details=details,
        retry_after=_retry_after(r),
    )


def spotify_request(
    method: str,
    path: str,
    access_token: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Perform one authenticated call against the Web API and return its JSON body.

    `path` is either relative to SPOTIFY_API_BASE ("/me") or an absolute
    "next" URL taken from a paginated response.
    """
    url = path if path.startswith("http") else f"{SPOTIFY_API_BASE}{path}"
    context = f"{method.upper()} {url.split('?')[0]}"
    try:
        r = requests.request(
            method,
            url,
            headers=spotify_headers(access_token),
            params=params,
            json=json,
            timeout=SPOTIFY_HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        raise UpstreamError(
            f"Spotify request failed: {context}", status_code=502, details=str(e)
        ) from e

    raise_for_spotify_status(r, context)
    if not r.content:
        return {}
    try:
        return r.json()
    except ValueError as e:
        raise UpstreamError(
            f"Spotify returned a non-JSON body: {context}",
            status_code=502,
            details=r.text,
        ) from e
