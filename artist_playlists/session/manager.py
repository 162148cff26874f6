"""Client-side session and token handling.

SessionManager keeps an access token usable across a sequence of protected
calls without asking the user to log in again after every expiry:

  - initialize() picks up the tokens the /callback redirect put in the URL
    fragment (or, failing that, the persisted ones) and checks them against
    the user profile
  - call_protected() runs a request with the current token; on a 401 it renews
    the token once through the server's /refresh-token endpoint and replays the
    request once. A second 401 is fatal for that call.
  - logout() forgets everything locally; the server holds no session.

The access token is only ever sent to the proxy server and to Spotify.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Set
from urllib.parse import parse_qs, urlsplit, urlunsplit

import requests

from artist_playlists.config import APP_BASE_URL, SPOTIFY_API_BASE, SPOTIFY_HTTP_TIMEOUT
from artist_playlists.core import (
    Artist,
    AuthError,
    AuthExpired,
    log_info,
    log_step,
    log_warning,
)
from artist_playlists.spotify import spotify_headers

from .store import TokenPair, TokenStore


@dataclass
class RetryPolicy:
    """How many times a protected call may be replayed after a renewal."""

    max_retries: int = 1

    def renewable(self, response: requests.Response) -> bool:
        """
        A 401 is worth a renewal unless the server already committed part of
        the work: a partial-failure body (carrying `batchIndex`) must reach the
        caller instead of being replayed.
        """
        if response.status_code != 401:
            return False
        payload = _payload(response)
        return not (isinstance(payload, dict) and "batchIndex" in payload)


@dataclass
class SessionState:
    """UI-side state that used to live in globals."""

    tokens: Optional[TokenPair] = None
    user_name: Optional[str] = None
    query: Optional[str] = None
    artist: Optional[Artist] = None
    excluded_ids: Set[str] = field(default_factory=set)

    @property
    def authenticated(self) -> bool:
        return self.tokens is not None


@dataclass
class InitResult:
    authenticated: bool
    clean_url: Optional[str] = None
    error: Optional[str] = None
    user_name: Optional[str] = None


def parse_fragment(url: str) -> dict:
    """Return the single-valued parameters of the URL fragment."""
    fragment = urlsplit(url).fragment
    return {k: v[0] for k, v in parse_qs(fragment).items() if v}


def strip_fragment(url: str) -> str:
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ""))


Send = Callable[[str], requests.Response]


class SessionManager:
    def __init__(
        self,
        base_url: str = APP_BASE_URL,
        store: Optional[TokenStore] = None,
        http: Optional[requests.Session] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.store = store or TokenStore()
        self.http = http or requests.Session()
        self.retry_policy = retry_policy or RetryPolicy()
        self.state = SessionState()

    @property
    def login_url(self) -> str:
        return f"{self.base_url}/login"

    def initialize(self, redirect_url: Optional[str] = None) -> InitResult:
        """
        Establish the session on start-up.

        Tokens found in the redirect URL fragment win over persisted ones and
        are removed from the returned `clean_url`. An `error` in the fragment
        stops initialization.
        """
        params = parse_fragment(redirect_url) if redirect_url else {}
        clean_url = strip_fragment(redirect_url) if redirect_url else None

        if params.get("error"):
            log_warning(f"Login failed: {params['error']}")
            return InitResult(authenticated=False, clean_url=clean_url, error=params["error"])

        tokens: Optional[TokenPair] = None
        if params.get("access_token"):
            tokens = TokenPair(
                access_token=params["access_token"],
                refresh_token=params.get("refresh_token"),
            )
            self.store.save(tokens)
        else:
            tokens = self.store.load()

        if tokens is None:
            return InitResult(authenticated=False, clean_url=clean_url)

        self.state.tokens = tokens
        user_name = self.fetch_user_profile()
        if user_name is None:
            return InitResult(
                authenticated=False, clean_url=clean_url, error="login_required"
            )
        return InitResult(authenticated=True, clean_url=clean_url, user_name=user_name)

    def fetch_user_profile(self) -> Optional[str]:
        """
        Validate the current token against the Spotify profile endpoint.

        Network failures are treated like an expired token: local state is
        cleared and None is returned so the caller shows the login entry point.
        """
        if self.state.tokens is None:
            return None
        try:
            r = self.http.get(
                f"{SPOTIFY_API_BASE}/me",
                headers=spotify_headers(self.state.tokens.access_token),
                timeout=SPOTIFY_HTTP_TIMEOUT,
            )
            r.raise_for_status()
            profile = r.json()
        except (requests.RequestException, ValueError) as e:
            log_warning(f"Profile check failed, login required: {e}")
            self.logout()
            return None

        self.state.user_name = profile.get("display_name") or profile.get("id")
        return self.state.user_name

    def renew(self) -> TokenPair:
        """
        Trade the refresh token for a new access token via the server.

        Raises AuthError when there is no refresh token or the server/upstream
        rejects it; the session must then be torn down by the caller.
        """
        tokens = self.state.tokens
        if tokens is None or not tokens.refresh_token:
            raise AuthError("No refresh token available.", status_code=401)

        log_step("Renewing access token...")
        try:
            r = self.http.get(
                f"{self.base_url}/refresh-token",
                params={"refresh_token": tokens.refresh_token},
                timeout=SPOTIFY_HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise AuthError("Token renewal failed.", status_code=502, details=str(e)) from e

        if not r.ok:
            raise AuthError(
                "Token renewal failed.", status_code=r.status_code, details=_payload(r)
            )

        try:
            data = r.json()
            renewed = TokenPair(
                access_token=data["access_token"],
                refresh_token=data.get("refresh_token") or tokens.refresh_token,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise AuthError(
                "Token renewal returned no access token.",
                status_code=502,
                details=_payload(r),
            ) from e
        self.state.tokens = renewed
        self.store.save(renewed)
        log_info("Access token renewed.")
        return renewed

    def call_protected(self, send: Send) -> requests.Response:
        """
        Run `send(access_token)`; renew and replay on 401, at most
        `retry_policy.max_retries` times.

        A 401 that reports a partial failure is returned untouched: the call
        already wrote to the account and replaying it would write again.
        """
        if self.state.tokens is None:
            raise AuthExpired("Not logged in.")

        attempts = self.retry_policy.max_retries + 1
        for attempt in range(attempts):
            response = send(self.state.tokens.access_token)
            if not self.retry_policy.renewable(response):
                return response
            if attempt == attempts - 1:
                break
            try:
                self.renew()
            except AuthError:
                log_warning("Token renewal failed, logging out.")
                self.logout()
                raise

        raise AuthExpired(details=_payload(response))

    def logout(self) -> None:
        self.store.clear()
        self.state = SessionState()
        log_info("Logged out.")


def _payload(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text or None
