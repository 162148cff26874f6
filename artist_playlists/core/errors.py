"""Error taxonomy shared by the server endpoints and the session client.

Every error carries the HTTP status it maps to, so the API layer can turn it
into a JSON response without guessing. Upstream failures keep the upstream's
own status code and payload in `details` for diagnosis.
"""

from typing import Any, Optional


class ArtistPlaylistsError(Exception):
    """Base class for all errors raised by this package."""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload: dict = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(ArtistPlaylistsError):
    """Malformed or missing caller input. Raised before any upstream call."""

    status_code = 400


class NotFound(ArtistPlaylistsError):
    status_code = 404


class AuthExpired(ArtistPlaylistsError):
    """The upstream rejected the access token (HTTP 401)."""

    status_code = 401

    def __init__(
        self, message: str = "Spotify access token expired.", details: Any = None
    ) -> None:
        super().__init__(message, details)


class AuthError(ArtistPlaylistsError):
    """Token exchange or refresh was rejected; the session must be torn down."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        super().__init__(message, details)
        self.status_code = status_code


class UpstreamError(ArtistPlaylistsError):
    """Any other non-2xx answer (or transport failure) from the upstream API."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        details: Any = None,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        self.retry_after = retry_after


class PartialFailure(ArtistPlaylistsError):
    """
    A batched write stopped part-way.

    The playlist keeps the batches written before `batch_index`; nothing is
    rolled back.
    """

    def __init__(
        self,
        message: str,
        *,
        batch_index: int,
        batches_written: int,
        playlist_id: str,
        status_code: int = 502,
        details: Any = None,
    ) -> None:
        super().__init__(message, details)
        self.batch_index = batch_index
        self.batches_written = batches_written
        self.playlist_id = playlist_id
        self.status_code = status_code

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload.update(
            {
                "batchIndex": self.batch_index,
                "batchesWritten": self.batches_written,
                "playlistId": self.playlist_id,
            }
        )
        return payload
