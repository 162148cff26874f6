from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from artist_playlists.core import ArtistPlaylistsError, log_error, log_warning


def _artist_playlists_error_handler(
    request: Request, exc: ArtistPlaylistsError
) -> JSONResponse:
    if exc.status_code >= 500:
        log_error(f"{request.url.path}: {exc.message} ({exc.status_code})")
    else:
        log_warning(f"{request.url.path}: {exc.message} ({exc.status_code})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body.", "details": jsonable_encoder(exc.errors())},
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Map the package error taxonomy to JSON responses of the form
    {"error": ..., "details": ...} carrying the error's own status code.
    """
    app.add_exception_handler(ArtistPlaylistsError, _artist_playlists_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
