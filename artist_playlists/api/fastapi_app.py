from fastapi import FastAPI

from artist_playlists.api.artists.routes import router as artists_router
from artist_playlists.api.auth.routes import router as auth_router
from artist_playlists.api.errors import register_error_handlers
from artist_playlists.api.health import router as health_router
from artist_playlists.api.playlists.routes import router as playlists_router
from artist_playlists.config import SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET
from artist_playlists.core import configure_logging, log_error

configure_logging()

if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
    log_error("SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET must be set in .env.")

app = FastAPI(
    title="Artist Playlists API",
    version="0.1.0",
    description="Build Spotify playlists from everything an artist has played on.",
)

register_error_handlers(app)

# OAuth routes (paths are part of the registered redirect URI)
app.include_router(auth_router, tags=["auth"])

# Aggregation and write routes
app.include_router(artists_router, prefix="/api", tags=["artists"])
app.include_router(playlists_router, prefix="/api", tags=["playlists"])

app.include_router(health_router, tags=["health"])
