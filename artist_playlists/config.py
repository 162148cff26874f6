from dotenv import load_dotenv
import os

load_dotenv()

# Spotify credentials (REQUIRED)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/callback"
)

APP_ENV = os.getenv("APP_ENV", "development")
PORT = int(os.getenv("PORT", "8888"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"
SPOTIFY_HTTP_TIMEOUT = float(os.getenv("SPOTIFY_HTTP_TIMEOUT", "15"))
SPOTIFY_MARKET = os.getenv("SPOTIFY_MARKET", "BR")

SCOPES = [
    "user-read-private",
    "user-read-email",
    "playlist-read-private",
    "playlist-modify-public",
    "playlist-modify-private",
    "user-library-read",
]

# OAuth state (CSRF) cookie
STATE_COOKIE_NAME = "spotify_auth_state"
STATE_LENGTH = 16
STATE_COOKIE_MAX_AGE = 600
STATE_COOKIE_SECURE = APP_ENV == "production"

# Upstream limits
ARTIST_CANDIDATES_LIMIT = 5
ALBUMS_PAGE_LIMIT = 50
ALBUMS_MAX_PAGES = 4
ALBUM_INCLUDE_GROUPS = "album,single,compilation"
ALBUM_TRACKS_LIMIT = 50
COLLAB_SEARCH_LIMIT = 50
PLAYLISTS_PAGE_LIMIT = 50
PLAYLIST_BATCH_SIZE = 100

# Backpressure between sequential upstream calls (seconds)
ALBUM_FETCH_DELAY = float(os.getenv("ALBUM_FETCH_DELAY", "0.1"))
ALBUM_ERROR_DELAY = float(os.getenv("ALBUM_ERROR_DELAY", "1.0"))
BATCH_DELAY = float(os.getenv("BATCH_DELAY", "0.2"))

# Playlist naming
PLAYLIST_NAME_PREFIX = "Tracks by "

# Session client (the browser-side token holder)
APP_BASE_URL = os.getenv("APP_BASE_URL", f"http://127.0.0.1:{PORT}")
SESSION_TOKEN_FILE = os.getenv(
    "SESSION_TOKEN_FILE",
    os.path.join(os.path.expanduser("~"), ".artist_playlists", "session.json"),
)
