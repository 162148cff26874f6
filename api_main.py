import uvicorn

from artist_playlists.api.fastapi_app import app
from artist_playlists.config import PORT

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
