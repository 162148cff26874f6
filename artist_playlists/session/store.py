from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from artist_playlists.config import SESSION_TOKEN_FILE
from artist_playlists.core import log_warning, read_json, remove_file, write_json


@dataclass
class TokenPair:
    access_token: str
    refresh_token: Optional[str] = None

    def to_dict(self) -> dict:
        return {"access_token": self.access_token, "refresh_token": self.refresh_token}


class TokenStore:
    """
    Local persistence of the token pair (the client's "local storage").

    The file holds {"access_token": ..., "refresh_token": ...} and is written
    atomically.
    """

    def __init__(self, path: str | Path = SESSION_TOKEN_FILE) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Optional[TokenPair]:
        data = read_json(
            self.path,
            default=None,
            on_error=lambda e: log_warning(f"Ignoring corrupted token file: {e}"),
        )
        if not isinstance(data, dict) or not data.get("access_token"):
            return None
        return TokenPair(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
        )

    def save(self, tokens: TokenPair) -> None:
        write_json(self.path, tokens.to_dict())

    def clear(self) -> None:
        remove_file(self.path)
