from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class Artist:
    id: str
    name: str
    image_url: Optional[str]
    follower_count: int

    @classmethod
    def from_spotify(cls, raw: Dict[str, Any]) -> "Artist":
        images = raw.get("images") or []
        followers = raw.get("followers") or {}
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            image_url=images[0].get("url") if images else None,
            follower_count=int(followers.get("total") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image_url,
            "followers": self.follower_count,
        }


@dataclass
class Track:
    """
    A candidate track offered to the user.

    `id` is the upstream track id and the deduplication key.
    """

    id: str
    uri: str
    name: str
    album_name: Optional[str]
    artist_names: List[str] = field(default_factory=list)

    @classmethod
    def from_spotify(
        cls, raw: Dict[str, Any], album_name: Optional[str] = None
    ) -> "Track":
        # Album track listings omit the album object, so the caller passes it.
        if album_name is None:
            album_name = (raw.get("album") or {}).get("name")
        return cls(
            id=raw["id"],
            uri=raw.get("uri") or f"spotify:track:{raw['id']}",
            name=raw.get("name", ""),
            album_name=album_name,
            artist_names=[a.get("name", "") for a in raw.get("artists") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "uri": self.uri,
            "name": self.name,
            "albumName": self.album_name,
            "artistNames": list(self.artist_names),
            "album": {"name": self.album_name},
            "artists": [{"name": n} for n in self.artist_names],
        }


@dataclass
class Playlist:
    id: str
    name: str
    track_count: int

    @classmethod
    def from_spotify(cls, raw: Dict[str, Any]) -> "Playlist":
        tracks = raw.get("tracks") or {}
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            track_count=int(tracks.get("total") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "trackCount": self.track_count,
            "tracks": {"total": self.track_count},
        }


class DestinationMode(str, Enum):
    NEW = "new"
    EXISTING = "existing"


@dataclass
class PlaylistDestination:
    mode: DestinationMode
    name: Optional[str] = None
    playlist_id: Optional[str] = None


@dataclass
class PlaylistCreationRequest:
    track_uris: List[str]
    destination: PlaylistDestination
    artist_name: str = ""


@dataclass
class PlaylistWriteResult:
    playlist_id: str
    batches_written: int
    snapshot_id: Optional[str] = None
