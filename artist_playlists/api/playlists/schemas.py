from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreatePlaylistRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(default=None, alias="accessToken")
    artist_name: str = Field(default="", alias="artistName")
    track_uris: List[str] = Field(default_factory=list, alias="trackUris")
    playlist_option: Optional[str] = Field(default=None, alias="playlistOption")
    target_playlist_id: Optional[str] = Field(default=None, alias="targetPlaylistId")
    new_playlist_name: Optional[str] = Field(default=None, alias="newPlaylistName")


class CreatePlaylistResponse(BaseModel):
    message: str
    playlistId: str
    batchesWritten: int
    snapshotId: Optional[str] = None
