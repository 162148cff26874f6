from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SearchArtistRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    artist_name: Optional[str] = Field(default=None, alias="artistName")
    access_token: Optional[str] = Field(default=None, alias="accessToken")
    excluded_ids: List[str] = Field(default_factory=list, alias="excludedIds")


class ArtistSummary(BaseModel):
    id: str
    name: str
    image: Optional[str] = None
    followers: int


class SearchArtistResponse(BaseModel):
    artist: ArtistSummary


class ArtistDetailsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(default=None, alias="accessToken")
    artist_id: Optional[str] = Field(default=None, alias="artistId")
    artist_name: Optional[str] = Field(default=None, alias="artistName")
