"""Wire records returned by the request tracker and the history backend."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mediacull.models.media import MediaType


class HistoryRecord(BaseModel):
    """One playback event as reported by Tautulli."""
    
    user: str
    date: int
    percent_complete: int = 0
    parent_media_index: Optional[int] = None
    media_index: Optional[int] = None
    
    @field_validator("parent_media_index", "media_index", mode="before")
    @classmethod
    def blank_index_to_none(cls, value):
        # Tautulli sends "" for movies
        if value == "":
            return None
        return value


class HistoryPage(BaseModel):
    records: list[HistoryRecord] = Field(default_factory=list, alias="data")
    records_filtered: int = Field(default=0, alias="recordsFiltered")
    records_total: int = Field(default=0, alias="recordsTotal")
    
    model_config = ConfigDict(populate_by_name=True)


class RequestedMedia(BaseModel):
    media_type: MediaType = Field(alias="mediaType")
    tmdb_id: Optional[int] = Field(default=None, alias="tmdbId")
    external_service_id: Optional[int] = Field(default=None, alias="externalServiceId")
    external_service_id_4k: Optional[int] = Field(default=None, alias="externalServiceId4k")
    rating_key: Optional[str] = Field(default=None, alias="ratingKey")
    rating_key_4k: Optional[str] = Field(default=None, alias="ratingKey4k")
    
    model_config = ConfigDict(populate_by_name=True)
    
    @field_validator("rating_key", "rating_key_4k", mode="before")
    @classmethod
    def rating_key_to_str(cls, value):
        if value is None or value == "":
            return None
        return str(value)


class MediaRequest(BaseModel):
    """A request tracked by Overseerr."""
    
    id: int
    type: MediaType
    is4k: bool = False
    media: RequestedMedia
    
    @property
    def external_id(self) -> Optional[int]:
        """Radarr/Sonarr id of the instance this request was sent to."""
        if self.is4k:
            return self.media.external_service_id_4k
        return self.media.external_service_id
    
    @property
    def rating_key(self) -> Optional[str]:
        if self.is4k:
            return self.media.rating_key_4k
        return self.media.rating_key
