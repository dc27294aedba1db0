from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class ServiceConnection(BaseModel):
    """Connection settings for one backend service."""
    url: str
    api_key: str


class Settings(BaseSettings):
    overseerr: ServiceConnection
    tautulli: ServiceConnection
    radarr: ServiceConnection
    sonarr: ServiceConnection
    radarr_4k: Optional[ServiceConnection] = None
    sonarr_4k: Optional[ServiceConnection] = None
    
    history_page_size: int = 1000
    request_page_size: int = 100
    request_filter: str = "all"
    max_selections: int = 5
    default_sort: str = "n"
    http_timeout: float = 30.0
    
    class Config:
        env_prefix = "MEDIACULL_"
        env_nested_delimiter = "__"
        env_file = ".env"
        extra = "ignore"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the environment and the optional env file."""
    if env_file:
        return Settings(_env_file=env_file)
    return Settings()
