import io

import httpx
import pytest
from rich.console import Console

from mediacull.config import ServiceConnection, Settings
from mediacull.models import MediaItem, MediaType
from mediacull.services import Backends


def make_item(title, media_type=MediaType.MOVIE, external_id=1, size=None, is_4k=False):
    return MediaItem(
        title=title,
        media_type=media_type,
        external_id=external_id,
        size=size,
        status="released" if media_type is MediaType.MOVIE else "ended",
        is_4k=is_4k
    )


@pytest.fixture
def settings():
    return Settings(
        overseerr=ServiceConnection(url="http://overseerr.test", api_key="o-key"),
        tautulli=ServiceConnection(url="http://tautulli.test/", api_key="t-key"),
        radarr=ServiceConnection(url="http://radarr.test", api_key="r-key"),
        sonarr=ServiceConnection(url="http://sonarr.test", api_key="s-key"),
        radarr_4k=ServiceConnection(url="http://radarr4k.test", api_key="r4-key"),
    )


@pytest.fixture
def sent():
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_backends(settings, sent):
    """Build real clients that talk to a handler instead of the network."""
    def factory(handler):
        def record(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return handler(request)
        return Backends.from_settings(settings, transport=httpx.MockTransport(record))
    return factory


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)
