"""Services package - business logic layer."""
from .feed import FeedAssembler
from .playback import PlaybackController
from .search import SearchPipeline
from .session import SessionManager
from .videos import chunked, in_discovery_order, newest_first, summarize

__all__ = [
    "FeedAssembler",
    "PlaybackController",
    "SearchPipeline",
    "SessionManager",
    "chunked",
    "in_discovery_order",
    "newest_first",
    "summarize",
]
