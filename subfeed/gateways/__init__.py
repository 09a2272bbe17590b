"""Gateway implementations package."""
from .catalog import HttpCatalogGateway
from .identity import TokenIdentityProvider
from .memory import InMemoryCatalogGateway, video_record

__all__ = [
    "HttpCatalogGateway",
    "InMemoryCatalogGateway",
    "TokenIdentityProvider",
    "video_record",
]
