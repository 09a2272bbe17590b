"""
Dependency injection container.
Creates and wires all application components.
Uses FastAPI's dependency injection system.
"""
from functools import lru_cache

from subfeed.config import get_settings
from subfeed.gateways.catalog import HttpCatalogGateway
from subfeed.gateways.identity import TokenIdentityProvider
from subfeed.gateways.memory import InMemoryCatalogGateway
from subfeed.models.interfaces import CatalogGateway, IdentityProvider
from subfeed.models.schemas import Credentials
from subfeed.services.feed import FeedAssembler
from subfeed.services.playback import PlaybackController
from subfeed.services.search import SearchPipeline
from subfeed.services.session import SessionManager


# =============================================================================
# Singleton Instances (Application Lifetime)
# =============================================================================


@lru_cache()
def get_identity_provider() -> IdentityProvider:
    """Get singleton identity provider."""
    return TokenIdentityProvider()


@lru_cache()
def get_session_manager() -> SessionManager:
    """Get singleton session manager."""
    return SessionManager(provider=get_identity_provider())


@lru_cache()
def get_catalog_gateway() -> CatalogGateway:
    """Get singleton catalog gateway for the configured backend."""
    settings = get_settings()
    if settings.CATALOG_BACKEND == "memory":
        return InMemoryCatalogGateway.with_mock_data()
    return HttpCatalogGateway(
        api_key=settings.YT_API_KEY,
        token_supplier=get_session_manager().access_token,
        base_url=settings.CATALOG_BASE_URL,
        timeout_sec=settings.CATALOG_TIMEOUT_SEC,
        subscription_page_size=settings.SUBSCRIPTION_PAGE_SIZE,
        subscription_max_pages=settings.SUBSCRIPTION_MAX_PAGES,
    )


@lru_cache()
def get_feed_assembler() -> FeedAssembler:
    """Get singleton feed assembler, subscribed to session changes."""
    settings = get_settings()
    assembler = FeedAssembler(
        gateway=get_catalog_gateway(),
        session=get_session_manager(),
        recent_limit=settings.CHANNEL_RECENT_LIMIT,
        batch_size=settings.DETAILS_BATCH_SIZE,
        concurrency=settings.CHANNEL_FETCH_CONCURRENCY,
    )
    get_session_manager().subscribe(assembler.on_session_change)
    return assembler


@lru_cache()
def get_search_pipeline() -> SearchPipeline:
    """Get singleton search pipeline, cleared on sign-out."""
    pipeline = SearchPipeline(
        gateway=get_catalog_gateway(),
        result_limit=get_settings().SEARCH_RESULT_LIMIT,
    )
    get_session_manager().subscribe(pipeline.on_session_change)
    return pipeline


@lru_cache()
def get_playback_controller() -> PlaybackController:
    """Get singleton playback controller, cleared on sign-out."""
    controller = PlaybackController()
    get_session_manager().subscribe(controller.on_session_change)
    return controller


def get_credentials() -> Credentials:
    """Identity provider configuration from settings."""
    settings = get_settings()
    return Credentials(
        client_id=settings.GOOGLE_CLIENT_ID,
        api_key=settings.YT_API_KEY,
        scope=settings.OAUTH_SCOPE,
    )


def wire_components() -> SessionManager:
    """Build every singleton so session subscribers exist before initialize()."""
    get_feed_assembler()
    get_search_pipeline()
    get_playback_controller()
    return get_session_manager()


# =============================================================================
# Cleanup Functions
# =============================================================================


def clear_caches() -> None:
    """Clear all cached singleton instances (for testing)."""
    get_identity_provider.cache_clear()
    get_session_manager.cache_clear()
    get_catalog_gateway.cache_clear()
    get_feed_assembler.cache_clear()
    get_search_pipeline.cache_clear()
    get_playback_controller.cache_clear()
