"""Core infrastructure components."""
from .duration import Classification, classify, is_short_form, parse_duration_seconds
from .exceptions import (
    AppException,
    AuthActionError,
    AuthInitError,
    CatalogAuthorizationError,
    CatalogError,
    CatalogQuotaError,
    CatalogResponseError,
    CatalogUnavailableError,
    ConfigurationError,
    FeedAssemblyError,
    IdentityProviderError,
    SearchError,
    SessionRequiredError,
    ValidationError,
)

__all__ = [
    "AppException",
    "AuthActionError",
    "AuthInitError",
    "CatalogAuthorizationError",
    "CatalogError",
    "CatalogQuotaError",
    "CatalogResponseError",
    "CatalogUnavailableError",
    "Classification",
    "ConfigurationError",
    "FeedAssemblyError",
    "IdentityProviderError",
    "SearchError",
    "SessionRequiredError",
    "ValidationError",
    "classify",
    "is_short_form",
    "parse_duration_seconds",
]
