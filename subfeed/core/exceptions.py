"""
Custom exception hierarchy for centralized error handling.
All exceptions map to appropriate HTTP status codes.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class ValidationError(AppException):
    """Invalid input data."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


# =============================================================================
# Session / Identity
# =============================================================================


class ConfigurationError(AppException):
    """Credentials missing or placeholders - auth features disabled."""

    def __init__(self, missing: Optional[list] = None) -> None:
        super().__init__(
            message="Sign-in is unavailable: OAuth client id and API key must be configured",
            status_code=503,
            error_code="CONFIGURATION_ERROR",
            details={"missing": missing or []},
        )


class AuthInitError(AppException):
    """Identity provider initialization failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Sign-in service failed to initialize: {reason}",
            status_code=503,
            error_code="AUTH_INIT_ERROR",
            details={"reason": reason},
        )


class AuthActionError(AppException):
    """Sign-in or sign-out failed. The user may retry."""

    def __init__(self, action: str, reason: str) -> None:
        super().__init__(
            message=f"Could not {action}: {reason}",
            status_code=401,
            error_code="AUTH_ACTION_ERROR",
            details={"action": action, "reason": reason},
        )


class SessionRequiredError(AppException):
    """Operation needs a signed-in session."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            message=f"Sign in to use {operation}",
            status_code=401,
            error_code="SESSION_REQUIRED",
            details={"operation": operation},
        )


class IdentityProviderError(Exception):
    """Raised by identity providers; converted by the session manager."""


# =============================================================================
# Catalog API
# =============================================================================


class CatalogError(AppException):
    """Remote catalog call failed."""

    def __init__(
        self,
        message: str,
        error_code: str = "CATALOG_ERROR",
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


class CatalogAuthorizationError(CatalogError):
    """Catalog rejected the credentials or scope."""

    def __init__(self, endpoint: str, reason: str = "unauthorized") -> None:
        super().__init__(
            message=f"Catalog authorization failed for {endpoint}: {reason}",
            error_code="CATALOG_UNAUTHORIZED",
            details={"endpoint": endpoint, "reason": reason},
        )


class CatalogQuotaError(CatalogError):
    """Catalog quota or rate limit exhausted."""

    def __init__(self, endpoint: str, reason: str = "quotaExceeded") -> None:
        super().__init__(
            message=f"Catalog quota exceeded for {endpoint}: {reason}",
            error_code="CATALOG_QUOTA_EXCEEDED",
            details={"endpoint": endpoint, "reason": reason},
        )


class CatalogUnavailableError(CatalogError):
    """Transport failure or unexpected status from the catalog."""

    def __init__(self, endpoint: str, reason: str = "Unknown") -> None:
        super().__init__(
            message=f"Catalog unavailable for {endpoint}: {reason}",
            error_code="CATALOG_UNAVAILABLE",
            details={"endpoint": endpoint, "reason": reason},
        )


class CatalogResponseError(CatalogError):
    """Catalog payload could not be decoded or normalized."""

    def __init__(self, endpoint: str, reason: str = "Unknown") -> None:
        super().__init__(
            message=f"Malformed catalog response from {endpoint}: {reason}",
            error_code="CATALOG_BAD_RESPONSE",
            details={"endpoint": endpoint, "reason": reason},
        )


# =============================================================================
# Pipelines
# =============================================================================


class FeedAssemblyError(AppException):
    """Feed pipeline failed; the previous feed is retained."""

    def __init__(self, reason: str, cause_code: str = "UNKNOWN") -> None:
        super().__init__(
            message=(
                "Could not load your subscription feed. "
                f"Check the API quota and permissions. ({reason})"
            ),
            status_code=502,
            error_code="FEED_ASSEMBLY_ERROR",
            details={"reason": reason, "cause": cause_code},
        )


class SearchError(AppException):
    """Search pipeline failed; previous results are retained."""

    def __init__(self, query: str, reason: str, cause_code: str = "UNKNOWN") -> None:
        super().__init__(
            message=f"Search failed. Check the API key and quota. ({reason})",
            status_code=502,
            error_code="SEARCH_ERROR",
            details={"query": query, "reason": reason, "cause": cause_code},
        )
