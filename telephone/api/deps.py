"""Shared FastAPI dependencies: provider factory, catalog, credentials.

The DeepLProviderFactory (one pooled httpx client) is created once during
the FastAPI lifespan and stored on app.state. Routes build a provider per
request from the caller's own key, never from a process-wide default.
"""

from fastapi import Header, Request

from telephone.core.exceptions import ValidationError
from telephone.services.language.catalog import CATALOG, LanguageCatalog
from telephone.services.translation.deepl import DeepLProviderFactory


def get_provider_factory(request: Request) -> DeepLProviderFactory:
    """Return the singleton provider factory from app state."""
    return request.app.state.provider_factory


def get_catalog() -> LanguageCatalog:
    return CATALOG


def get_header_api_key(
    x_deepl_auth_key: str | None = Header(None, alias="X-DeepL-Auth-Key"),
) -> str:
    """Credential for GET routes, which have no request body."""
    if not x_deepl_auth_key or not x_deepl_auth_key.strip():
        raise ValidationError("API key is required")
    return x_deepl_auth_key.strip()
