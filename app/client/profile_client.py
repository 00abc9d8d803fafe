"""HTTP client for the marketplace and profile endpoints.

Constructed explicitly and handed to whatever needs it (hooks, scripts,
tests); there is no module-level instance. Requests and responses use the
camelCase field names; the server owns the mapping to storage columns.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

import httpx

from app.core.constants import WRITABLE_FIELDS
from app.modules.marketplace.schemas import SearchFilters, SearchResult
from app.modules.profiles.schemas import ProfileResponse
from app.modules.profiles.validation import normalize_keys

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]


class ProfileClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def _writable_payload(profile_data: Mapping[str, Any], keep_null: bool = False) -> Dict[str, Any]:
    """Keep caller-writable fields. None values are dropped unless ``keep_null``,
    in which case they are sent and the server clears the field."""
    data = normalize_keys(profile_data)
    return {
        field: data[field]
        for field in WRITABLE_FIELDS
        if field in data and (keep_null or data[field] is not None)
    }


def _search_params(filters: SearchFilters) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if filters.search:
        params["search"] = filters.search
    if filters.location:
        params["location"] = filters.location
    if filters.role:
        params["role"] = filters.role
    if filters.limit:
        params["limit"] = str(filters.limit)
    if filters.offset:
        params["offset"] = str(filters.offset)
    return params


class ProfileClient:
    """Async client for the profile service.

    Args:
        base_url: Root URL of the API, e.g. ``https://api.example.com``.
        token_provider: Returns the current access token (or None when signed
            out). May be a plain function or a coroutine function.
        transport: Optional httpx transport, e.g. ``httpx.ASGITransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.token_provider = token_provider
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ProfileClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _access_token(self) -> Optional[str]:
        if self.token_provider is None:
            return None
        token = self.token_provider()
        if inspect.isawaitable(token):
            token = await token
        return token or None

    async def _auth_headers(self, required: bool) -> Dict[str, str]:
        token = await self._access_token()
        if not token:
            if required:
                raise ProfileClientError("User not authenticated", 401)
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, fallback_error: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ProfileClientError(fallback_error) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            details = body.get("details") if isinstance(body, dict) else None
            raise ProfileClientError(message or fallback_error, response.status_code, details)
        return body

    async def search_profiles(self, filters: Optional[SearchFilters] = None) -> SearchResult:
        filters = filters or SearchFilters()
        body = await self._request(
            "GET", "/marketplace", "Failed to search profiles", params=_search_params(filters)
        )
        return SearchResult.model_validate(body)

    async def get_profile(self, profile_id: str) -> ProfileResponse:
        headers = await self._auth_headers(required=False)
        body = await self._request(
            "GET", f"/profiles/{profile_id}", "Failed to fetch profile", headers=headers
        )
        return ProfileResponse.model_validate(body["profile"])

    async def create_profile(self, profile_data: Mapping[str, Any]) -> ProfileResponse:
        headers = await self._auth_headers(required=True)
        body = await self._request(
            "POST", "/profiles", "Failed to create profile",
            headers=headers, json=_writable_payload(profile_data),
        )
        return ProfileResponse.model_validate(body["profile"])

    async def update_profile(self, profile_data: Mapping[str, Any]) -> ProfileResponse:
        headers = await self._auth_headers(required=True)
        body = await self._request(
            "PUT", "/profiles", "Failed to update profile",
            headers=headers, json=_writable_payload(profile_data, keep_null=True),
        )
        return ProfileResponse.model_validate(body["profile"])
