"""
Marketplace search: filter composition, newest-first ordering and pagination
over the profiles table.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client

from app.config.settings import settings
from app.core.constants import ALL_LOCATIONS, ALL_ROLES, MARKETPLACE_COLUMNS, SEARCH_COLUMNS
from app.core.exceptions import InternalError
from app.modules.marketplace.schemas import Pagination, SearchFilters, SearchResult
from app.modules.profiles.schemas import ProfileResponse

logger = logging.getLogger(__name__)

RANGE_NOT_SATISFIABLE = "PGRST103"  # offset past the last matching row


def _coerce_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def parse_filters(
    search: Optional[str] = None,
    location: Optional[str] = None,
    role: Optional[str] = None,
    limit: Any = None,
    offset: Any = None,
) -> SearchFilters:
    """Build filters from raw query values. Never fails: bad numbers fall back to defaults."""
    page_size = _coerce_int(limit, settings.default_page_size)
    if page_size < 1:
        page_size = settings.default_page_size
    page_size = min(page_size, settings.max_page_size)

    start = _coerce_int(offset, 0)
    if start < 0:
        start = 0

    return SearchFilters(
        search=(search or "").strip() or None,
        location=(location or "").strip() or None,
        role=(role or "").strip() or None,
        limit=page_size,
        offset=start,
    )


def build_pagination(total: int, limit: int, offset: int) -> Pagination:
    return Pagination(total=total, limit=limit, offset=offset, has_more=offset + limit < total)


REGEX_SPECIALS = frozenset(r"\.^$*+?()[]{}|")


def escape_regex(text: str) -> str:
    """Escape POSIX regex metacharacters so the search text matches literally.

    LIKE patterns are avoided: PostgREST reads `*` in a like operand as `%`
    and offers no escape for it.
    """
    return "".join("\\" + ch if ch in REGEX_SPECIALS else ch for ch in text)


def _quote(value: str) -> str:
    # PostgREST reserves , . : ( ) inside or=(...); a quoted value may contain them
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def build_search_filter(search: str) -> str:
    """`or` filter matching the text anywhere in name, service_name or bio, case-insensitively."""
    pattern = _quote(escape_regex(search))
    return ",".join(f"{column}.imatch.{pattern}" for column in SEARCH_COLUMNS)


class MarketplaceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _apply_filters(self, query, filters: SearchFilters):
        if filters.search:
            query = query.or_(build_search_filter(filters.search))
        if filters.location and filters.location != ALL_LOCATIONS:
            query = query.eq("location", filters.location)
        if filters.role and filters.role != ALL_ROLES:
            query = query.eq("role", filters.role)
        return query

    def _count(self, filters: SearchFilters) -> int:
        query = self.supabase.table(settings.profiles_table).select("id", count="exact", head=True)
        result = self._apply_filters(query, filters).execute()
        return result.count or 0

    def search_profiles(self, filters: SearchFilters) -> SearchResult:
        """Filter, order newest first, then window. `total` counts every match, ignoring the window."""
        try:
            query = self.supabase.table(settings.profiles_table)\
                .select(",".join(MARKETPLACE_COLUMNS), count="exact")
            query = self._apply_filters(query, filters)\
                .order("created_at", desc=True)\
                .range(filters.offset, filters.offset + filters.limit - 1)
            try:
                result = query.execute()
                rows, total = result.data or [], result.count or 0
            except APIError as e:
                if e.code != RANGE_NOT_SATISFIABLE:
                    raise
                rows, total = [], self._count(filters)

            return SearchResult(
                profiles=[ProfileResponse(**row) for row in rows],
                pagination=build_pagination(total, filters.limit, filters.offset),
            )
        except Exception:
            logger.exception("Search profiles error")
            raise InternalError("Failed to search profiles")
