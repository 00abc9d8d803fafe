import logging

from supabase import create_client, Client
from app.config.settings import settings
from app.core.exceptions import InternalError

logger = logging.getLogger(__name__)


def _connect(key: str, label: str) -> Client:
    if not settings.supabase_url or not key:
        logger.error("Supabase %s client requested but SUPABASE_URL or its key is not set", label)
        raise InternalError("Datastore is not configured")
    logger.info("Connecting %s Supabase client to %s", label, settings.supabase_url)
    return create_client(settings.supabase_url, key)


class SupabaseClient:
    """Process-wide Supabase clients, created on first use."""

    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Anon-key client; used to verify bearer tokens."""
        if cls._client is None:
            cls._client = _connect(settings.supabase_key, "anon")
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Service-role client for profile reads and writes made on behalf of a verified
        caller. Falls back to the anon client when no service key is configured."""
        if cls._service_client is None:
            if not settings.supabase_service_role_key:
                return cls.get_client()
            cls._service_client = _connect(settings.supabase_service_role_key, "service")
        return cls._service_client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
