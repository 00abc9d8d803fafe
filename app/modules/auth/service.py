import logging
from supabase import Client
from typing import Dict, Any

from app.core.exceptions import Unauthorized

logger = logging.getLogger(__name__)


class AuthService:
    """Resolves bearer tokens against Supabase Auth. Sign-up and sign-in happen client-side."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from a Supabase Auth access token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise Unauthorized("Invalid or expired token")
            logger.warning("Token verification failed: %s", error_msg)
            raise Unauthorized("Authentication failed")

        if not user_response or not user_response.user:
            raise Unauthorized("Invalid or expired token")
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }
