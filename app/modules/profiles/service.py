import logging
from datetime import datetime, timezone
from typing import Any, Dict

from postgrest.exceptions import APIError
from supabase import Client

from app.config.settings import settings
from app.core.constants import FIELD_TO_COLUMN, WRITABLE_FIELDS
from app.core.exceptions import AppError, Conflict, InternalError, NotFound, ValidationError
from app.modules.profiles.schemas import ProfileCreate, ProfileUpdate, ProfileResponse
from app.modules.profiles.validation import normalize_keys, sanitize, validate_fields

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"  # e.g. a malformed uuid in the id filter


def _to_storage(candidate: Dict[str, str], fields) -> Dict[str, Any]:
    """Map sanitized application fields to storage columns. Blank optionals become NULL."""
    return {FIELD_TO_COLUMN[field]: candidate[field] or None for field in fields}


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _table(self):
        return self.supabase.table(settings.profiles_table)

    def profile_exists(self, user_id: str) -> bool:
        result = self._table()\
            .select("id")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return bool(result.data)

    def get_profile(self, profile_id: str) -> ProfileResponse:
        """Get a single profile by id"""
        try:
            result = self._table()\
                .select("*")\
                .eq("id", profile_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise NotFound("Profile not found")
            return ProfileResponse(**result.data[0])
        except AppError:
            raise
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                raise NotFound("Profile not found")
            logger.exception("Get profile error for %s", profile_id)
            raise InternalError("Failed to fetch profile")
        except Exception:
            logger.exception("Get profile error for %s", profile_id)
            raise InternalError("Failed to fetch profile")

    def create_profile(self, user_data: Dict[str, Any], profile_data: ProfileCreate) -> ProfileResponse:
        """Create the caller's profile. The row id is always the caller's identity."""
        user_id = user_data["id"]
        try:
            # Fast path only; the unique key on id decides races at insert time.
            if self.profile_exists(user_id):
                raise Conflict("Profile already exists for this user")

            candidate = sanitize(profile_data.model_dump(exclude_unset=True))
            validation = validate_fields(candidate, WRITABLE_FIELDS)
            if not validation.valid:
                raise ValidationError("Invalid profile data", validation.errors)

            row = _to_storage(candidate, WRITABLE_FIELDS)
            row["id"] = user_id
            row["email"] = (user_data.get("email") or "").lower() or None

            result = self._table().insert(row).execute()
            if not result.data:
                raise InternalError("Failed to create profile")

            logger.info("Created profile %s (%s)", user_id, row["role"])
            return ProfileResponse(**result.data[0])
        except AppError:
            raise
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise Conflict("Profile already exists for this user")
            logger.exception("Profile creation error for %s", user_id)
            raise InternalError("Failed to create profile")
        except Exception:
            logger.exception("Profile creation error for %s", user_id)
            raise InternalError("Failed to create profile")

    def update_profile(self, user_data: Dict[str, Any], profile_data: ProfileUpdate) -> ProfileResponse:
        """Apply a partial update to the caller's profile. Keys absent from the request are left alone."""
        user_id = user_data["id"]
        supplied = normalize_keys(profile_data.model_dump(exclude_unset=True))
        fields = [field for field in WRITABLE_FIELDS if field in supplied]
        if not fields:
            raise ValidationError("No valid fields provided for update")

        candidate = sanitize(supplied)
        validation = validate_fields(candidate, fields)
        if not validation.valid:
            raise ValidationError("Invalid profile data", validation.errors)

        update_data = _to_storage(candidate, fields)
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self._table()\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                raise NotFound("Profile not found")

            logger.info("Updated profile %s fields=%s", user_id, ",".join(fields))
            return ProfileResponse(**result.data[0])
        except AppError:
            raise
        except Exception:
            logger.exception("Profile update error for %s", user_id)
            raise InternalError("Failed to update profile")
