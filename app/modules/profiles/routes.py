from fastapi import APIRouter, Depends
from app.core.constants import SELF_PROFILE_ID
from app.core.dependencies import get_auth_service, get_bearer_token, get_current_user
from app.core.exceptions import Unauthorized
from app.database.supabase_client import get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.profiles.schemas import (
    ProfileCreate, ProfileUpdate, ProfileEnvelope, ProfileMutationResponse
)
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_service_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.post("", response_model=ProfileMutationResponse, status_code=201)
async def create_profile(
    profile_data: ProfileCreate,
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Create the caller's profile (one per user)"""
    profile = service.create_profile(current_user, profile_data)
    return ProfileMutationResponse(message="Profile created successfully", profile=profile)


@router.put("", response_model=ProfileMutationResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Partially update the caller's profile"""
    profile = service.update_profile(current_user, profile_data)
    return ProfileMutationResponse(message="Profile updated successfully", profile=profile)


@router.get("/{profile_id}", response_model=ProfileEnvelope)
async def get_profile(
    profile_id: str,
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
    service: ProfileService = Depends(get_profile_service)
):
    """Get a profile by id, or the caller's own with `me`. Anonymous reads are allowed for other ids."""
    if profile_id == SELF_PROFILE_ID:
        if not token:
            raise Unauthorized("Authorization header required")
        profile_id = auth_service.get_current_user(token)["id"]
    return ProfileEnvelope(profile=service.get_profile(profile_id))
