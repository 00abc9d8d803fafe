from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Optional
from datetime import datetime


class ProfileBase(BaseModel):
    """Fields are named after storage columns; JSON uses the camelCase aliases.

    Values are left untyped here; sanitize() coerces them and the profile checks
    report bad ones, after the create conflict check has run.
    """
    name: Optional[Any] = None
    phone: Optional[Any] = None
    role: Optional[Any] = None
    service_name: Optional[Any] = None
    bio: Optional[Any] = None
    location: Optional[Any] = None
    price: Optional[Any] = None
    profile_image: Optional[Any] = None
    banner_image: Optional[Any] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ProfileCreate(ProfileBase):
    pass


class ProfileUpdate(ProfileBase):
    pass


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    name: str
    phone: Optional[str] = None
    role: str
    service_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    price: Optional[str] = None
    profile_image: Optional[str] = None
    banner_image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ProfileEnvelope(BaseModel):
    profile: ProfileResponse


class ProfileMutationResponse(BaseModel):
    message: str
    profile: ProfileResponse
