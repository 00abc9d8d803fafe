"""
Domain rules shared by the validator, the gateways and the HTTP client.
"""

import re
from typing import Dict, List

# Service categories a profile can register under. Stored verbatim, case-sensitive.
PROFILE_ROLES: List[str] = [
    "Property 360",
    "Builder",
    "Advocate",
    "Landowner",
    "Society",
    "Interior",
    "Consulting",
]

# Indian mobile number, digits only
PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGITS = re.compile(r"\D")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128

# Upper bounds for optional free-text fields
MAX_LENGTHS: Dict[str, int] = {
    "serviceName": 200,
    "bio": 1000,
    "location": 100,
    "price": 50,
}

ALL_LOCATIONS = "All Locations"
ALL_ROLES = "All Roles"

SELF_PROFILE_ID = "me"

# application field -> storage column
FIELD_TO_COLUMN: Dict[str, str] = {
    "id": "id",
    "email": "email",
    "name": "name",
    "phone": "phone",
    "role": "role",
    "serviceName": "service_name",
    "bio": "bio",
    "location": "location",
    "price": "price",
    "profileImage": "profile_image",
    "bannerImage": "banner_image",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
COLUMN_TO_FIELD: Dict[str, str] = {v: k for k, v in FIELD_TO_COLUMN.items()}

# Fields a caller may write. id, email and timestamps are server-owned.
WRITABLE_FIELDS: List[str] = [
    "name",
    "phone",
    "role",
    "serviceName",
    "bio",
    "location",
    "price",
    "profileImage",
    "bannerImage",
]
REQUIRED_FIELDS: List[str] = ["name", "phone", "role"]
OPTIONAL_TEXT_FIELDS: List[str] = ["serviceName", "bio", "location", "price"]
IMAGE_FIELDS: List[str] = ["profileImage", "bannerImage"]

# Public projection used by marketplace search; contact details are left out.
MARKETPLACE_COLUMNS: List[str] = [
    "id",
    "name",
    "role",
    "service_name",
    "bio",
    "location",
    "price",
    "profile_image",
    "banner_image",
    "created_at",
]
SEARCH_COLUMNS: List[str] = ["name", "service_name", "bio"]
