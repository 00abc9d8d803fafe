"""
Profile validation and sanitization.

Pure functions shared by the profile gateway and the HTTP client. Every check
runs independently and all failures are collected into a field -> message map.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel

from app.core.constants import (
    COLUMN_TO_FIELD,
    EMAIL_PATTERN,
    IMAGE_FIELDS,
    MAX_LENGTHS,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NON_DIGITS,
    OPTIONAL_TEXT_FIELDS,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PHONE_PATTERN,
    PROFILE_ROLES,
)

_LABELS = {
    "serviceName": "Service name",
    "bio": "Bio",
    "location": "Location",
    "price": "Price",
}

SANITIZED_FIELDS = [
    "name",
    "email",
    "phone",
    "role",
    "serviceName",
    "bio",
    "location",
    "price",
    "profileImage",
    "bannerImage",
]


class ValidationResult(BaseModel):
    valid: bool
    errors: Dict[str, str]


def _text(value: Any) -> str:
    """Scalars become trimmed text; None and structured values (lists, objects) become ''."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value).strip()
    return ""


def digits_only(value: Any) -> str:
    return NON_DIGITS.sub("", _text(value))


def normalize_keys(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Accept storage (snake_case) or application (camelCase) keys, return camelCase."""
    if not isinstance(raw, Mapping) or not raw:
        return {}
    normalized: Dict[str, Any] = {}
    for key, value in raw.items():
        if key == "confirm_password":
            key = "confirmPassword"
        normalized[COLUMN_TO_FIELD.get(key, key)] = value
    return normalized


def sanitize(raw: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Trim strings, lowercase email, strip non-digits from phone, fill absent fields with ''."""
    data = normalize_keys(raw)
    candidate = {field: _text(data.get(field)) for field in SANITIZED_FIELDS}
    candidate["email"] = candidate["email"].lower()
    candidate["phone"] = digits_only(candidate["phone"])
    return candidate


def format_phone_number(phone: str) -> str:
    cleaned = digits_only(phone)
    if len(cleaned) == 10:
        return f"+91 {cleaned[:5]} {cleaned[5:]}"
    return phone


def validate_image_url(url: Any) -> bool:
    """Empty is fine (the field is optional); otherwise an absolute http(s) URL."""
    text = _text(url)
    if not text:
        return True
    parsed = urlparse(text)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _check_name(value: Any) -> Optional[str]:
    name = _text(value)
    if not name:
        return "Name is required"
    if len(name) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters long"
    if len(name) > NAME_MAX_LENGTH:
        return f"Name must be less than {NAME_MAX_LENGTH} characters"
    return None


def _check_email(value: Any) -> Optional[str]:
    email = _text(value)
    if not email:
        return "Email is required"
    if not EMAIL_PATTERN.match(email):
        return "Please enter a valid email address"
    return None


def _check_phone(value: Any) -> Optional[str]:
    if not _text(value):
        return "Phone number is required"
    if not PHONE_PATTERN.match(digits_only(value)):
        return "Please enter a valid 10-digit Indian mobile number starting with 6, 7, 8, or 9"
    return None


def _check_role(value: Any) -> Optional[str]:
    if value is None or value == "":
        return "Please select a service role"
    if value not in PROFILE_ROLES:
        return "Please select a valid service role"
    return None


def _max_length(field: str) -> Callable[[Any], Optional[str]]:
    limit = MAX_LENGTHS[field]

    def check(value: Any) -> Optional[str]:
        if len(_text(value)) > limit:
            return f"{_LABELS[field]} must be less than {limit} characters"
        return None

    return check


def _check_image(value: Any) -> Optional[str]:
    if not validate_image_url(value):
        return "Please enter a valid image URL"
    return None


FIELD_CHECKS: Dict[str, Callable[[Any], Optional[str]]] = {
    "name": _check_name,
    "email": _check_email,
    "phone": _check_phone,
    "role": _check_role,
    **{field: _max_length(field) for field in OPTIONAL_TEXT_FIELDS},
    **{field: _check_image for field in IMAGE_FIELDS},
}

# Checks run by validate(); image URLs are only checked by the gateways.
PROFILE_CHECKS = ["name", "email", "phone", "role", *OPTIONAL_TEXT_FIELDS]


def _check_password(data: Mapping[str, Any], errors: Dict[str, str]) -> None:
    if "password" in data:
        password = data["password"]
        if not isinstance(password, str):
            password = _text(password)
        if not password:
            errors["password"] = "Password is required"
        elif len(password) < PASSWORD_MIN_LENGTH:
            errors["password"] = f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        elif len(password) > PASSWORD_MAX_LENGTH:
            errors["password"] = f"Password must be less than {PASSWORD_MAX_LENGTH} characters"
    if "confirmPassword" in data and data.get("confirmPassword") != data.get("password"):
        errors["confirmPassword"] = "Passwords do not match"


def validate_fields(candidate: Optional[Mapping[str, Any]], fields: Iterable[str]) -> ValidationResult:
    """Run only the named field checks against ``candidate``."""
    data = normalize_keys(candidate)
    errors: Dict[str, str] = {}
    for field in fields:
        message = FIELD_CHECKS[field](data.get(field))
        if message:
            errors[field] = message
    return ValidationResult(valid=not errors, errors=errors)


def validate(candidate: Optional[Mapping[str, Any]]) -> ValidationResult:
    """Validate a full profile candidate, plus password fields when they are present."""
    data = normalize_keys(candidate)
    errors = validate_fields(data, PROFILE_CHECKS).errors
    _check_password(data, errors)
    return ValidationResult(valid=not errors, errors=errors)
