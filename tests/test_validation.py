"""
Tests for profile sanitization and validation (app.modules.profiles.validation).
"""

import pytest

from app.core.constants import PROFILE_ROLES
from app.modules.profiles.validation import (
    format_phone_number,
    sanitize,
    validate,
    validate_fields,
    validate_image_url,
)


def candidate(**overrides):
    data = {
        "name": "Al",
        "email": "al@example.com",
        "phone": "9876543210",
        "role": "Builder",
    }
    data.update(overrides)
    return data


class TestValidatePhone:
    """Phone must be a 10-digit Indian mobile number once non-digits are removed."""

    @pytest.mark.parametrize("phone", ["9876543210", "987-654-3210", "(987) 654 3210", "6000000000", "7123456789"])
    def test_accepts_valid_numbers(self, phone):
        result = validate(candidate(phone=phone))
        assert result.valid
        assert "phone" not in result.errors

    @pytest.mark.parametrize("phone", ["5123456789", "1234567890", "12345", "98765432101", "0987654321"])
    def test_rejects_invalid_numbers(self, phone):
        result = validate(candidate(phone=phone))
        assert not result.valid
        assert result.errors["phone"].startswith("Please enter a valid 10-digit")

    def test_missing_phone_is_required(self):
        result = validate(candidate(phone="  "))
        assert result.errors["phone"] == "Phone number is required"


class TestValidateRole:
    @pytest.mark.parametrize("role", PROFILE_ROLES)
    def test_accepts_every_enum_member(self, role):
        assert validate(candidate(role=role)).valid

    @pytest.mark.parametrize("role", ["builder", "BUILDER", "Architect", "All Roles"])
    def test_rejects_anything_else(self, role):
        result = validate(candidate(role=role))
        assert result.errors["role"] == "Please select a valid service role"

    def test_missing_role(self):
        result = validate(candidate(role=None))
        assert result.errors["role"] == "Please select a service role"


class TestValidateName:
    def test_two_characters_pass(self):
        assert validate(candidate(name="Al")).valid

    def test_one_character_fails(self):
        result = validate(candidate(name="A"))
        assert result.errors["name"] == "Name must be at least 2 characters long"

    def test_length_is_measured_after_trimming(self):
        result = validate(candidate(name="  A  "))
        assert "name" in result.errors

    def test_too_long(self):
        result = validate(candidate(name="x" * 101))
        assert result.errors["name"] == "Name must be less than 100 characters"

    def test_missing(self):
        assert validate(candidate(name="")).errors["name"] == "Name is required"


class TestValidateEmail:
    @pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "a b@c.com"])
    def test_rejects_bad_addresses(self, email):
        assert "email" in validate(candidate(email=email)).errors

    def test_accepts_simple_address(self):
        assert "email" not in validate(candidate(email="x@y.io")).errors


class TestValidateOptionalFields:
    @pytest.mark.parametrize("field,limit", [
        ("serviceName", 200), ("bio", 1000), ("location", 100), ("price", 50),
    ])
    def test_length_limits(self, field, limit):
        assert validate(candidate(**{field: "x" * limit})).valid
        result = validate(candidate(**{field: "x" * (limit + 1)}))
        assert field in result.errors

    def test_snake_case_keys_are_understood(self):
        result = validate(candidate(service_name="x" * 201))
        assert "serviceName" in result.errors


class TestValidatePassword:
    def test_password_not_checked_when_absent(self):
        assert "password" not in validate(candidate()).errors

    def test_password_present_but_empty(self):
        assert validate(candidate(password="")).errors["password"] == "Password is required"

    def test_password_too_short(self):
        assert "password" in validate(candidate(password="12345")).errors

    def test_password_too_long(self):
        assert "password" in validate(candidate(password="x" * 129)).errors

    def test_confirmation_must_match(self):
        result = validate(candidate(password="secret1", confirmPassword="secret2"))
        assert result.errors == {"confirmPassword": "Passwords do not match"}

    def test_matching_confirmation(self):
        assert validate(candidate(password="secret1", confirmPassword="secret1")).valid


class TestValidateCollectsAllErrors:
    def test_every_failing_field_is_reported(self):
        result = validate({"name": "A", "email": "bad", "phone": "123", "role": "builder", "bio": "x" * 1001})
        assert not result.valid
        assert set(result.errors) == {"name", "email", "phone", "role", "bio"}

    def test_empty_candidate(self):
        result = validate({})
        assert set(result.errors) == {"name", "email", "phone", "role"}

    def test_end_to_end_examples(self):
        assert validate(candidate(name="Al", phone="9876543210", role="Builder")).valid
        assert "name" in validate(candidate(name="A")).errors
        assert "phone" in validate(candidate(phone="1234567890")).errors


class TestValidateFields:
    def test_only_named_fields_are_checked(self):
        result = validate_fields({"phone": "123"}, ["phone"])
        assert list(result.errors) == ["phone"]

    def test_image_urls(self):
        result = validate_fields({"profileImage": "not a url", "bannerImage": "https://x.io/b.png"},
                                 ["profileImage", "bannerImage"])
        assert list(result.errors) == ["profileImage"]


class TestSanitize:
    def test_normalizes_fields(self):
        result = sanitize({
            "name": "  Priya  ",
            "email": " Priya@Example.COM ",
            "phone": "+91 98765-43210",
            "role": "Builder",
            "bio": "  Hello ",
        })
        assert result["name"] == "Priya"
        assert result["email"] == "priya@example.com"
        assert result["phone"] == "919876543210"
        assert result["bio"] == "Hello"

    def test_absent_fields_become_empty_strings(self):
        result = sanitize({"name": "Priya"})
        assert result["serviceName"] == ""
        assert result["profileImage"] == ""
        assert result["role"] == ""

    def test_never_raises_on_odd_input(self):
        assert sanitize(None)["name"] == ""
        assert sanitize({"phone": 9876543210})["phone"] == "9876543210"

    @pytest.mark.parametrize("raw", [["name"], "Priya", 42])
    def test_non_mapping_input_is_empty(self, raw):
        assert set(sanitize(raw).values()) == {""}

    def test_structured_values_become_blank(self):
        candidate = sanitize({"name": ["Priya"], "bio": {"text": "x"}})
        assert candidate["name"] == ""
        assert candidate["bio"] == ""

    def test_maps_snake_case_keys(self):
        assert sanitize({"service_name": " Plots "})["serviceName"] == "Plots"

    @pytest.mark.parametrize("raw", [
        {"name": "  A  b ", "email": "X@Y.Z ", "phone": " 98-76 ", "bio": None},
        {},
        {"phone": "abc", "price": " ₹ 500 "},
    ])
    def test_idempotent(self, raw):
        once = sanitize(raw)
        assert sanitize(once) == once


class TestDisplayHelpers:
    def test_format_phone_number(self):
        assert format_phone_number("9876543210") == "+91 98765 43210"
        assert format_phone_number("12345") == "12345"

    @pytest.mark.parametrize("url,ok", [
        ("", True), ("https://cdn.example.com/a.jpg", True), ("http://x.io", True),
        ("ftp://x.io/a", False), ("cdn.example.com/a.jpg", False),
    ])
    def test_validate_image_url(self, url, ok):
        assert validate_image_url(url) is ok
