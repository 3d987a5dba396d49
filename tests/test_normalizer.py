"""
Tests for input normalization
"""

import pytest

from wifi_portal.core.exceptions import ValidationError
from wifi_portal.services.normalizer import (
    extract_social_handle,
    normalize_email,
    normalize_registration,
    normalize_update,
    trim_value,
    validate_phone,
)


class TestEmail:
    def test_lowercased_and_trimmed(self):
        assert normalize_email("  Foo.Bar@Example.COM ") == "foo.bar@example.com"

    def test_rejects_domain_without_dot(self):
        with pytest.raises(ValidationError) as exc:
            normalize_email("foo@bar")
        assert exc.value.field == "email"
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("email", ["", "   ", None, "no-at.example.com", "a b@c.d", "@example.com"])
    def test_rejects_malformed(self, email):
        with pytest.raises(ValidationError):
            normalize_email(email)


class TestPhone:
    @pytest.mark.parametrize("phone", ["12345678", "+502 5555-1234", "(01) 234-567-890", "123456789012"])
    def test_accepts_8_to_12_digits_with_any_formatting(self, phone):
        assert validate_phone(phone) == phone

    @pytest.mark.parametrize("phone", ["1234567", "+1 (234) 567-890-123", "abc", "12-34-56"])
    def test_rejects_out_of_range(self, phone):
        with pytest.raises(ValidationError) as exc:
            validate_phone(phone)
        assert exc.value.field == "phone"

    def test_keeps_submitted_formatting(self):
        assert validate_phone("  +502 5555-1234 ") == "+502 5555-1234"


class TestSocialHandles:
    @pytest.mark.parametrize("value, platform, expected", [
        ("https://www.facebook.com/maria.lopez", "facebook", "maria.lopez"),
        ("fb.com/maria.lopez", "facebook", "maria.lopez"),
        ("@maria.lopez", "facebook", "maria.lopez"),
        ("https://instagram.com/maria_lopez/", "instagram", "maria_lopez"),
        ("@maria_lopez", "instagram", "maria_lopez"),
        ("https://twitter.com/marialopez", "twitter", "marialopez"),
        ("https://x.com/marialopez", "twitter", "marialopez"),
        ("https://www.linkedin.com/in/maria-lopez-123/", "linkedin", "maria-lopez-123"),
        ("linkedin.com/company/acme", "linkedin", "acme"),
    ])
    def test_extracts_handle(self, value, platform, expected):
        assert extract_social_handle(value, platform) == expected

    def test_unmatched_input_returned_unchanged(self):
        assert extract_social_handle("María López", "facebook") == "María López"
        assert extract_social_handle("https://example.com/maria", "instagram") == "https://example.com/maria"

    @pytest.mark.parametrize("value, platform", [
        ("https://dropbox.com/foo", "twitter"),
        ("https://notinstagram.com/maria", "instagram"),
        ("myfacebook.com/maria", "facebook"),
        ("https://fakelinkedin.com/in/maria", "linkedin"),
    ])
    def test_lookalike_domains_returned_unchanged(self, value, platform):
        assert extract_social_handle(value, platform) == value

    def test_empty_input(self):
        assert extract_social_handle("", "twitter") == ""
        assert extract_social_handle(None, "twitter") == ""


class TestRegistrationPayload:
    def test_trims_nested_values(self):
        assert trim_value({"a": " x ", "b": [" y "], "c": {"d": " z "}}) == {"a": "x", "b": ["y"], "c": {"d": "z"}}

    def test_normalizes_fields(self):
        data = normalize_registration({
            "fullName": "  Ana Pérez ",
            "phone": " 5555 1234 ",
            "email": " ANA@Mail.com ",
            "instagram": "https://instagram.com/ana.perez",
            "twitter": "",
            "skills": [" carpintería ", "", "carpintería"],
            "location": {"department": " Guatemala ", "municipality": ""},
        })
        assert data["fullName"] == "Ana Pérez"
        assert data["email"] == "ana@mail.com"
        assert data["instagram"] == "ana.perez"
        assert "twitter" not in data
        assert data["skills"] == ["carpintería"]
        assert data["location"] == {"department": "Guatemala"}

    @pytest.mark.parametrize("missing", ["fullName", "phone", "email"])
    def test_required_fields(self, missing):
        payload = {"fullName": "Ana", "phone": "55551234", "email": "ana@mail.com"}
        payload[missing] = "   "
        with pytest.raises(ValidationError) as exc:
            normalize_registration(payload)
        assert exc.value.field == missing

    def test_update_checks_only_present_fields(self):
        assert normalize_update({"wifiNetwork": " Lobby "}) == {"wifiNetwork": "Lobby"}
        with pytest.raises(ValidationError):
            normalize_update({"email": "foo@bar"})
