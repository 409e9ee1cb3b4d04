"""Tests for submission sanitization and validation rules."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.keylight.core.exceptions import ValidationError
from src.keylight.services.submission_rules import (
    REQUIRED_FIELDS,
    TRIMMED_FIELDS,
    sanitize_submission,
    submission_errors,
    validate_status,
    validate_submission,
)
from tests.helpers import submission_payload

pytestmark = pytest.mark.unit


class TestSanitize:
    def test_trims_and_lowercases(self):
        result = sanitize_submission(
            submission_payload(full_name="  Jane Buyer ", email_address="  Jane@Example.COM ")
        )

        assert result["full_name"] == "Jane Buyer"
        assert result["email_address"] == "jane@example.com"

    def test_fills_creation_defaults(self):
        payload = submission_payload()
        del payload["interested_in_preferred_lender"]
        del payload["needs_help_finding_land"]

        result = sanitize_submission(payload)

        assert result["status"] == "new"
        assert result["referral_source"] == "Ritz-Craft"
        assert result["interested_in_preferred_lender"] is False
        assert result["needs_help_finding_land"] is False

    def test_keeps_explicit_referral_source(self):
        result = sanitize_submission(submission_payload(referral_source="Home show"))
        assert result["referral_source"] == "Home show"

    def test_drops_none_values(self):
        result = sanitize_submission({**submission_payload(), "company_name": None})
        assert "company_name" not in result

    def test_does_not_mutate_input(self):
        payload = submission_payload(full_name="  Jane ")
        sanitize_submission(payload)
        assert payload["full_name"] == "  Jane "

    @given(
        values=st.dictionaries(
            st.sampled_from(TRIMMED_FIELDS),
            st.one_of(st.none(), st.text(max_size=30)),
        ),
        lender=st.one_of(st.none(), st.booleans()),
    )
    @settings(max_examples=100)
    def test_idempotent(self, values, lender):
        data = {**values, "interested_in_preferred_lender": lender}
        once = sanitize_submission(data)
        assert sanitize_submission(once) == once


class TestSubmissionErrors:
    def test_valid_payload_has_no_errors(self):
        assert submission_errors(sanitize_submission(submission_payload())) == []

    def test_empty_payload_reports_every_required_field(self):
        errors = submission_errors({})
        assert errors == [f"{field} is required" for field in REQUIRED_FIELDS]

    @given(missing=st.sets(st.sampled_from(REQUIRED_FIELDS), min_size=1))
    def test_reports_all_missing_fields_at_once(self, missing):
        payload = {k: v for k, v in submission_payload().items() if k not in missing}
        errors = submission_errors(payload)

        for field in missing:
            assert f"{field} is required" in errors

    def test_whitespace_only_is_missing(self):
        errors = submission_errors(submission_payload(full_name="   "))
        assert "full_name is required" in errors

    @pytest.mark.parametrize("email", ["plainaddress", "a@b", "a b@c.com", "@example.com"])
    def test_rejects_bad_email(self, email: str):
        errors = submission_errors(submission_payload(email_address=email))
        assert "email_address must be a valid email" in errors

    @pytest.mark.parametrize("phone", ["555-1234", "call me maybe", "555 123 456x"])
    def test_rejects_bad_phone(self, phone: str):
        errors = submission_errors(submission_payload(phone_number=phone))
        assert "phone_number must be a valid phone number" in errors

    @pytest.mark.parametrize("phone", ["5551234567", "+1 (555) 123-4567", "555.123.4567"])
    def test_accepts_phone_formats(self, phone: str):
        assert submission_errors(submission_payload(phone_number=phone)) == []

    def test_rejects_non_ascii_digits(self):
        errors = submission_errors(submission_payload(phone_number="٥٥٥١٢٣٤٥٦٧"))
        assert "phone_number must be a valid phone number" in errors

    def test_rejects_unknown_enum_value(self):
        errors = submission_errors(submission_payload(build_budget="1m_plus"))
        assert errors == [
            "build_budget must be one of: 200k_250k, 250k_350k, 350k_400k, 400k_500k, 500k_plus"
        ]

    def test_own_land_requires_lot_address(self):
        errors = submission_errors(submission_payload(lot_address="  "))
        assert errors == ["lot_address is required when land_status is own_land"]

    def test_need_land_with_help_requires_area(self):
        payload = submission_payload(
            land_status="need_land", lot_address=None, needs_help_finding_land=True
        )
        assert submission_errors(payload) == [
            "preferred_area_description is required when needs_help_finding_land is true"
        ]

    def test_need_land_without_help_needs_nothing_else(self):
        payload = submission_payload(
            land_status="need_land", lot_address=None, needs_help_finding_land=False
        )
        assert submission_errors(payload) == []

    def test_validate_submission_raises_with_details(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(submission_payload(email_address="nope", phone_number="1"))

        assert exc_info.value.message == "Validation failed"
        assert exc_info.value.details == [
            "email_address must be a valid email",
            "phone_number must be a valid phone number",
        ]


class TestValidateStatus:
    @pytest.mark.parametrize(
        "status", ["new", "reviewed", "qualified", "disqualified", "contacted"]
    )
    def test_accepts_known_statuses(self, status: str):
        assert validate_status(status) == status

    @pytest.mark.parametrize("status", ["archived", "NEW", "", None])
    def test_rejects_unknown(self, status):
        with pytest.raises(ValidationError, match="Status must be one of"):
            validate_status(status)
