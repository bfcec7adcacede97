"""Unit tests for registration and account request bodies."""

import pytest
import pytest_check
from pydantic import ValidationError

from papercontest.api.schemas.accounts import ChangePasswordRequest, RegisterRequest
from papercontest.api.schemas.registrations import (
    CreateRegistrationRequest,
    RejectSubmissionRequest,
    UpdateInvoiceRequest,
)


@pytest.mark.unit
class TestRejectSubmissionRequest:
    """Test cases for RejectSubmissionRequest."""

    def test_reason_is_optional(self) -> None:
        """Test that an empty body is valid."""
        assert RejectSubmissionRequest().reason is None

    @pytest.mark.parametrize("reason", ["  off topic ", "   ", ""])
    def test_reason_kept_as_sent(self, reason: str) -> None:
        """Test that a supplied reason is kept verbatim, whitespace included."""
        request = RejectSubmissionRequest.model_validate({"reason": reason})

        assert request.reason == reason

    def test_unknown_fields_rejected(self) -> None:
        """Test that unexpected keys fail validation."""
        with pytest.raises(ValidationError):
            RejectSubmissionRequest.model_validate({"reason": "x", "score": 3})


@pytest.mark.unit
class TestCreateRegistrationRequest:
    """Test cases for CreateRegistrationRequest."""

    def test_camel_case_input(self) -> None:
        """Test that competitionId is read from the camelCase key."""
        request = CreateRegistrationRequest.model_validate(
            {"competitionId": "pedagogy-2024", "notes": "first entry"}
        )

        pytest_check.equal(request.competition_id, "pedagogy-2024")
        pytest_check.equal(request.notes, "first entry")

    @pytest.mark.parametrize("competition_id", ["", "   "])
    def test_blank_competition_rejected(self, competition_id: str) -> None:
        """Test that a blank competition identifier fails validation."""
        with pytest.raises(ValidationError):
            CreateRegistrationRequest.model_validate({"competitionId": competition_id})

    def test_notes_kept_as_sent(self) -> None:
        """Test that free-form notes are not trimmed."""
        request = CreateRegistrationRequest.model_validate(
            {"competitionId": "pedagogy-2024", "notes": " line one\n"}
        )

        assert request.notes == " line one\n"

    def test_competition_required(self) -> None:
        """Test that the competition identifier is required."""
        with pytest.raises(ValidationError):
            CreateRegistrationRequest.model_validate({})


@pytest.mark.unit
class TestUpdateInvoiceRequest:
    """Test cases for UpdateInvoiceRequest."""

    def test_minimal_body(self) -> None:
        """Test that only needInvoice is required."""
        request = UpdateInvoiceRequest.model_validate({"needInvoice": False})

        assert request.need_invoice is False
        assert request.invoice_title is None

    def test_full_body(self) -> None:
        """Test that every invoice field is read from its camelCase key."""
        request = UpdateInvoiceRequest.model_validate(
            {
                "needInvoice": True,
                "invoiceTitle": "No. 1 Middle School",
                "invoiceTaxNo": "91110000123456789X",
                "invoiceAddress": "1 School Road",
                "invoicePhone": "010-12345678",
                "invoiceEmail": "finance@school.example",
            }
        )

        pytest_check.equal(request.invoice_title, "No. 1 Middle School")
        pytest_check.equal(request.invoice_tax_no, "91110000123456789X")
        pytest_check.equal(request.invoice_email, "finance@school.example")

    @pytest.mark.parametrize(
        ("field", "max_length"),
        [
            ("invoiceTitle", 200),
            ("invoiceTaxNo", 50),
            ("invoiceAddress", 500),
            ("invoicePhone", 30),
            ("invoiceEmail", 100),
        ],
    )
    def test_length_limits(self, field: str, max_length: int) -> None:
        """Test that each text field accepts its limit and rejects one more."""
        UpdateInvoiceRequest.model_validate(
            {"needInvoice": True, field: "x" * max_length}
        )

        with pytest.raises(ValidationError):
            UpdateInvoiceRequest.model_validate(
                {"needInvoice": True, field: "x" * (max_length + 1)}
            )


@pytest.mark.unit
class TestChangePasswordRequest:
    """Test cases for ChangePasswordRequest."""

    @pytest.mark.parametrize("password", ["abcdef", "123456", "Abc!ef"])
    def test_valid_request(self, password: str) -> None:
        """Test that any password of six or more characters is accepted."""
        request = ChangePasswordRequest.model_validate(
            {"email": "author@example.com", "code": "123456", "newPassword": password}
        )

        assert request.new_password == password

    def test_password_kept_as_sent(self) -> None:
        """Test that surrounding whitespace is part of the password."""
        request = ChangePasswordRequest.model_validate(
            {"email": "author@example.com", "code": "1", "newPassword": "  Abc!ef  "}
        )

        assert request.new_password == "  Abc!ef  "

    @pytest.mark.parametrize("password", ["", "abcde"])
    def test_short_password_rejected(self, password: str) -> None:
        """Test that passwords under six characters fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            ChangePasswordRequest.model_validate(
                {"email": "author@example.com", "code": "1", "newPassword": password}
            )

        assert exc_info.value.errors()[0]["loc"] == ("newPassword",)

    def test_invalid_email_rejected(self) -> None:
        """Test that the email must be a valid address."""
        with pytest.raises(ValidationError):
            ChangePasswordRequest.model_validate(
                {"email": "not-an-email", "code": "1", "newPassword": "Abcdef"}
            )


@pytest.fixture
def registration_body() -> dict[str, str]:
    return {
        "name": "Li Hua",
        "email": "li.hua@example.com",
        "password": "Password123!",
        "institution": "No. 1 Primary School",
        "title": "Senior Teacher",
        "phone": "13800138000",
    }


@pytest.mark.unit
class TestRegisterRequest:
    """Test cases for RegisterRequest."""

    def test_valid_request(self, registration_body: dict[str, str]) -> None:
        """Test a complete account registration body."""
        request = RegisterRequest.model_validate(registration_body)

        pytest_check.equal(request.name, "Li Hua")
        pytest_check.equal(request.password, "Password123!")
        pytest_check.equal(request.phone, "13800138000")

    @pytest.mark.parametrize("password", ["abcdef", "Ab!", "123456789"])
    def test_weak_password_rejected(
        self, registration_body: dict[str, str], password: str
    ) -> None:
        """Test that passwords breaking the strength policy fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest.model_validate({**registration_body, "password": password})

        assert exc_info.value.errors()[0]["loc"] == ("password",)

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("name", "L"),
            ("name", "x" * 101),
            ("phone", "12800138000"),
            ("phone", "1380013800"),
            ("institution", ""),
            ("title", ""),
        ],
    )
    def test_invalid_fields_rejected(
        self, registration_body: dict[str, str], field: str, value: str
    ) -> None:
        """Test per-field length and format rules."""
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest.model_validate({**registration_body, field: value})

        assert exc_info.value.errors()[0]["loc"] == (field,)
