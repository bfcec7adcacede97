"""Request bodies for the registration workflow."""

from pydantic import Field

from papercontest.api.schemas.base import RequestSchema


class CreateRegistrationRequest(RequestSchema):
    """Register the current user for a competition."""

    competition_id: str = Field(
        min_length=1,
        pattern=r"\S",
        description="Competition identifier",
        examples=["pedagogy-2024"],
    )
    notes: str | None = Field(default=None, description="Free-form remarks")


class RejectSubmissionRequest(RequestSchema):
    """Send a submitted paper back to its author."""

    reason: str | None = Field(
        default=None,
        description="Why the submission was returned (optional)",
        examples=["Please reformat the paper using the official template"],
    )


class UpdateInvoiceRequest(RequestSchema):
    """Invoice details for a registration fee."""

    need_invoice: bool = Field(description="Whether an invoice is required")
    invoice_title: str | None = Field(
        default=None, max_length=200, description="Invoice title (payer name)"
    )
    invoice_tax_no: str | None = Field(
        default=None, max_length=50, description="Taxpayer identification number"
    )
    invoice_address: str | None = Field(
        default=None, max_length=500, description="Invoice address"
    )
    invoice_phone: str | None = Field(
        default=None, max_length=30, description="Invoice contact phone"
    )
    invoice_email: str | None = Field(
        default=None,
        max_length=100,
        description="Mailbox that receives the electronic invoice",
    )
