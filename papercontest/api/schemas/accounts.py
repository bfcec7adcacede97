"""Request bodies for account management."""

from pydantic import EmailStr, Field

from papercontest.api.schemas.base import RequestSchema
from papercontest.core.constants import MIN_PASSWORD_LENGTH
from papercontest.core.validators import StrongPassword

MAINLAND_MOBILE_PATTERN = r"^1[3-9]\d{9}$"


class RegisterRequest(RequestSchema):
    """Create a teacher account."""

    name: str = Field(min_length=2, max_length=100, examples=["Li Hua"])
    email: EmailStr = Field(examples=["li.hua@example.com"])
    password: StrongPassword = Field(examples=["Password123!"])
    institution: str = Field(
        min_length=1, description="School or employing institution"
    )
    title: str = Field(min_length=1, description="Professional title or post")
    phone: str = Field(
        pattern=MAINLAND_MOBILE_PATTERN,
        description="Mobile phone number",
        examples=["13800138000"],
    )


class ChangePasswordRequest(RequestSchema):
    """Reset a password with an emailed verification code."""

    email: EmailStr = Field(examples=["user@example.com"])
    code: str = Field(min_length=1, description="Email verification code")
    new_password: str = Field(
        min_length=MIN_PASSWORD_LENGTH, description="New password"
    )
