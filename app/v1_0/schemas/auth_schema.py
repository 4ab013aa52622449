from typing import Annotated, Literal, Optional
from email_validator import validate_email
from pydantic import AfterValidator, Field, field_validator
from .base import CamelModel

RiskAppetite = Literal["low", "moderate", "high"]


def _check_email(v: str) -> str:
    # valida sin normalizar: el email se guarda y compara tal cual
    validate_email(v, check_deliverability=False)
    return v


Email = Annotated[str, AfterValidator(_check_email)]


class SignupIn(CamelModel):
    """Signup payload. Password strength is scored by the service, not here."""
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100)
    email: Email
    password: str = Field(..., min_length=1, max_length=128)
    risk_appetite: RiskAppetite = "moderate"

    model_config = {
        "json_schema_extra": {
            "example": {
                "firstName": "Asha",
                "lastName": "Rao",
                "email": "asha@example.com",
                "password": "Str0ng!Pass",
                "riskAppetite": "moderate",
            }
        }
    }

    @field_validator("first_name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("First name is required")
        return v


class LoginIn(CamelModel):
    email: Email
    password: str = Field(..., min_length=1, description="Password is required")


class ForgotPasswordIn(CamelModel):
    email: Email


class ResetPasswordIn(CamelModel):
    email: Email
    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit reset code")
    new_password: str = Field(..., min_length=1, max_length=128)

    model_config = {
        "json_schema_extra": {
            "example": {"email": "asha@example.com", "code": "482913", "newPassword": "N3w!Secret"}
        }
    }


class ProfileUpdateIn(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    risk_appetite: Optional[RiskAppetite] = None
