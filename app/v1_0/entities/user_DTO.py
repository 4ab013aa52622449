from datetime import datetime
from typing import List, Optional
from app.v1_0.schemas.base import CamelModel


class UserDTO(CamelModel):
    """Public user view. Never carries the password hash."""
    id: str
    first_name: str
    last_name: Optional[str] = None
    email: str
    risk_appetite: str
    role: str = "user"
    created_at: Optional[datetime] = None


class PasswordFeedbackDTO(CamelModel):
    score: int
    feedback: List[str]


class AuthDTO(CamelModel):
    message: str
    token: str
    user: UserDTO


class SignupDTO(AuthDTO):
    password_feedback: PasswordFeedbackDTO


class MeDTO(CamelModel):
    user: UserDTO


class ProfileDTO(CamelModel):
    message: str
    user: UserDTO


class MessageDTO(CamelModel):
    message: str
