from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from .base import APIModel

EMAIL_MAX_LENGTH = 100


class PassengerRequest(APIModel):
    """Body of POST/PUT /api/passengers. Every field is required and may not be blank."""
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=4, max_length=50)
    address: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=15)
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def check_email_length(cls, v):
        """Runs before EmailStr so an oversize address is reported in characters."""
        if isinstance(v, str) and len(v.strip()) > EMAIL_MAX_LENGTH:
            raise ValueError(f"String should have at most {EMAIL_MAX_LENGTH} characters")
        return v


class PassengerResponse(APIModel):
    id: int
    name: str
    username: str
    address: str
    phone: str
    email: str
    created_at: datetime
