"""
Pydantic schemas for registration and login.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from scrooge_bank.models.enums import Role
from scrooge_bank.security import BCRYPT_MAX_BYTES


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_must_fit_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(
                f"password must be at most {BCRYPT_MAX_BYTES} bytes"
            )
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Returned by register and login."""
    user: UserResponse
    token: str
