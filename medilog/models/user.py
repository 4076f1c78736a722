"""Pydantic models for the signed-in user and the auth request bodies."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class Role(str, Enum):
    PATIENT = "patient"
    CAREGIVER = "caregiver"


class User(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    role: Role


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    # Accepted for compatibility with the login form; the stored role wins.
    role: Optional[Role] = None


class GoogleLoginRequest(BaseModel):
    id_token: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    user: Optional[User]
    redirect: str
    # Also set as the session cookie; clients without cookies send it
    # back as "Authorization: Bearer <token>".
    session_token: Optional[str] = None
