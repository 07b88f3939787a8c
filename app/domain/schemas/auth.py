"""Pydantic schemas for Auth."""

from pydantic import BaseModel

from app.domain.models.profile import UserProfile


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class SignupRequest(BaseModel):
    full_name: str
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: UserProfile


class LogoutResponse(BaseModel):
    signed_out: bool = True
    audited: bool
