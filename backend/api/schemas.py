"""
Request and response bodies for the signup and login endpoints.

Every request field is optional at the schema level: presence is checked by
the handlers so that a missing field is a 400, not a 422.
"""
from typing import Optional

from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: Optional[str] = None
    age: Optional[float] = None
    email: Optional[str] = None
    role: Optional[str] = None
    image: Optional[str] = None

    def missing_fields(self):
        return [f for f in ("name", "age", "email", "role", "image") if not getattr(self, f)]


class LoginRequest(BaseModel):
    email: Optional[str] = None
    image: Optional[str] = None

    def missing_fields(self):
        return [f for f in ("email", "image") if not getattr(self, f)]


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    success: bool
    message: str
    role: Optional[str] = None
