from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    # Not EmailStr: a malformed username must get the same generic rejection as a wrong one
    username: str
    password: str


class LoginResponse(BaseModel):
    authenticated: bool
    message: str
    load_error: Optional[str] = None


class SessionResponse(BaseModel):
    authenticated: bool
