from pydantic import BaseModel, EmailStr
from typing import Optional


class RegisterRequest(BaseModel):
    username: str
    email: EmailStr
    password: str
    display_name: Optional[str] = None


class LoginRequest(BaseModel):
    """Either ``username`` or ``email`` identifies the account."""
    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @property
    def login(self) -> str:
        return self.username or self.email or ""


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
