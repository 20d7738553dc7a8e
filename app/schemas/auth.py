import uuid
from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.base import ApiModel

class RegisterIn(ApiModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)

class LoginIn(ApiModel):
    email: EmailStr
    password: str = Field(min_length=1)

class ProfileUpdateIn(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None

class ChangePasswordIn(ApiModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)

class UserOut(ApiModel):
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime

class AuthOut(ApiModel):
    success: bool = True
    message: str
    token: str
    user: UserOut

class UserEnvelopeOut(ApiModel):
    success: bool = True
    user: UserOut

class UserMessageOut(UserEnvelopeOut):
    message: str
