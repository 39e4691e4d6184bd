from __future__ import annotations

from pydantic import BaseModel, Field

from hazardboard.models import Role


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    username: str
    password: str


class AccountRead(BaseModel):
    id: str
    username: str
    role: Role

    model_config = {"from_attributes": True}
