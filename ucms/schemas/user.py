from datetime import datetime

from pydantic import EmailStr, Field

from ucms.schemas.base import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class UserRead(CamelModel):
    id: int
    name: str
    email: EmailStr
    role: str
    created_at: datetime | None = None


class UserBrief(CamelModel):
    id: int
    name: str
    email: EmailStr


class StudentRead(CamelModel):
    id: int
    name: str
    email: EmailStr
    created_at: datetime | None = None
