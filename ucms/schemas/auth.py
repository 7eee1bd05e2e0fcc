from pydantic import EmailStr

from ucms.schemas.base import CamelModel
from ucms.schemas.user import UserRead


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserRead
