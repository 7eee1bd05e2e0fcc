from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ucms.core.config import ACCESS_TOKEN_EXPIRE
from ucms.core.current_user import get_current_user
from ucms.core.deps import get_db
from ucms.core.errors import AuthError, BadRequestError
from ucms.core.security import create_access_token, hash_password, verify_password
from ucms.models.user import STUDENT, User
from ucms.schemas.auth import AuthResponse, LoginRequest
from ucms.schemas.user import UserCreate, UserRead

router = APIRouter()


def _issue_token(user: User) -> dict:
    access_token = create_access_token(
        data={"sub": str(user.id), "role": user.role},
        expires_delta=ACCESS_TOKEN_EXPIRE,
    )
    return {"token": access_token, "token_type": "bearer", "user": user}


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "User already exists"},
    },
)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    email = payload.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise BadRequestError("User already exists")

    # self-registration only ever creates students
    user = User(
        name=payload.name.strip(),
        email=email,
        hashed_password=hash_password(payload.password),
        role=STUDENT,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError("User already exists")
    db.refresh(user)
    return _issue_token(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        401: {"description": "Invalid credentials"},
    },
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise AuthError("Invalid credentials")

    return _issue_token(user)


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
