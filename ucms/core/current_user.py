from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ucms.core.deps import get_db
from ucms.core.errors import AuthError
from ucms.core.security import decode_access_token
from ucms.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError("Not authorized, no token")

    payload = decode_access_token(credentials.credentials)
    if payload is None or "sub" not in payload:
        raise AuthError("Not authorized, token failed")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthError("Not authorized, token failed")

    # token may outlive the account (e.g. a deleted student)
    user = db.get(User, user_id)
    if user is None:
        raise AuthError("Not authorized, user not found")
    return user
