from fastapi import Depends

from ucms.core.current_user import get_current_user
from ucms.core.errors import ForbiddenError
from ucms.models.user import ADMIN, STUDENT, User


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != ADMIN:
        raise ForbiddenError("Admin access required")
    return current_user


def require_student(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != STUDENT:
        raise ForbiddenError("Student access required")
    return current_user
