import logging

from sqlalchemy.orm import Session

from ucms.core.config import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
from ucms.core.security import hash_password
from ucms.db.base import Base
from ucms.db.session import SessionLocal, engine
from ucms.models.user import ADMIN, User

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, email: str, password: str, name: str) -> User:
    """Create the bootstrap admin account if no user owns ``email`` yet."""
    user = db.query(User).filter(User.email == email.lower()).first()
    if user:
        return user

    user = User(
        name=name,
        email=email.lower(),
        hashed_password=hash_password(password),
        role=ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created bootstrap admin %s", user.email)
    return user


def init_db() -> None:
    Base.metadata.create_all(bind=engine)

    if ADMIN_EMAIL and ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            ensure_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NAME)
        finally:
            db.close()
