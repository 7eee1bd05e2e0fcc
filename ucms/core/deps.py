from ucms.db.session import SessionLocal


# every request that needs DB gets a fresh session; a failed request never
# leaves a half-applied transaction behind.
def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
