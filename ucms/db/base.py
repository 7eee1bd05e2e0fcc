# Import every model so Base.metadata knows all tables (create_all, Alembic).
from ucms.db.base_class import Base  # noqa: F401
from ucms.models import course, enrollment, result, user  # noqa: F401
