import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# DEV default secret; set UCMS_SECRET_KEY in any real deployment.
SECRET_KEY = os.getenv("UCMS_SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("UCMS_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE = timedelta(
    minutes=int(os.getenv("UCMS_TOKEN_EXPIRE_MINUTES", "60"))
)

DATABASE_URL = os.getenv("UCMS_DATABASE_URL", f"sqlite:///{BASE_DIR}/ucms.db")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("UCMS_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("UCMS_LOG_LEVEL", "INFO").upper()

# Bootstrap admin, created on startup when both values are set
ADMIN_EMAIL = os.getenv("UCMS_ADMIN_EMAIL")
ADMIN_PASSWORD = os.getenv("UCMS_ADMIN_PASSWORD")
ADMIN_NAME = os.getenv("UCMS_ADMIN_NAME", "Administrator")

# Course defaults
DEFAULT_CAPACITY = 30
DEFAULT_CREDITS = 3
