import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ticketing.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Security configuration
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
)  # 24 hours

# Seat allocation
ENFORCE_ZONE_CAPACITY = _env_flag("ENFORCE_ZONE_CAPACITY")
SEAT_ALLOCATION_MAX_ATTEMPTS = int(os.getenv("SEAT_ALLOCATION_MAX_ATTEMPTS", "3"))

# Admin account seeded on startup
INITIAL_ADMIN_NAME = os.getenv("INITIAL_ADMIN_NAME", "Administrator")
INITIAL_ADMIN_EMAIL = os.getenv("INITIAL_ADMIN_EMAIL", "admin@ticketing.local")
INITIAL_ADMIN_PASSWORD = os.getenv("INITIAL_ADMIN_PASSWORD", "password.Admin")
