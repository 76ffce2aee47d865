import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./pharmacy.db")
    DATABASE_TYPE = os.getenv("DATABASE_TYPE", "sqlite")
    SQL_ECHO = _env_bool("SQL_ECHO", False)
    SQLITE_BUSY_TIMEOUT = float(os.getenv("SQLITE_BUSY_TIMEOUT", "30"))

    # Create missing tables on startup
    CREATE_TABLES = _env_bool("CREATE_TABLES", True)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # HTTP
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # Reject products that are already expired when they are created
    EXPIRY_CHECK_ENABLED = _env_bool("EXPIRY_CHECK_ENABLED", True)
