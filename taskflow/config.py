import os
from dataclasses import dataclass

SECRET_KEY = os.environ.get("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 1440))

# Read once at import by taskflow.database; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskflow.db")

# "development" echoes fault messages in 500 responses
ENVIRONMENT = os.environ.get("TASKFLOW_ENV", "production")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class Settings:
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: float = 1440
    environment: str = "production"
    log_level: str = "INFO"

    @property
    def debug(self) -> bool:
        return self.environment.lower() == "development"


def get_settings() -> Settings:
    """Settings built from the module constants above."""
    return Settings(
        secret_key=SECRET_KEY,
        algorithm=ALGORITHM,
        access_token_expire_minutes=ACCESS_TOKEN_EXPIRE_MINUTES,
        environment=ENVIRONMENT,
        log_level=LOG_LEVEL,
    )
