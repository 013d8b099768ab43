import os
import dotenv

dotenv.load_dotenv(override=True)


class Config:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./portal.db")
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

    TRACKING_NUMBER_PREFIX: str = os.getenv("TRACKING_NUMBER_PREFIX", "SA")

    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "2022"))
    CORS_ORIGINS: list = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
