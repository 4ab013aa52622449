from typing import Literal, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "Grip Invest API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["local", "dev", "staging", "prod", "test"] = "local"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_ORIGINS: str = "*"      # CSV o '*'
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: SecretStr = SecretStr("")
    DB_CREATE_ALL: bool = False  # crea tablas al arrancar (local)

    # Auth
    JWT_SECRET: SecretStr = SecretStr("")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12
    RESET_CODE_TTL_MIN: int = 15

    # Mail (Resend)
    RESEND_API_KEY: SecretStr = SecretStr("")
    RESEND_API_URL: str = "https://api.resend.com/emails"
    MAIL_FROM: str = "noreply@gripinvest.com"

    # Investments
    MIN_INVESTMENT_FLOOR: float = 1000.0

    # -------- validators (presencia, formato) --------
    @field_validator("DATABASE_URL", "JWT_SECRET")
    @classmethod
    def _required_secret(cls, v, info):
        if v is None or (hasattr(v, "get_secret_value") and v.get_secret_value() == ""):
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        return v if not v or v.startswith("/") else f"/{v}"

    @field_validator("JWT_EXPIRES_MINUTES", "RESET_CODE_TTL_MIN")
    @classmethod
    def _ttl_positive(cls, v: int, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def _rounds_range(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return ["*"] if self.CORS_ORIGINS.strip() == "*" else [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def MAIL_ENABLED(self) -> bool:
        key = self.RESEND_API_KEY.get_secret_value()
        return bool(key) and key != "re_placeholder_key_replace_with_real_key"

settings = Settings()
