"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./tutorhub.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    admin_token_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class PayoutSettings(BaseModel):
    """Withdrawal and earnings rules."""

    currencies: list[str] = Field(default_factory=lambda: ["USD", "INR"])
    default_platform_fee_percentage: Decimal = Field(default=Decimal("10"), ge=0, le=100)
    recent_bookings_limit: int = 5
    weekly_window_days: int = 7


class RazorpaySettings(BaseModel):
    key_id: str = ""
    key_secret: str = ""
    receipt_prefix: str = "th"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    sql_level: str = "WARNING"


class CorsSettings(BaseModel):
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "TutorHub Payout Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    payouts: PayoutSettings = PayoutSettings()
    razorpay: RazorpaySettings = RazorpaySettings()
    logging: LoggingSettings = LoggingSettings()
    cors: CorsSettings = CorsSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def supported_currencies(self) -> frozenset[str]:
        return frozenset(code.upper() for code in self.payouts.currencies)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
