from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/classroom_booking.db"

    # JWT
    secret_key: str = "classroom-booking-secret-key"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Bookable day shown on availability grids
    day_start: str = "08:00"
    day_end: str = "20:00"
    slot_minutes: int = 30

    seed_demo_data: bool = True
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CLASSROOM_BOOKING_",
        extra="ignore",
    )


settings = Settings()
