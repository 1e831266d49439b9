from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- DB ---
    DATABASE_URL: str = "sqlite:///./pickem.sqlite"

    # --- JWT ---
    JWT_SECRET: str = "change-me-survivor-pickem"
    JWT_ALG: str = "HS256"
    JWT_EXPIRE_MIN: int = 10080  # 7 days

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- Game rules ---
    # Activating a round (or game week) also activates its ancestors
    ACTIVATION_CASCADES_UPWARD: bool = False
    # Reject picks in the HTTP layer once the active game week deadline passed
    ENFORCE_PICK_DEADLINE: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
