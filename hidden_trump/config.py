"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hidden_trump.constants import (
    GAME_END_LINGER,
    MAX_ROUNDS,
    NEXT_ROUND_DELAY,
    ROOM_CODE_LENGTH,
    TRICK_RESOLVE_DELAY,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    environment: str = Field(default="development", description="Environment")
    frontend_url: str = Field(default="http://localhost:5173", description="Frontend URL")
    log_level: str = Field(default="INFO", description="Log level for hidden_trump loggers")

    # Game Configuration
    max_rounds: int = Field(default=MAX_ROUNDS, ge=1, description="Full deals per game")
    trick_resolve_delay: float = Field(
        default=TRICK_RESOLVE_DELAY, ge=0, description="Pause before a full trick is scored"
    )
    next_round_delay: float = Field(
        default=NEXT_ROUND_DELAY, ge=0, description="Pause before the next deal"
    )
    game_end_linger: float = Field(
        default=GAME_END_LINGER, ge=0, description="Time a finished room stays open"
    )
    room_code_length: int = Field(default=ROOM_CODE_LENGTH, ge=4, description="Room code length")


# Global settings instance
settings = Settings()
