from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="CHORE_SCHEDULE_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="CHORE_SCHEDULE_LOG_FILE")
    task_block_state: str = Field(
        default="FREE",
        validation_alias="CHORE_SCHEDULE_TASK_BLOCK_STATE",
        description="Dense slot state that chore-occupied (TASK) wire blocks decode into",
    )
    fallback_to_empty: bool = Field(
        default=True,
        validation_alias="CHORE_SCHEDULE_FALLBACK_TO_EMPTY",
        description="Load an empty schedule when the store cannot be read",
    )
    editor_history_limit: int = Field(
        default=100,
        ge=1,
        validation_alias="CHORE_SCHEDULE_EDITOR_HISTORY_LIMIT",
        description="Maximum undo steps kept by the schedule editor",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CHORE_SCHEDULE_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("task_block_state")
    @classmethod
    def validate_task_block_state(cls, value: str) -> str:
        """Validate that TASK blocks map onto one of the editable slot states."""
        valid_states = {"QUIET", "BUSY", "FREE"}
        upper_value = value.upper()
        if upper_value not in valid_states:
            logger.warning(f"Invalid TASK_BLOCK_STATE '{value}'. Valid states are: {', '.join(sorted(valid_states))}. Defaulting to FREE.")
            return "FREE"
        if upper_value != "FREE":
            logger.info(f"TASK wire blocks will decode as {upper_value} instead of FREE")
        return upper_value


settings = Settings()
