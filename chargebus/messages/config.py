from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class MessageSettings(BaseSettings):
    max_message_bytes: int = Field(262144, validation_alias="MAX_MESSAGE_BYTES", gt=0)
    log_ring_size: int = Field(200, validation_alias="LOG_RING_SIZE", gt=0)
    # Raw bytes rendered into failure logs
    log_preview_bytes: int = Field(64, validation_alias="LOG_PREVIEW_BYTES", ge=0)
    logger_name: str = Field("chargebus", validation_alias="LOGGER_NAME")
    log_propagate: bool = Field(True, validation_alias="LOG_PROPAGATE")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> MessageSettings:
    return MessageSettings()
