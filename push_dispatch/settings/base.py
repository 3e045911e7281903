from pydantic_settings import BaseSettings, SettingsConfigDict


class PushDispatchBaseSettings(BaseSettings):
    """Base for every settings section: reads the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
