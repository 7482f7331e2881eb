from pydantic_settings import BaseSettings, SettingsConfigDict


class DBSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SYNC_DATABASE_URL: str = "sqlite:///./shop_catalog.db"
    DB_ECHO: bool = False


settings = DBSettings()
