from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = Field("sqlite+aiosqlite:///./tablegen.db")
    SQL_ECHO: bool = Field(False)

    # database | memory
    STORE_BACKEND: Literal["database", "memory"] = Field("database")
    SCRIPTS_KEY: str = Field("table-scripts")
    # Which field a save matches existing records on
    SCRIPT_UPSERT_KEY: Literal["table_name", "id"] = Field("table_name")

    LOG_LEVEL: str = Field("INFO")
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
