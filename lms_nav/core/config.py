from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Where remembered department selections live when SELECTION_STORE=sql
    DATABASE_URL: str = "sqlite:///./lms_nav.db"

    ENV: str = "dev"  # "dev" or "prod"
    LOG_LEVEL: str = "INFO"

    # "memory" or "sql"
    SELECTION_STORE: str = "memory"

    # Shown when the switch collaborator fails without a message
    SWITCH_ERROR_MESSAGE: str = "Failed to switch department"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
