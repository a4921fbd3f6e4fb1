from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./esg_advisor.db"

    # x-admin-key for catalogue writes; unset disables them
    ADMIN_KEY: str | None = None
    UDYAM_PEPPER: str = "esg-advisor-udyam-v1"

    LOG_LEVEL: str = "INFO"
    RECORD_RECOMMENDATIONS: bool = True
    AUTO_CREATE_TABLES: bool = False
    ENV: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
