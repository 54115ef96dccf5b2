# catalog/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from the environment and an optional .env file.

    ``environment`` set to ``"development"`` makes 500 responses carry a stack trace.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "Product Catalog API"
    version: str = "1.0.0"
    environment: str = "production"
    log_level: str = "INFO"
    access_log: bool = False
    host: str = "0.0.0.0"
    port: int = 8085
    seed_products: bool = True
    default_page_size: int = 10

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
