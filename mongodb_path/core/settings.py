from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")
    APP_NAME: str = "mongodb-path"
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "drupal"
    ENV: str = "dev"

    # Collections
    # Prepended to every logical collection name (per-test-run isolation).
    COLLECTION_PREFIX: str = ""
    ALIAS_COLLECTION: str = "url_alias"
    SEQUENCE_COLLECTION: str = "sequence"

    # Reporting
    ITEMS_PER_PAGE: int = 50

    # Logging
    LOG_LEVEL: str = "INFO"
    # Log every store call at DEBUG
    MONGO_DEBUG: bool = False

settings = Settings()
