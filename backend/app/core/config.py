from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env values must be in the environment before Settings() below is built
load_dotenv()

class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "tasktracker"
    MONGO_TASKS_COLLECTION: str = "tasks"
    MONGO_TIMEOUT_MS: int = 5000
    # Local development / tests without a MongoDB server
    USE_IN_MEMORY_STORE: bool = False

    # Must match the secret of the service that issues the access tokens
    JWT_SECRET_KEY: str = "super-secret-key"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

settings = Settings()
