from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "caMicroscope Document Store"

    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "camic"

    # Connection pool
    MONGODB_MAX_POOL_SIZE: int = 100
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 30000

    # Upper bound on parallel inserts issued by one duplication call
    DUPLICATION_CONCURRENCY: int = Field(default=10, ge=1)

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
