from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Union
from pydantic import field_validator
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Job Listing API"

    # Store Settings
    # One of: dynamodb, sql, memory
    STORE_BACKEND: str = "dynamodb"
    JOBLISTING_TABLE: str = "joblistings"

    # AWS Settings (DynamoDB backend)
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    DYNAMODB_ENDPOINT_URL: Optional[str] = None

    # Database Settings (sql backend)
    DATABASE_URL: str = "sqlite:///./joblistings.db"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # CORS Settings
    # Value of Access-Control-Allow-Origin on handler responses
    CORS_ALLOW_ORIGIN: str = "*"
    # Origins for the FastAPI middleware - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("STORE_BACKEND")
    @classmethod
    def normalize_store_backend(cls, v: str) -> str:
        return v.strip().lower()


settings = Settings()
