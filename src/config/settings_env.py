from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Development
    DEV_MODE: bool = Field(default=True, description="Enable debug mode")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./parking.db", description="Database connection URL")

    # FastAPI
    FASTAPI_HOST: str = Field(default="localhost", description="FastAPI host")
    FASTAPI_PORT: int = Field(default=8080, description="FastAPI port")

    # Parking Configuration
    TOTAL_SLOTS: int = Field(default=20, gt=0, description="Number of parking slots in the lot")
    STORAGE_KEY: str = Field(default="parkingSlots", description="Key the slot snapshot is stored under")


# Create settings instance
settings = Settings()
