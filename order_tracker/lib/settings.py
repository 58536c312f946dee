"""
Application settings loaded from environment variables.
Uses pydantic-settings for validation and .env file support.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Application
    app_name: str = Field(default="Print Order Tracker", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_json: bool = Field(default=True, description="Emit logs as JSON lines")
    
    # Storage (host-side persistence of the order collection)
    storage_path: str = Field(
        default="data/orders.json",
        description="JSON file holding the order collection"
    )
    
    # Presentation defaults
    top_customers_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of top customers shown by the analytics endpoint"
    )
    name_suggestion_min_length: int = Field(
        default=4,
        ge=1,
        description="Minimum phone length before a known customer name is suggested"
    )
    
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",  # React dev server
            "http://localhost:5173",  # Vite dev server
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed to call the API from a browser"
    )


# Global settings instance
settings = Settings()
