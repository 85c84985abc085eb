"""
Configuration settings for the Scheme Eligibility Wizard
"""
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_db_name: str = Field(default="schemes_db")
    trees_collection: str = Field(default="decision_trees")
    completions_collection: str = Field(default="wizard_completions")
    
    # Application Configuration
    app_name: str = Field(default="Scheme Eligibility Wizard")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")
    
    # API Configuration
    api_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:8080")
    
    # Wizard Configuration
    home_state_name: str = Field(default="Karnataka", description="State named in residency FAQ questions")
    faq_min_message_length: int = Field(default=10, ge=0)
    max_recommended_options: int = Field(default=6, ge=1)
    tree_cache_size: int = Field(default=128, ge=1)
    
    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
