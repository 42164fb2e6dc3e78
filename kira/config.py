"""
Configuration module for Kira backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase Configuration
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    # Server-side key; requests carry a user id, not a user JWT
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # Google Gemini API
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Agent / pipeline limits
    MAX_TOOL_ROUNDS: int = int(os.getenv("MAX_TOOL_ROUNDS", "5"))
    MAX_CONCURRENT_DERIVATIONS: int = int(os.getenv("MAX_CONCURRENT_DERIVATIONS", "4"))

    # Carbon tax rate (RM per tonne CO2e) suggested to the model when the user gives none
    DEFAULT_CARBON_TAX_RATE: float = float(os.getenv("DEFAULT_CARBON_TAX_RATE", "30"))

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_KEY": cls.SUPABASE_KEY,
            "GOOGLE_API_KEY": cls.GOOGLE_API_KEY,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

        if cls.MAX_TOOL_ROUNDS < 1:
            raise ValueError("MAX_TOOL_ROUNDS must be at least 1.")
        if cls.MAX_CONCURRENT_DERIVATIONS < 1:
            raise ValueError("MAX_CONCURRENT_DERIVATIONS must be at least 1.")
        if cls.DEFAULT_CARBON_TAX_RATE < 0:
            raise ValueError("DEFAULT_CARBON_TAX_RATE cannot be negative.")

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            raise
