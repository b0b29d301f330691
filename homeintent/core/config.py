"""
Configuration module - centralized settings for the entire service.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To point the service at a real database, set environment variables:
        export DEVICE_STORE=firebase
        export FIREBASE_DATABASE_URL=https://my-project-default-rtdb.firebaseio.com/
        export FIREBASE_AUTH_TOKEN=<database secret or id token>
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "Home Intent Dispatcher"

    DEBUG: bool = False

    # LOG_LEVEL: Level applied to the "homeintent" logger tree
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # INTENT EXTRACTION (LLM) SETTINGS
    # ---------------------------------------------------------------------------
    # INTENT_PROVIDER: Which LLM turns raw instructions into intents
    # - "ollama": local Ollama server (default, no API key needed)
    # - "gemini": Google Gemini through the google-genai SDK
    INTENT_PROVIDER: str = "ollama"

    OLLAMA_URL: str = "http://localhost:11434/api/generate"
    OLLAMA_MODEL: str = "phi3"

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # AI request timeout in seconds
    AI_REQUEST_TIMEOUT: int = 30

    # ---------------------------------------------------------------------------
    # DEVICE-STATE STORE SETTINGS
    # ---------------------------------------------------------------------------
    # DEVICE_STORE: Backend holding the device states
    # - "firebase": Firebase Realtime Database (REST API)
    # - "memory": in-process dict, handy for local development
    DEVICE_STORE: str = "firebase"

    # FIREBASE_DATABASE_URL: Root URL of the Realtime Database
    FIREBASE_DATABASE_URL: str = "https://iot-grio9-52213-default-rtdb.asia-southeast1.firebasedatabase.app/"

    # FIREBASE_AUTH_TOKEN: Sent as the "auth" query parameter when set
    FIREBASE_AUTH_TOKEN: str = ""

    # Store request timeout in seconds
    STORE_REQUEST_TIMEOUT: float = 10.0


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from homeintent.core.config import settings
settings = Settings()
