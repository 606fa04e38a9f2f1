"""Client configuration.

Centralizes backend endpoints, default values and user-facing fallback
messages, plus the environment-driven settings used by the CLI.
"""

import os

from pydantic import BaseModel, Field

# Backend location
DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0  # Seconds, applied by the HTTP client

# Endpoint paths
CHAT_PATH = "/llm"
LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
LOGOUT_PATH = "/auth/logout"
PREFERENCES_PATH = "/api/preferences"
HEALTH_PATHS = {
    "server": "/health",
    "database": "/health/db",
    "llm": "/health/llm",
}

# Registration form validation
MIN_PASSWORD_LENGTH = 6

# Fallback messages shown when the backend gives none
CHAT_FAILED_MESSAGE = "Failed to get response"
CHAT_NETWORK_MESSAGE = "Network error. Please check if you're logged in."
NETWORK_MESSAGE = "Network error. Please try again."
LOGIN_FAILED_MESSAGE = "Login failed"
REGISTER_FAILED_MESSAGE = "Registration failed"
PREFERENCES_LOAD_FAILED_MESSAGE = "Failed to load preferences"
PREFERENCES_SAVE_FAILED_MESSAGE = "Failed to save preferences"


class ClientSettings(BaseModel):
    """Connection settings for the meal-planning backend."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Backend root URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    email: str | None = Field(default=None, description="Account email for automatic login")
    password: str | None = Field(default=None, description="Account password for automatic login")

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Build settings from environment variables.

        Environment variables:
            MEALCHAT_BASE_URL: Backend root URL (default: http://localhost:8080)
            MEALCHAT_TIMEOUT: Request timeout in seconds (default: 30)
            MEALCHAT_EMAIL: Account email
            MEALCHAT_PASSWORD: Account password

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        return cls(
            base_url=os.getenv("MEALCHAT_BASE_URL", DEFAULT_BASE_URL),
            timeout=os.getenv("MEALCHAT_TIMEOUT", str(DEFAULT_TIMEOUT)),
            email=os.getenv("MEALCHAT_EMAIL") or None,
            password=os.getenv("MEALCHAT_PASSWORD") or None,
        )
