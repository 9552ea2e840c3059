"""Configuration management for the Meal Plan service."""
import os
from dataclasses import dataclass, field
from typing import Final, List
from pathlib import Path

from dotenv import load_dotenv

from mealplan.infra import paths

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Generation service
OPENROUTER_API_KEY: Final[str] = os.getenv('OPENROUTER_API_KEY', '')
GENERATION_BASE_URL: Final[str] = os.getenv('GENERATION_BASE_URL', 'https://openrouter.ai/api/v1')
GENERATION_MODEL: Final[str] = os.getenv('GENERATION_MODEL', 'x-ai/grok-4-fast:free')
GENERATION_TIMEOUT: Final[float] = float(os.getenv('GENERATION_TIMEOUT', '60'))
# live | normal | loading
GENERATION_MODE: Final[str] = os.getenv('GENERATION_MODE', 'live').lower()

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '3000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
CORS_ORIGINS: Final[List[str]] = [
    origin.strip()
    for origin in os.getenv('CORS_ORIGINS', 'http://localhost:19006,http://localhost:8081').split(',')
    if origin.strip()
]

# Plan client / retry poller
PLAN_API_BASE_URL: Final[str] = os.getenv('PLAN_API_BASE_URL', f'http://localhost:{APP_PORT}')
PLAN_API_TIMEOUT: Final[float] = float(os.getenv('PLAN_API_TIMEOUT', '10'))
RETRY_MAX_ATTEMPTS: Final[int] = int(os.getenv('RETRY_MAX_ATTEMPTS', '20'))
RETRY_DELAY_SECONDS: Final[float] = float(os.getenv('RETRY_DELAY_SECONDS', '15'))

# File Paths
CATALOG_FILE: Final[Path] = Path(os.getenv('MEALPLAN_CATALOG_FILE', str(paths.CATALOG_FILE)))
USERS_FILE: Final[Path] = Path(os.getenv('MEALPLAN_USERS_FILE', str(paths.USERS_FILE)))
PROMPT_FILE: Final[Path] = Path(os.getenv('MEALPLAN_PROMPT_FILE', str(paths.PROMPT_FILE)))


@dataclass(frozen=True)
class Settings:
    """Snapshot of the configuration handed to factories.

    Tests build their own instance instead of patching module globals.
    """
    openrouter_api_key: str = OPENROUTER_API_KEY
    generation_base_url: str = GENERATION_BASE_URL
    generation_model: str = GENERATION_MODEL
    generation_timeout: float = GENERATION_TIMEOUT
    generation_mode: str = GENERATION_MODE
    catalog_file: Path = CATALOG_FILE
    users_file: Path = USERS_FILE
    prompt_file: Path = PROMPT_FILE
    plan_api_base_url: str = PLAN_API_BASE_URL
    plan_api_timeout: float = PLAN_API_TIMEOUT
    retry_max_attempts: int = RETRY_MAX_ATTEMPTS
    retry_delay_seconds: float = RETRY_DELAY_SECONDS
    cors_origins: List[str] = field(default_factory=lambda: list(CORS_ORIGINS))


def load_settings() -> Settings:
    return Settings()
