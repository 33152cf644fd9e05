"""Configuration management for the homepantry application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Remembered grouping choices, handed to the grouping engine by the API layer
PANTRY_GROUP_BY: Final[str] = os.getenv('PANTRY_GROUP_BY', 'location')
SHOPPING_GROUP_BY: Final[str] = os.getenv('SHOPPING_GROUP_BY', 'category')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('HOMEPANTRY_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
